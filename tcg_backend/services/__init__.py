"""DB service layer.

- Routers should not build queries; they call this package.
- This layer owns transaction boundaries (``session.begin()``).
- CRUD helpers in tcg_backend.crud never commit.
"""
