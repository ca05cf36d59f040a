"""Domain layer (pure logic).

- Keep card game rules and calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (randomness passed in as arguments if needed).
"""
