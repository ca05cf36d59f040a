from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from tcg_backend.load_secrets import database_url


def build_engine(url: str = database_url) -> AsyncEngine:
    """Create the async engine for ``url``.

    SQLite files get a NullPool so that each session opens its own aiosqlite
    connection on the running event loop. Other backends keep a sized pool.
    """
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False, poolclass=NullPool)
    return create_async_engine(url, pool_size=20, max_overflow=20)


engine = build_engine()
