from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tcg_backend.create_engine import engine
from tcg_backend.models.schemas import Base

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    expire_on_commit=False,
    bind=engine,
)


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request."""
    async with Session() as session:
        yield session


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create tables if not exists"""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
