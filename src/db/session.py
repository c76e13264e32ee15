"""Async SQLAlchemy engine and per-request session."""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import get_settings


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for the given database URL."""
    return create_async_engine(database_url, echo=False, pool_pre_ping=True)


engine = build_engine(get_settings().database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session for one request.

    Unit of work: services flush() to surface constraint violations and
    database-generated values, and the commit happens once here at request
    end. Any exception rolls back everything the request did.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
