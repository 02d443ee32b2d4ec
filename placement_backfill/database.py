"""Database engine and session management."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.orm import DeclarativeBase

from placement_backfill.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async database engine for a backfill run.

    Args:
        settings: Backfill settings

    Returns:
        AsyncEngine: The async SQLAlchemy engine
    """
    return create_async_engine(
        settings.sqlalchemy_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using them
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session maker bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Provide a single session that is always released.

    Commits are left to the caller. Any exception raised inside the block
    rolls the session back and is re-raised.

    Yields:
        AsyncSession: An async SQLAlchemy session

    Example:
        async with session_scope(session_maker) as session:
            await session.execute(update(Item).values(done=True))
            await session.commit()
    """
    session = session_maker()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
