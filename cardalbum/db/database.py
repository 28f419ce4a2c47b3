"""
Database engine and session management.

Player state (coins, inventory, redeemed codes, album) is the only thing
persisted. The default store is a local SQLite file through aiosqlite; a
PostgreSQL URL works with the `postgres` extra installed.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardalbum.config import settings
from cardalbum.models.db import Base

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> dict[str, Any]:
    """
    Engine keyword arguments for a database URL.

    SQLite connections are local files, so pre-ping only applies to
    server databases.
    """
    options: dict[str, Any] = {"echo": settings.debug}
    if make_url(database_url).get_backend_name() != "sqlite":
        options["pool_pre_ping"] = True
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits the player-state write on success, rolls back on database errors.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def ping(session: AsyncSession) -> bool:
    """Whether the player-state store answers a trivial query."""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database ping failed: %s", e)
        return False
    return True


async def init_db() -> None:
    """Create the player-state table. Called once at application startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Player state store ready (%s)", make_url(settings.database_url).get_backend_name())
