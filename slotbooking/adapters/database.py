"""
SQLAlchemy async engine and session setup.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from ..domain.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_url(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url)


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for ``url``.

    In-memory SQLite databases live inside a single connection, so they are
    pinned to one with ``StaticPool``.

    Raises:
        StorageError: If ``url`` is malformed or names an unknown driver
    """
    options = {"poolclass": StaticPool} if _is_memory_url(url) else {}
    try:
        return create_async_engine(url, echo=echo, **options)
    except SQLAlchemyError as exc:
        raise StorageError(f"Invalid database URL: {url}", exc) from exc


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables that do not exist yet.

    Raises:
        StorageError: If the database cannot be reached or the schema created
    """
    # Register the mapped tables on Base.metadata
    from . import orm  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as exc:
        logger.error("Failed to initialise database: %s", exc)
        raise StorageError("Failed to initialise database", exc) from exc


async def drop_db(engine: AsyncEngine) -> None:
    from . import orm  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
