"""Database initialization utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

# Import models to register with IdentityBase.metadata
import warden_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from warden_config.settings import get_settings
from warden_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase

logger = logging.getLogger(__name__)


def _get_engine(database_url: str | None = None) -> AsyncEngine:
    """Get the database engine for initialization."""
    return create_async_engine(
        database_url or get_settings().database_url,
        echo=False,
        pool_pre_ping=True,
    )


async def create_tables(database_url: str | None = None) -> None:
    """
    Create all identity tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = _get_engine(database_url)
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    await engine.dispose()
    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(database_url: str | None = None) -> None:
    """
    Drop all identity tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    engine = _get_engine(database_url)
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.drop_all)

    await engine.dispose()
    logger.info("Database tables dropped successfully")
