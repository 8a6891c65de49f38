"""Root pytest configuration.

Test Structure:
    tests/
    ├── warden_identity/       # Identity engine tests
    │   ├── unit/              # Fast, isolated tests (mocked collaborators)
    │   └── integration/       # Tests against in-memory SQLite
    ├── warden/                # HTTP API and CLI tests
    └── warden_config/         # Settings tests

Integration tests run against ``sqlite+aiosqlite`` in memory, so nothing is
skipped by default.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import models to register them with IdentityBase.metadata
import warden_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from warden_config import clear_settings_cache
from warden_identity.infrastructure.persistence.sqlalchemy import IdentityBase

TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Whole seconds: JWT time claims are encoded at second precision
FIXED_NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure no cached settings leak between test modules."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def async_engine():
    """
    In-memory SQLite engine with all identity tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine):
    """Provide an isolated database session for each test."""
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session

        # Rollback any uncommitted changes
        await session.rollback()
