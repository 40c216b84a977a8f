"""Global test fixtures."""

import os

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from eventlog.config import DatabaseConfig
from eventlog.infrastructure.persistence.database import (
    create_db_engine,
    create_schema,
    create_session_factory,
)

# Keep tests independent of a developer's local configuration
os.environ.pop("EVENTLOG_CONFIG_FILE", None)

MEMORY_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Per-test in-memory SQLite engine with the schema created."""
    engine = create_db_engine(DatabaseConfig(url=MEMORY_DB_URL))
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine):
    """Per-test session; uncommitted work is discarded at the end."""
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()
