"""Database engine and session factory creation."""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from eventlog.config import DatabaseConfig
from eventlog.domain.shared.error import StorageUnavailableError
from eventlog.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)


def _expand_sqlite_path(url: str) -> str:
    """Expand ~ in SQLite URLs and ensure parent directory exists."""
    if not url.startswith("sqlite") or ":memory:" in url or "///" not in url:
        return url

    # Extract path from URL (sqlite+aiosqlite:///path or sqlite:///path)
    prefix_end = url.index("///") + 3
    prefix = url[:prefix_end]
    path = url[prefix_end:]
    if not path:
        return url

    abs_path = os.path.abspath(os.path.expanduser(path))
    Path(abs_path).parent.mkdir(parents=True, exist_ok=True)

    return f"{prefix}{abs_path}"


def create_db_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create async database engine.

    Handles SQLite and PostgreSQL with appropriate settings.
    """
    url = _expand_sqlite_path(config.url)

    if url.startswith("sqlite") and ":memory:" in url:
        engine_kwargs: dict[str, Any] = {
            "echo": config.echo,
            # An in-memory database lives on one connection, shared by every session
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    elif url.startswith("sqlite"):
        # Default pool: one connection (and transaction) per session
        engine_kwargs = {"echo": config.echo}
    else:
        engine_kwargs = {
            "echo": config.echo,
            "pool_pre_ping": True,
            "pool_size": 5,
            "max_overflow": 10,
        }

    return create_async_engine(url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory for dependency injection."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables directly from metadata (SQLite/dev and tests)."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database schema ensured")


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver connection and operational failures as StorageUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error("Storage failure during %s: %s", operation, e.orig or e)
        raise StorageUnavailableError(f"storage unavailable during {operation}") from e
