"""SQLAlchemy adapter implementing EventLogRepository."""

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Row, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventlog.domain.event.model import DataOperation, EventLogEntry
from eventlog.domain.event.port.repository import EventLogRepository
from eventlog.infrastructure.persistence.database import storage_errors
from eventlog.infrastructure.persistence.tables import event_log_table

logger = logging.getLogger(__name__)


class SQLAlchemyEventLogRepository(EventLogRepository):
    """SQLAlchemy-backed event log.

    Works on the session of the current unit of work and never commits;
    the UoW commits once the caller's block succeeds.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, entry: EventLogEntry) -> EventLogEntry:
        """Insert one entry and return it with its assigned id."""
        stmt = insert(event_log_table).values(**self._to_row(entry))
        with storage_errors("append"):
            result = await self._session.execute(stmt)
        (event_id,) = result.inserted_primary_key  # type: ignore[misc]
        logger.debug("Appended event %s (%s, %s)", event_id, entry.event_type, entry.data_op)
        return entry.model_copy(update={"id": event_id})

    async def append_all(self, entries: Sequence[EventLogEntry]) -> list[EventLogEntry]:
        """Insert a batch of entries in one multi-row statement."""
        if not entries:
            return []

        stmt = insert(event_log_table).returning(
            event_log_table.c.id, sort_by_parameter_order=True
        )
        with storage_errors("append_all"):
            result = await self._session.execute(stmt, [self._to_row(e) for e in entries])
        ids = result.scalars().all()

        return [e.model_copy(update={"id": i}) for e, i in zip(entries, ids, strict=True)]

    async def query(
        self,
        after_id: int | None = None,
        status: str | None = None,
        limit: int = 10,
    ) -> list[EventLogEntry]:
        """List entries in ascending id order."""
        stmt = select(event_log_table).order_by(event_log_table.c.id.asc())

        if after_id is not None:
            stmt = stmt.where(event_log_table.c.id > after_id)

        if status is not None:
            stmt = stmt.where(event_log_table.c.status == status)

        stmt = stmt.limit(limit)

        with storage_errors("query"):
            result = await self._session.execute(stmt)
        return [self._to_entry(row) for row in result.fetchall()]

    async def find_by_ids(self, ids: Iterable[int]) -> dict[int, EventLogEntry]:
        """Fetch entries by id. Missing ids are absent from the result."""
        id_list = list(ids)
        if not id_list:
            return {}

        stmt = select(event_log_table).where(event_log_table.c.id.in_(id_list))
        with storage_errors("find_by_ids"):
            result = await self._session.execute(stmt)

        entries = (self._to_entry(row) for row in result.fetchall())
        return {e.id: e for e in entries if e.id is not None}

    async def apply_status_updates(self, entries: Iterable[EventLogEntry]) -> None:
        """Persist status, error_count and last_modified of the given entries."""
        for entry in entries:
            if entry.id is None:
                raise ValueError("cannot update an entry that was never appended")

            stmt = (
                update(event_log_table)
                .where(event_log_table.c.id == entry.id)
                .values(
                    status=entry.status,
                    error_count=entry.error_count,
                    last_modified=entry.last_modified,
                )
            )
            with storage_errors("apply_status_updates"):
                await self._session.execute(stmt)

    @staticmethod
    def _to_row(entry: EventLogEntry) -> dict[str, Any]:
        return {
            "status": entry.status,
            "event_type": entry.event_type,
            "data_type": entry.data_type,
            "data_op": entry.data_op.value,
            "event_body_data": entry.payload,
            "flow_id": entry.flow_id,
            "error_count": entry.error_count,
            "created_at": entry.created_at,
            "last_modified": entry.last_modified,
        }

    @staticmethod
    def _to_entry(row: Row[Any]) -> EventLogEntry:
        data = row._mapping
        return EventLogEntry(
            id=data["id"],
            status=data["status"],
            event_type=data["event_type"],
            data_type=data["data_type"],
            data_op=DataOperation(data["data_op"]),
            payload=data["event_body_data"],
            flow_id=data["flow_id"],
            error_count=data["error_count"],
            created_at=_as_utc(data["created_at"]),
            last_modified=_as_utc(data["last_modified"]),
        )


def _as_utc(value: datetime) -> datetime:
    """SQLite returns naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
