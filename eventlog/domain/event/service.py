"""EventLogService - the outbox engine.

Producers append events inside their own unit of work; a single publisher
drains the log with cursor-based searches and reports delivery statuses back
in batches.
"""

import logging
from collections.abc import Sequence

from eventlog.config import EventLogConfig
from eventlog.domain.event.batching import SnapshotBatcher
from eventlog.domain.event.cursor import CursorCodec
from eventlog.domain.event.model import (
    DataOperation,
    EventLogEntry,
    EventLogPage,
    EventPayload,
    EventStatus,
    EventUpdate,
)
from eventlog.domain.event.port.repository import EventLogRepository
from eventlog.domain.event.port.snapshot_provider import SnapshotProvider
from eventlog.domain.event.serializer import Serializer
from eventlog.domain.event.validation import validate_updates
from eventlog.domain.shared.error import UnknownEventIdError, ValidationError
from eventlog.domain.shared.service import Service

logger = logging.getLogger(__name__)


class EventLogService(Service):
    """Creates, searches and reconciles outbox entries.

    None of the methods commit. They run inside the caller's unit of work
    (one database session), so an event is committed together with the
    business change that produced it, and a failed batch leaves the log
    untouched.
    """

    _repo: EventLogRepository
    _codec: CursorCodec
    _serializer: Serializer
    _snapshot_provider: SnapshotProvider
    _settings: EventLogConfig

    async def fire_create_event(self, payload: EventPayload, flow_id: str | None) -> EventLogEntry:
        """Append a CREATE event for newly created domain data."""
        entry = self.create_entry(DataOperation.CREATE, payload, flow_id)
        return await self._repo.append(entry)

    async def fire_update_event(self, payload: EventPayload, flow_id: str | None) -> EventLogEntry:
        """Append an UPDATE event for changed domain data."""
        entry = self.create_entry(DataOperation.UPDATE, payload, flow_id)
        return await self._repo.append(entry)

    def create_entry(
        self, data_op: DataOperation, payload: EventPayload, flow_id: str | None
    ) -> EventLogEntry:
        """Build a NEW entry with the payload data in canonical form.

        Raises:
            SerializationError: If the payload data cannot be serialized.
        """
        return EventLogEntry(
            event_type=payload.event_type,
            data_type=payload.data_type,
            data_op=data_op,
            payload=self._serializer.serialize(payload.data),
            flow_id=flow_id,
            status=EventStatus.NEW,
        )

    async def search_events(
        self,
        cursor: str | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> EventLogPage:
        """Return the next page of entries after ``cursor``.

        Args:
            cursor: Token from a previous page, or None to start at the beginning.
            status: Only return entries with this status.
            limit: Page size. Defaults to the configured default_limit.

        Returns:
            The entries plus the cursor to pass on the next call. The cursor
            does not move when the page is empty.

        Raises:
            InvalidCursorError: If the cursor cannot be decoded.
            ValidationError: If limit is not positive.
        """
        after_id = self._codec.decode(cursor)
        if limit is None:
            limit = self._settings.default_limit
        if limit < 1:
            raise ValidationError(["limit must be >= 1"], field="limit")

        entries = await self._repo.query(after_id=after_id, status=status, limit=limit)

        last_id = max((e.id for e in entries if e.id is not None), default=after_id)
        return EventLogPage(
            entries=entries,
            next_cursor=self._codec.encode(last_id),
            status=status,
            limit=limit,
            sink_id=self._settings.sink_id,
        )

    async def update_events(self, updates: Sequence[EventUpdate]) -> int:
        """Apply delivery statuses reported by the publisher.

        The batch is all-or-nothing: if any item is malformed or refers to an
        unknown id, nothing is changed.

        Returns:
            Number of entries updated.

        Raises:
            ValidationError: If any item is malformed (lists every violation).
            UnknownEventIdError: If any id does not exist (lists every missing id).
        """
        status_by_id = validate_updates(updates)
        if not status_by_id:
            return 0

        found = await self._repo.find_by_ids(status_by_id.keys())

        missing = sorted(set(status_by_id) - set(found))
        if missing:
            logger.warning("Rejecting status update batch, unknown event ids: %s", missing)
            raise UnknownEventIdError(missing)

        for event_id, status in status_by_id.items():
            found[event_id].set_status(status)

        await self._repo.apply_status_updates(found.values())

        errors = sum(1 for s in status_by_id.values() if s == EventStatus.ERROR)
        logger.info("Updated %d events (%d reported as %s)", len(found), errors, EventStatus.ERROR)
        return len(found)

    async def create_snapshot_events(self, event_type: str, flow_id: str | None) -> int:
        """Append one SNAPSHOT event per item the snapshot provider yields.

        Items are inserted in batches of snapshot_batch_size. Batching bounds
        memory only: the whole run commits or rolls back as one unit.

        Returns:
            Number of entries created.
        """
        source = self._snapshot_provider.get_snapshot(event_type)
        batch_size = self._settings.snapshot_batch_size

        count = 0
        async for batch in SnapshotBatcher(source, batch_size):
            entries = [self.create_entry(DataOperation.SNAPSHOT, item, flow_id) for item in batch]
            await self._repo.append_all(entries)
            count += len(entries)
            logger.debug("Appended snapshot batch of %d for %s", len(entries), event_type)

        logger.info("Created %d snapshot events for %s (flow_id=%s)", count, event_type, flow_id)
        return count
