"""EventLogRepository port - persistence of the outbox log."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from eventlog.domain.event.model import EventLogEntry


class EventLogRepository(Protocol):
    """Append-only log of events, ordered by a store-assigned sequence id.

    All writes join the caller's open transaction; nothing is visible to
    other sessions until that transaction commits.
    """

    async def append(self, entry: EventLogEntry) -> EventLogEntry:
        """Insert one entry and return it with its assigned id."""
        ...

    async def append_all(self, entries: Sequence[EventLogEntry]) -> list[EventLogEntry]:
        """Insert a batch of entries. Ids are assigned in input order."""
        ...

    async def query(
        self,
        after_id: int | None = None,
        status: str | None = None,
        limit: int = 10,
    ) -> list[EventLogEntry]:
        """List entries in ascending id order.

        Args:
            after_id: Only return entries with an id strictly greater than this.
            status: Only return entries with exactly this status.
            limit: Maximum number of entries to return.
        """
        ...

    async def find_by_ids(self, ids: Iterable[int]) -> dict[int, EventLogEntry]:
        """Fetch entries by id. Missing ids are absent from the result."""
        ...

    async def apply_status_updates(self, entries: Iterable[EventLogEntry]) -> None:
        """Persist status, error_count and last_modified of the given entries."""
        ...
