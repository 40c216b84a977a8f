from collections.abc import AsyncIterable, Iterable
from typing import Protocol

from eventlog.domain.event.model import EventPayload


class SnapshotProvider(Protocol):
    """Source of current-state payloads for snapshot runs.

    Implemented by the producing application. The returned sequence is
    consumed once, lazily, inside the snapshot transaction.
    """

    def get_snapshot(
        self, event_type: str
    ) -> Iterable[EventPayload] | AsyncIterable[EventPayload]: ...
