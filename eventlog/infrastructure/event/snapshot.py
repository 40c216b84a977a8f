"""Built-in snapshot providers."""

import logging
from collections.abc import Callable, Iterable, Iterator

from eventlog.domain.event.model import EventPayload

logger = logging.getLogger(__name__)


class EmptySnapshotProvider:
    """Used when the application registers no snapshot source: every snapshot is empty."""

    def get_snapshot(self, event_type: str) -> Iterator[EventPayload]:
        logger.warning("No snapshot provider configured, snapshot for %s is empty", event_type)
        return iter(())


class SnapshotRegistry:
    """Dispatches snapshot requests to per-event-type sources.

    Example:
        registry = SnapshotRegistry()
        registry.register("order.created", lambda: (to_payload(o) for o in orders.all()))
        app = create_app(snapshot_provider=registry)
    """

    def __init__(self) -> None:
        self._sources: dict[str, Callable[[], Iterable[EventPayload]]] = {}

    def register(self, event_type: str, source: Callable[[], Iterable[EventPayload]]) -> None:
        self._sources[event_type] = source

    def get_snapshot(self, event_type: str) -> Iterable[EventPayload]:
        source = self._sources.get(event_type)
        if source is None:
            logger.warning("No snapshot source registered for %s", event_type)
            return iter(())
        return source()
