"""Event log domain model."""

import re
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, NewType

from pydantic import Field

from eventlog.domain.shared.model.value import Entity, ValueObject

MAX_EVENT_ID = 2**63 - 1
"""Largest id the event_log id column (BIGINT) can hold."""

_DIGITS = re.compile(r"[0-9]+")

FlowId = NewType("FlowId", str)
"""Correlation id of the request that caused an event. Passed through, never interpreted."""


def _utc_now() -> datetime:
    return datetime.now(UTC)


def parse_event_id(text: str) -> int | None:
    """Parse a decimal event id.

    Returns None unless ``text`` is all ASCII digits and the value fits the id
    column.
    """
    if _DIGITS.fullmatch(text) is None:
        return None
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(MAX_EVENT_ID)):
        return None
    value = int(digits)
    return value if value <= MAX_EVENT_ID else None


class DataOperation(StrEnum):
    """Provenance of an entry. Not used for ordering or validation."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    SNAPSHOT = "SNAPSHOT"


class EventStatus(StrEnum):
    """Delivery statuses the log itself knows about.

    Any other string is a valid status set by the publisher.
    """

    NEW = "NEW"
    ERROR = "ERROR"


class EventPayload(ValueObject):
    """Domain data handed to the log by a producer or snapshot provider."""

    event_type: str
    data_type: str
    data: Any


class EventLogEntry(Entity):
    """A single entry of the outbox log.

    ``id`` is None until the entry has been appended; afterwards it is the
    store-assigned sequence number that defines the total order of the log.
    """

    id: int | None = None
    event_type: str
    data_type: str
    data_op: DataOperation
    payload: str  # Canonical JSON of the data at creation time
    flow_id: str | None = None
    status: str = EventStatus.NEW
    error_count: int = 0
    created_at: datetime = Field(default_factory=_utc_now)
    last_modified: datetime = Field(default_factory=_utc_now)

    def set_status(self, status: str) -> None:
        """Record a delivery status reported by the publisher.

        Every call that sets ERROR counts as one more error, whatever the
        previous status was.
        """
        self.status = status
        if status == EventStatus.ERROR:
            self.error_count += 1
        self.last_modified = _utc_now()


class EventUpdate(ValueObject):
    """One element of a batch status update, as received from the publisher."""

    event_id: str | None = None
    delivery_status: str | None = None


class EventLogPage(ValueObject):
    """Result of a cursor-based search."""

    entries: list[EventLogEntry]
    next_cursor: str
    status: str | None = None
    limit: int
    sink_id: str
