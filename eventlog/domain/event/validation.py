"""Structural validation of batch status updates."""

from collections.abc import Sequence

from eventlog.domain.event.model import EventUpdate, parse_event_id
from eventlog.domain.shared.error import DomainError, InvalidEventIdError, ValidationError

_FIELD_NULL_OR_EMPTY = "required field {} null or empty"


def field_null_or_empty(field: str) -> str:
    return _FIELD_NULL_OR_EMPTY.format(field)


def validate_updates(updates: Sequence[EventUpdate]) -> dict[int, str]:
    """Validate a batch of updates and build the id -> status map.

    Every item is checked before anything is raised, so the resulting
    ValidationError lists all violations of the batch, and carries an
    InvalidEventIdError for each id that is not a valid event id. When an id
    appears more than once the last status wins.

    Raises:
        ValidationError: If any item is malformed.
    """
    violations: list[str] = []
    errors: list[DomainError] = []
    status_by_id: dict[int, str] = {}

    for update in updates:
        if not update.delivery_status:
            violations.append(field_null_or_empty("events.delivery_status"))

        event_id = None
        if not update.event_id:
            violations.append(field_null_or_empty("events.event_id"))
        else:
            event_id = parse_event_id(update.event_id)
            if event_id is None:
                error = InvalidEventIdError(update.event_id)
                violations.append(error.message)
                errors.append(error)

        if event_id is not None and update.delivery_status:
            status_by_id[event_id] = update.delivery_status

    if violations:
        raise ValidationError(violations, field="events", errors=errors)

    return status_by_id
