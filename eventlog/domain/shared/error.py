"""Error hierarchy for the event log.

Error layers:
- EventLogError: Base class for all event log errors
- DomainError: Caller mistakes and business rule violations (4xx responses)
- InfrastructureError: System-level failures like storage issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class EventLogError(Exception):
    """Base class for all event log errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (caller errors - typically 4xx)
# =============================================================================


class DomainError(EventLogError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed.

    Carries every violation found in the request, not just the first one.
    ``errors`` holds the per-item errors behind some of the violations.
    """

    def __init__(
        self,
        violations: list[str],
        field: str | None = None,
        errors: list[DomainError] | None = None,
    ) -> None:
        super().__init__("; ".join(violations), code="VALIDATION_ERROR")
        self.violations = list(violations)
        self.field = field
        self.errors = list(errors or [])


class InvalidCursorError(DomainError):
    """Cursor token could not be decoded."""

    def __init__(self, cursor: str) -> None:
        super().__init__(f"invalid cursor {cursor}", code="INVALID_CURSOR")
        self.cursor = cursor


class InvalidEventIdError(DomainError):
    """An event id in an update batch is not an integer the log can hold.

    Reported inside the batch's ValidationError, never raised on its own.
    """

    def __init__(self, event_id: str) -> None:
        super().__init__(f"invalid event id {event_id}", code="INVALID_EVENT_ID")
        self.event_id = event_id


class UnknownEventIdError(NotFoundError):
    """One or more event ids in an update batch do not exist."""

    def __init__(self, event_ids: list[int]) -> None:
        ids = ", ".join(str(i) for i in event_ids)
        super().__init__(f"unknown event id(s) {ids}", code="UNKNOWN_EVENT_ID")
        self.event_ids = list(event_ids)


class SerializationError(DomainError):
    """Event data could not be serialized to its canonical form."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(EventLogError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Database is unavailable or rejected the operation."""
