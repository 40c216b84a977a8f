"""Centralized error transformation for API routes.

Maps event log errors (domain and infrastructure) to problem responses.
"""

import logging
from typing import Any

from fastapi import HTTPException

from eventlog.domain.shared.error import (
    DomainError,
    EventLogError,
    InfrastructureError,
    InvalidCursorError,
    InvalidEventIdError,
    NotFoundError,
    SerializationError,
    UnknownEventIdError,
    ValidationError,
)

logger = logging.getLogger(__name__)

PROBLEM_CONTENT_TYPE = "application/problem+json"

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    UnknownEventIdError: 404,
    ValidationError: 422,
    InvalidCursorError: 400,
    SerializationError: 500,
}


def map_event_log_error(error: EventLogError) -> HTTPException:
    """Map an event log error to an HTTPException.

    Args:
        error: The error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Infrastructure errors → 503 Service Unavailable
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError):
            detail["violations"] = error.violations
            if error.field is not None:
                detail["field"] = error.field
            invalid_ids = [e.event_id for e in error.errors if isinstance(e, InvalidEventIdError)]
            if invalid_ids:
                detail["invalid_event_ids"] = invalid_ids
        elif isinstance(error, UnknownEventIdError):
            detail["event_ids"] = error.event_ids
        elif isinstance(error, InvalidCursorError):
            detail["cursor"] = error.cursor
        elif isinstance(error, SerializationError):
            logger.error("Event data could not be serialized: %s", error.message)
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown EventLogError subclasses
    return HTTPException(status_code=500, detail=detail)
