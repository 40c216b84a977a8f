"""Tests for mapping event log errors to problem responses."""

from eventlog.application.api.v1.errors import map_event_log_error
from eventlog.domain.shared.error import (
    EventLogError,
    InvalidCursorError,
    InvalidEventIdError,
    NotFoundError,
    SerializationError,
    StorageUnavailableError,
    UnknownEventIdError,
    ValidationError,
)


class TestMapEventLogError:
    def test_validation_error_lists_violations(self):
        error = ValidationError(["a is empty", "b is empty"], field="events")

        exc = map_event_log_error(error)

        assert exc.status_code == 422
        assert exc.detail == {
            "code": "VALIDATION_ERROR",
            "message": "a is empty; b is empty",
            "violations": ["a is empty", "b is empty"],
            "field": "events",
        }

    def test_validation_error_lists_invalid_event_ids(self):
        error = ValidationError(
            ["invalid event id x", "invalid event id -1"],
            field="events",
            errors=[InvalidEventIdError("x"), InvalidEventIdError("-1")],
        )

        exc = map_event_log_error(error)

        assert exc.status_code == 422
        assert exc.detail["invalid_event_ids"] == ["x", "-1"]

    def test_validation_error_without_field(self):
        exc = map_event_log_error(ValidationError(["limit must be >= 1"]))
        assert "field" not in exc.detail

    def test_unknown_event_ids(self):
        exc = map_event_log_error(UnknownEventIdError([4, 99]))

        assert exc.status_code == 404
        assert exc.detail["code"] == "UNKNOWN_EVENT_ID"
        assert exc.detail["event_ids"] == [4, 99]

    def test_invalid_cursor(self):
        exc = map_event_log_error(InvalidCursorError("-1"))

        assert exc.status_code == 400
        assert exc.detail["cursor"] == "-1"

    def test_plain_not_found(self):
        assert map_event_log_error(NotFoundError("gone")).status_code == 404

    def test_serialization_error_is_server_error(self):
        exc = map_event_log_error(SerializationError("cannot serialize"))
        assert exc.status_code == 500

    def test_infrastructure_error_is_service_unavailable(self):
        exc = map_event_log_error(StorageUnavailableError("database down"))

        assert exc.status_code == 503
        assert exc.detail == {"code": "StorageUnavailableError", "message": "database down"}

    def test_unknown_error_type_falls_back_to_500(self):
        assert map_event_log_error(EventLogError("boom")).status_code == 500
