"""Unit tests for EventLogService with a mocked repository."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventlog.config import EventLogConfig
from eventlog.domain.event.cursor import CursorCodec
from eventlog.domain.event.model import (
    DataOperation,
    EventLogEntry,
    EventPayload,
    EventStatus,
    EventUpdate,
)
from eventlog.domain.event.serializer import JsonSerializer
from eventlog.domain.event.service import EventLogService
from eventlog.domain.shared.error import (
    InvalidCursorError,
    SerializationError,
    UnknownEventIdError,
    ValidationError,
)


def make_entry(event_id: int, status: str = EventStatus.NEW, error_count: int = 0) -> EventLogEntry:
    return EventLogEntry(
        id=event_id,
        event_type="order.created",
        data_type="order",
        data_op=DataOperation.CREATE,
        payload=f'{{"id":{event_id}}}',
        status=status,
        error_count=error_count,
    )


async def echo_append(entry: EventLogEntry) -> EventLogEntry:
    return entry.model_copy(update={"id": 1})


async def echo_append_all(entries: list[EventLogEntry]) -> list[EventLogEntry]:
    return list(entries)


@pytest.fixture
def mock_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.append.side_effect = echo_append
    repo.append_all.side_effect = echo_append_all
    return repo


@pytest.fixture
def snapshot_provider() -> MagicMock:
    return MagicMock()


@pytest.fixture
def settings() -> EventLogConfig:
    return EventLogConfig(default_limit=10, snapshot_batch_size=2, sink_id="orders-sink")


@pytest.fixture
def service(
    mock_repo: AsyncMock, snapshot_provider: MagicMock, settings: EventLogConfig
) -> EventLogService:
    return EventLogService(mock_repo, CursorCodec(), JsonSerializer(), snapshot_provider, settings)


class TestFireEvents:
    async def test_fire_create_event_appends_new_create_entry(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        payload = EventPayload(event_type="order.created", data_type="order", data={"id": 1})

        result = await service.fire_create_event(payload, flow_id="flow-1")

        mock_repo.append.assert_awaited_once()
        entry = mock_repo.append.await_args.args[0]
        assert entry.data_op == DataOperation.CREATE
        assert entry.status == EventStatus.NEW
        assert entry.error_count == 0
        assert entry.payload == '{"id":1}'
        assert entry.flow_id == "flow-1"
        assert entry.event_type == "order.created"
        assert entry.data_type == "order"
        assert result.id == 1

    async def test_fire_update_event_appends_update_entry(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        payload = EventPayload(event_type="order.updated", data_type="order", data={"id": 1})

        await service.fire_update_event(payload, flow_id=None)

        entry = mock_repo.append.await_args.args[0]
        assert entry.data_op == DataOperation.UPDATE
        assert entry.flow_id is None

    async def test_serialization_failure_appends_nothing(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        payload = EventPayload(event_type="order.created", data_type="order", data={"x": object()})

        with pytest.raises(SerializationError):
            await service.fire_create_event(payload, flow_id="flow-1")

        mock_repo.append.assert_not_awaited()


class TestSearchEvents:
    async def test_defaults_limit_and_starts_at_beginning(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        mock_repo.query.return_value = []

        page = await service.search_events()

        mock_repo.query.assert_awaited_once_with(after_id=None, status=None, limit=10)
        assert page.entries == []
        assert page.next_cursor == ""
        assert page.limit == 10
        assert page.sink_id == "orders-sink"

    async def test_next_cursor_is_highest_returned_id(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        mock_repo.query.return_value = [make_entry(4), make_entry(5), make_entry(9)]

        page = await service.search_events(cursor="3", status=EventStatus.NEW, limit=3)

        mock_repo.query.assert_awaited_once_with(after_id=3, status="NEW", limit=3)
        assert page.next_cursor == "9"
        assert page.status == "NEW"
        assert page.limit == 3

    async def test_empty_page_keeps_cursor(self, service: EventLogService, mock_repo: AsyncMock):
        mock_repo.query.return_value = []

        page = await service.search_events(cursor="12")

        assert page.next_cursor == "12"

    async def test_invalid_cursor_propagates(self, service: EventLogService, mock_repo: AsyncMock):
        with pytest.raises(InvalidCursorError):
            await service.search_events(cursor="not-a-cursor")

        mock_repo.query.assert_not_awaited()

    async def test_non_positive_limit_is_rejected(self, service: EventLogService):
        with pytest.raises(ValidationError):
            await service.search_events(limit=0)


class TestUpdateEvents:
    async def test_sets_status_and_persists(self, service: EventLogService, mock_repo: AsyncMock):
        entry = make_entry(1)
        mock_repo.find_by_ids.return_value = {1: entry}

        updated = await service.update_events([EventUpdate(event_id="1", delivery_status="submitted")])

        assert updated == 1
        assert entry.status == "submitted"
        assert entry.error_count == 0
        persisted = list(mock_repo.apply_status_updates.await_args.args[0])
        assert persisted == [entry]

    async def test_error_status_increments_error_count(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        entry = make_entry(1, status=EventStatus.ERROR, error_count=2)
        mock_repo.find_by_ids.return_value = {1: entry}

        await service.update_events([EventUpdate(event_id="1", delivery_status="ERROR")])

        assert entry.status == "ERROR"
        assert entry.error_count == 3

    async def test_unknown_id_aborts_whole_batch(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        first, second = make_entry(1), make_entry(2)
        mock_repo.find_by_ids.return_value = {1: first, 2: second}

        with pytest.raises(UnknownEventIdError) as exc_info:
            await service.update_events(
                [
                    EventUpdate(event_id="1", delivery_status="submitted"),
                    EventUpdate(event_id="2", delivery_status="ERROR"),
                    EventUpdate(event_id="99", delivery_status="submitted"),
                ]
            )

        assert exc_info.value.event_ids == [99]
        assert first.status == EventStatus.NEW
        assert second.status == EventStatus.NEW
        assert second.error_count == 0
        mock_repo.apply_status_updates.assert_not_awaited()

    async def test_validation_happens_before_any_lookup(
        self, service: EventLogService, mock_repo: AsyncMock
    ):
        with pytest.raises(ValidationError):
            await service.update_events([EventUpdate(event_id="x", delivery_status="")])

        mock_repo.find_by_ids.assert_not_awaited()

    async def test_empty_batch_is_a_no_op(self, service: EventLogService, mock_repo: AsyncMock):
        assert await service.update_events([]) == 0
        mock_repo.find_by_ids.assert_not_awaited()


class TestCreateSnapshotEvents:
    async def test_appends_snapshot_entries_in_batches(
        self,
        service: EventLogService,
        mock_repo: AsyncMock,
        snapshot_provider: MagicMock,
    ):
        snapshot_provider.get_snapshot.return_value = iter(
            EventPayload(event_type="order.created", data_type="order", data={"id": i})
            for i in range(5)
        )

        count = await service.create_snapshot_events("order.created", flow_id="flow-9")

        assert count == 5
        snapshot_provider.get_snapshot.assert_called_once_with("order.created")
        batch_sizes = [len(call.args[0]) for call in mock_repo.append_all.await_args_list]
        assert batch_sizes == [2, 2, 1]
        entries = [e for call in mock_repo.append_all.await_args_list for e in call.args[0]]
        assert all(e.data_op == DataOperation.SNAPSHOT for e in entries)
        assert all(e.flow_id == "flow-9" for e in entries)
        assert [e.payload for e in entries] == [f'{{"id":{i}}}' for i in range(5)]

    async def test_accepts_async_snapshot_source(
        self,
        service: EventLogService,
        mock_repo: AsyncMock,
        snapshot_provider: MagicMock,
    ):
        async def source() -> AsyncIterator[EventPayload]:
            for i in range(3):
                yield EventPayload(event_type="order.created", data_type="order", data={"id": i})

        snapshot_provider.get_snapshot.return_value = source()

        assert await service.create_snapshot_events("order.created", flow_id=None) == 3
        assert mock_repo.append_all.await_count == 2

    async def test_empty_snapshot_appends_nothing(
        self,
        service: EventLogService,
        mock_repo: AsyncMock,
        snapshot_provider: MagicMock,
    ):
        snapshot_provider.get_snapshot.return_value = iter(())

        assert await service.create_snapshot_events("order.created", flow_id=None) == 0
        mock_repo.append_all.assert_not_awaited()
