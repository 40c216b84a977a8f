"""Events API routes - drained and acknowledged by the event publisher."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from eventlog.domain.event.model import EventLogEntry, EventUpdate, FlowId
from eventlog.domain.event.service import EventLogService
from eventlog.domain.shared.uow import UoW


class EventListJSONResponse(JSONResponse):
    media_type = "application/x.eventlog.event-list+json"


router = APIRouter(
    prefix="/events",
    tags=["events"],
    route_class=DishkaRoute,
)


class EventResponse(BaseModel):
    """Single entry of the event log."""

    event_id: str
    event_type: str
    data_type: str
    data_op: str
    event_payload: str
    flow_id: str | None
    delivery_status: str
    error_count: int

    @classmethod
    def from_entry(cls, entry: EventLogEntry) -> "EventResponse":
        return cls(
            event_id=str(entry.id),
            event_type=entry.event_type,
            data_type=entry.data_type,
            data_op=entry.data_op.value,
            event_payload=entry.payload,
            flow_id=entry.flow_id,
            delivery_status=entry.status,
            error_count=entry.error_count,
        )


class EventListResponse(BaseModel):
    """Response for listing events."""

    events: list[EventResponse]
    next_cursor: str
    status: str | None
    limit: int
    sink_id: str


class EventUpdateRequest(BaseModel):
    event_id: str | int | None = None
    delivery_status: str | None = None


class EventUpdatesRequest(BaseModel):
    """Delivery statuses reported by the publisher."""

    events: list[EventUpdateRequest]


class EventUpdatesResponse(BaseModel):
    updated: int


class SnapshotResponse(BaseModel):
    event_type: str
    count: int


@router.get("", response_class=EventListJSONResponse)
async def list_events(
    service: FromDishka[EventLogService],
    cursor: str | None = Query(None, description="Cursor: return events after this position"),
    status: str | None = Query(None, description="Only return events with this status"),
    limit: int | None = Query(None, ge=1, le=1000, description="Maximum number of events"),
) -> EventListResponse:
    """List events in log order, starting after the cursor.

    Pass ``next_cursor`` from the previous response to continue.
    """
    page = await service.search_events(cursor=cursor, status=status, limit=limit)
    return EventListResponse(
        events=[EventResponse.from_entry(e) for e in page.entries],
        next_cursor=page.next_cursor,
        status=page.status,
        limit=page.limit,
        sink_id=page.sink_id,
    )


@router.patch("")
async def update_events(
    body: EventUpdatesRequest,
    service: FromDishka[EventLogService],
    uow: FromDishka[UoW],
) -> EventUpdatesResponse:
    """Apply delivery statuses. The whole batch is applied or none of it."""
    updates = [
        EventUpdate(
            event_id=None if e.event_id is None else str(e.event_id),
            delivery_status=e.delivery_status,
        )
        for e in body.events
    ]
    async with uow:
        updated = await service.update_events(updates)
    return EventUpdatesResponse(updated=updated)


@router.post("/snapshots/{event_type}", status_code=201)
async def create_snapshot(
    event_type: str,
    service: FromDishka[EventLogService],
    uow: FromDishka[UoW],
    flow_id: FromDishka[FlowId],
) -> SnapshotResponse:
    """Generate SNAPSHOT events for every current item of ``event_type``.

    Returns once the whole snapshot has been committed.
    """
    async with uow:
        count = await service.create_snapshot_events(event_type, flow_id)
    return SnapshotResponse(event_type=event_type, count=count)
