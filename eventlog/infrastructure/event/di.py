"""Dependency injection provider for the outbox engine."""

from dishka import Provider, from_context, provide

from eventlog.config import Config
from eventlog.domain.event.cursor import CursorCodec
from eventlog.domain.event.model import FlowId
from eventlog.domain.event.port.repository import EventLogRepository
from eventlog.domain.event.port.snapshot_provider import SnapshotProvider
from eventlog.domain.event.serializer import JsonSerializer, Serializer
from eventlog.domain.event.service import EventLogService
from eventlog.util.di.scope import Scope


class EventLogProvider(Provider):
    """Provides the event log service and its collaborators.

    The codec, serializer and snapshot provider are APP-scoped singletons;
    the service is UOW-scoped because it works on the UOW's repository.
    """

    snapshot_provider = from_context(provides=SnapshotProvider, scope=Scope.APP)
    flow_id = from_context(provides=FlowId, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_codec(self) -> CursorCodec:
        return CursorCodec()

    @provide(scope=Scope.APP)
    def get_serializer(self) -> Serializer:
        return JsonSerializer()

    @provide(scope=Scope.UOW)
    def get_event_log_service(
        self,
        repo: EventLogRepository,
        codec: CursorCodec,
        serializer: Serializer,
        snapshot_provider: SnapshotProvider,
        config: Config,
    ) -> EventLogService:
        return EventLogService(repo, codec, serializer, snapshot_provider, config.event_log)
