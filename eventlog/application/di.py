from dishka import AsyncContainer, make_async_container

from eventlog.config import Config
from eventlog.domain.event.port.snapshot_provider import SnapshotProvider
from eventlog.infrastructure.event.di import EventLogProvider
from eventlog.infrastructure.event.snapshot import EmptySnapshotProvider
from eventlog.infrastructure.persistence.di import PersistenceProvider
from eventlog.util.di.scope import Scope


def create_container(
    config: Config | None = None,
    snapshot_provider: SnapshotProvider | None = None,
) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()

    return make_async_container(
        PersistenceProvider(),
        EventLogProvider(),
        context={
            Config: config,
            SnapshotProvider: snapshot_provider or EmptySnapshotProvider(),
        },
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
