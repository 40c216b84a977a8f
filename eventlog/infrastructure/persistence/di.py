from typing import AsyncIterable

from dishka import Provider, from_context, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from eventlog.config import Config
from eventlog.domain.event.port.repository import EventLogRepository
from eventlog.domain.shared.uow import UoW
from eventlog.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from eventlog.infrastructure.persistence.repository.event_log import (
    SQLAlchemyEventLogRepository,
)
from eventlog.infrastructure.persistence.uow import SQLAlchemyUoW
from eventlog.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work); closing it discards uncommitted work
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session

    uow = provide(SQLAlchemyUoW, scope=Scope.UOW, provides=UoW)
    event_log_repo = provide(
        SQLAlchemyEventLogRepository, scope=Scope.UOW, provides=EventLogRepository
    )
