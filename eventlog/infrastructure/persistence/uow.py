from sqlalchemy.ext.asyncio import AsyncSession

from eventlog.domain.shared.uow import UoW
from eventlog.infrastructure.persistence.database import storage_errors


class SQLAlchemyUoW(UoW):
    """Unit of work over the session shared by the repositories of one UOW scope."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def commit(self) -> None:
        with storage_errors("commit"):
            await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
