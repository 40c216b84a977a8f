from abc import ABC, abstractmethod
from types import TracebackType


class UoW(ABC):
    """Unit of work: the transaction the event log and the caller's own writes share.

    Used as an async context manager; commits when the block succeeds and
    rolls back when it raises.
    """

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "UoW":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            await self.commit()
        else:
            await self.rollback()
