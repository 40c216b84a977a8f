"""Bounded-size batching over lazy snapshot sources."""

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from itertools import batched


class SnapshotBatcher[T]:
    """Splits a finite, single-pass source into lists of at most ``size`` items.

    The source may be a plain iterable or an async iterable. Only one batch
    is held in memory at a time; the source is consumed as batches are
    requested.

    Example:
        async for batch in SnapshotBatcher(provider.get_snapshot("order"), 100):
            await repo.append_all([to_entry(item) for item in batch])
    """

    def __init__(self, source: Iterable[T] | AsyncIterable[T], size: int) -> None:
        if size < 1:
            raise ValueError("batch size must be >= 1")
        self._source = source
        self._size = size

    def __aiter__(self) -> AsyncIterator[list[T]]:
        if isinstance(self._source, AsyncIterable):
            return self._batch_async(self._source)
        return self._batch_sync(self._source)

    async def _batch_sync(self, source: Iterable[T]) -> AsyncIterator[list[T]]:
        for batch in batched(source, self._size):
            yield list(batch)

    async def _batch_async(self, source: AsyncIterable[T]) -> AsyncIterator[list[T]]:
        batch: list[T] = []
        async for item in source:
            batch.append(item)
            if len(batch) == self._size:
                yield batch
                batch = []
        if batch:
            yield batch
