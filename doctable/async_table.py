from __future__ import annotations

import asyncio
import inspect
from typing import Callable, Generic, TypeVar
from uuid import UUID

from .entries import Codec, TableEntry
from .documents import Document
from .interfaces import AsyncDocumentStore
from .registry import AsyncRegistry
from .result import Result
from .table import Batch, Sweep, decode_entry, entry_id_of, entry_key, log_skip

T = TypeVar("T", bound=TableEntry)


class AsyncTable(Generic[T]):
    """
    Non-blocking Table. Same ordering and failure semantics as Table.

    Every method is a coroutine; wrap it in asyncio.create_task() for a pending handle.
    Enumeration fetches run concurrently, so for_each calls back in completion order.
    """

    def __init__(self, name: str, codec: Codec[T], store: AsyncDocumentStore):
        self.name = name
        self.codec = codec
        self._store = store
        self.registry = AsyncRegistry(name, store)

    async def get_all_ids(self) -> list[UUID]:
        return await self.registry.list_ids()

    async def get_entry(self, entry_id: UUID) -> Result[T]:
        read = await self._store.get(entry_key(entry_id))
        return decode_entry(self.name, self.codec, entry_id, read)

    async def get_all(self) -> Batch[T]:
        ids = await self.get_all_ids()
        results = await asyncio.gather(*(self.get_entry(i) for i in ids))
        batch: Batch[T] = Batch()
        for entry_id, result in zip(ids, results):
            if result.is_ok:
                batch.items.append(result.unwrap())
            else:
                log_skip(self.name, entry_id, result)
                batch.skipped.append(entry_id)
        return batch

    async def for_each(self, callback: Callable[[T], object]) -> Sweep:
        """Invoke ``callback`` (plain or async) for each decoded entry as its fetch completes."""

        async def _fetch(entry_id: UUID) -> tuple[UUID, Result[T]]:
            return entry_id, await self.get_entry(entry_id)

        sweep = Sweep()
        ids = await self.get_all_ids()
        tasks = [asyncio.ensure_future(_fetch(i)) for i in ids]
        try:
            for next_done in asyncio.as_completed(tasks):
                entry_id, result = await next_done
                if not result.is_ok:
                    log_skip(self.name, entry_id, result)
                    sweep.skipped.append(entry_id)
                    continue
                outcome = callback(result.unwrap())
                if inspect.isawaitable(outcome):
                    await outcome
                sweep.delivered += 1
        finally:
            # A raising callback leaves fetches in flight; cancel and reap them.
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
        return sweep

    async def query(self, predicate: Callable[[T], bool]) -> Batch[T]:
        batch = await self.get_all()
        batch.items = [e for e in batch.items if predicate(e)]
        return batch

    async def insert_or_update(self, entry: T) -> Result[Document]:
        registered = await self.registry.add(entry.id)
        if not registered.is_ok:
            return registered.cast()
        return await self._store.set(entry_key(entry.id), self.codec.encode(entry))

    async def remove(self, id_or_entry: UUID | T) -> Result[int]:
        entry_id = entry_id_of(id_or_entry)
        unregistered = await self.registry.remove(entry_id)
        if not unregistered.is_ok:
            return unregistered.cast()
        return await self._store.delete(entry_key(entry_id))
