from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, TypeVar
from uuid import UUID

from .entries import Codec, TableEntry
from .documents import Document
from .interfaces import DocumentStore
from .registry import Registry
from .result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=TableEntry)


@dataclass
class Batch(Generic[T]):
    """Decoded entries of an enumeration plus the ids whose fetch or decode failed."""

    items: list[T] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class Sweep:
    """Outcome of for_each: how many entries reached the callback and which ids were skipped."""

    delivered: int = 0
    skipped: list[UUID] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def entry_key(entry_id: UUID) -> str:
    return str(entry_id)


def entry_id_of(id_or_entry: UUID | TableEntry) -> UUID:
    return id_or_entry.id if isinstance(id_or_entry, TableEntry) else id_or_entry


def decode_entry(table: str, codec: Codec[T], entry_id: UUID, read: Result[Document]) -> Result[T]:
    if not read.is_ok:
        return read.cast()
    try:
        return Result.ok(codec.decode(entry_id, read.unwrap()))
    except Exception as e:
        # Decoder errors fail this entry only.
        return Result.fail("decode", f"Could not decode {table} entry {entry_id}: {type(e).__name__}: {e}")


def log_skip(table: str, entry_id: UUID, result: Result[T]) -> None:
    logger.info("TABLE %s: skipping %s (%s: %s)", table, entry_id, result.kind, result.error)


class Table(Generic[T]):
    """
    Blocking table of entries keyed by UUID.

    Writes touch two keys without a transaction. insert_or_update writes the registry first,
    so a failure in between leaves a ghost id (listed, no document); remove drops the registry
    id first, so a failure in between leaves an orphan document. Enumeration tolerates ghosts
    by skipping them.
    """

    def __init__(self, name: str, codec: Codec[T], store: DocumentStore):
        self.name = name
        self.codec = codec
        self._store = store
        self.registry = Registry(name, store)

    def get_all_ids(self) -> list[UUID]:
        return self.registry.list_ids()

    def get_entry(self, entry_id: UUID) -> Result[T]:
        read = self._store.get(entry_key(entry_id))
        return decode_entry(self.name, self.codec, entry_id, read)

    def get_all(self) -> Batch[T]:
        batch: Batch[T] = Batch()
        for entry_id in self.get_all_ids():
            result = self.get_entry(entry_id)
            if result.is_ok:
                batch.items.append(result.unwrap())
            else:
                log_skip(self.name, entry_id, result)
                batch.skipped.append(entry_id)
        return batch

    def for_each(self, callback: Callable[[T], object]) -> Sweep:
        sweep = Sweep()
        for entry_id in self.get_all_ids():
            result = self.get_entry(entry_id)
            if not result.is_ok:
                log_skip(self.name, entry_id, result)
                sweep.skipped.append(entry_id)
                continue
            callback(result.unwrap())
            sweep.delivered += 1
        return sweep

    def query(self, predicate: Callable[[T], bool]) -> Batch[T]:
        batch = self.get_all()
        batch.items = [e for e in batch.items if predicate(e)]
        return batch

    def insert_or_update(self, entry: T) -> Result[Document]:
        registered = self.registry.add(entry.id)
        if not registered.is_ok:
            return registered.cast()
        return self._store.set(entry_key(entry.id), self.codec.encode(entry))

    def remove(self, id_or_entry: UUID | T) -> Result[int]:
        entry_id = entry_id_of(id_or_entry)
        unregistered = self.registry.remove(entry_id)
        if not unregistered.is_ok:
            return unregistered.cast()
        return self._store.delete(entry_key(entry_id))
