from __future__ import annotations

import logging
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from .documents import Document
from .interfaces import AsyncDocumentStore, DocumentStore
from .result import Result

logger = logging.getLogger(__name__)


class RegistryDoc(BaseModel):
    """
    The registry document stored under the table name:
      { "ids": ["<uuid>", ...] }   insertion ordered, no duplicates
    """

    ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_store_doc(cls, doc: Document, table: str = "") -> "RegistryDoc":
        """Validate, then rewrite ids in canonical UUID form; malformed ids are dropped."""
        record = cls.model_validate(doc)
        canonical: list[str] = []
        for raw in record.ids:
            try:
                canonical.append(str(UUID(raw)))
            except ValueError:
                logger.warning("REGISTRY %s: dropping malformed id %r", table, raw)
        record.ids = list(dict.fromkeys(canonical))
        return record

    def to_store_doc(self) -> Document:
        return self.model_dump(mode="json")

    def parsed_ids(self) -> list[UUID]:
        return [UUID(raw) for raw in self.ids]


def _ids_from_read(table: str, read: Result[Document]) -> list[UUID]:
    if not read.is_ok:
        if not read.is_not_found:
            logger.warning("REGISTRY %s: treating as empty (%s)", table, read.error)
        return []
    try:
        return RegistryDoc.from_store_doc(read.unwrap(), table).parsed_ids()
    except ValidationError as e:
        logger.warning("REGISTRY %s: corrupt registry treated as empty: %s", table, e)
        return []


def _doc_for_update(table: str, read: Result[Document]) -> Result[RegistryDoc]:
    """
    Starting point of a read-modify-write.

    Missing or corrupt registries start from empty; store failures abort the update
    so an unreachable store never gets its registry overwritten.
    """
    if not read.is_ok:
        if read.kind == "store":
            return read.cast()
        if read.kind == "decode":
            logger.warning("REGISTRY %s: overwriting unreadable registry (%s)", table, read.error)
        return Result.ok(RegistryDoc())
    try:
        return Result.ok(RegistryDoc.from_store_doc(read.unwrap(), table))
    except ValidationError as e:
        logger.warning("REGISTRY %s: overwriting corrupt registry: %s", table, e)
        return Result.ok(RegistryDoc())


class Registry:
    """
    Set of entry ids belonging to one table, persisted as a single document under the table name.

    add/remove are unguarded read-modify-write cycles: two concurrent writers can both read the
    same state and the later write wins, dropping the other's change.
    """

    def __init__(self, name: str, store: DocumentStore):
        self.name = name
        self._store = store

    def list_ids(self) -> list[UUID]:
        return _ids_from_read(self.name, self._store.get(self.name))

    def add(self, entry_id: UUID) -> Result[bool]:
        current = _doc_for_update(self.name, self._store.get(self.name))
        if not current.is_ok:
            return current.cast()
        record = current.unwrap()
        key = str(entry_id)
        if key in record.ids:
            return Result.ok(False)
        record.ids.append(key)
        return self._store.set(self.name, record.to_store_doc()).map(lambda _: True)

    def remove(self, entry_id: UUID) -> Result[bool]:
        current = _doc_for_update(self.name, self._store.get(self.name))
        if not current.is_ok:
            return current.cast()
        record = current.unwrap()
        key = str(entry_id)
        if key not in record.ids:
            return Result.ok(False)
        record.ids.remove(key)
        return self._store.set(self.name, record.to_store_doc()).map(lambda _: True)


class AsyncRegistry:
    """Awaitable form of Registry; add/remove complete once the registry write has finished."""

    def __init__(self, name: str, store: AsyncDocumentStore):
        self.name = name
        self._store = store

    async def list_ids(self) -> list[UUID]:
        return _ids_from_read(self.name, await self._store.get(self.name))

    async def add(self, entry_id: UUID) -> Result[bool]:
        current = _doc_for_update(self.name, await self._store.get(self.name))
        if not current.is_ok:
            return current.cast()
        record = current.unwrap()
        key = str(entry_id)
        if key in record.ids:
            return Result.ok(False)
        record.ids.append(key)
        written = await self._store.set(self.name, record.to_store_doc())
        return written.map(lambda _: True)

    async def remove(self, entry_id: UUID) -> Result[bool]:
        current = _doc_for_update(self.name, await self._store.get(self.name))
        if not current.is_ok:
            return current.cast()
        record = current.unwrap()
        key = str(entry_id)
        if key not in record.ids:
            return Result.ok(False)
        record.ids.remove(key)
        written = await self._store.set(self.name, record.to_store_doc())
        return written.map(lambda _: True)
