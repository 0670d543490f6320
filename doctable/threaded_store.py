from __future__ import annotations

import asyncio

from .documents import Document
from .interfaces import AsyncDocumentStore, DocumentStore
from .result import Result


class ThreadedDocumentStore(AsyncDocumentStore):
    """
    Async wrapper around any blocking DocumentStore.
    Uses asyncio.to_thread to avoid blocking the event loop on store I/O.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def wrapped(self) -> DocumentStore:
        return self._store

    async def get(self, key: str) -> Result[Document]:
        return await asyncio.to_thread(self._store.get, key)

    async def set(self, key: str, doc: Document) -> Result[Document]:
        return await asyncio.to_thread(self._store.set, key, doc)

    async def delete(self, key: str) -> Result[int]:
        return await asyncio.to_thread(self._store.delete, key)
