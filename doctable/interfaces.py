from __future__ import annotations

from typing import Protocol

from .documents import Document
from .result import Result


class DocumentStore(Protocol):
    """
    Minimal key-value primitive: one JSON document persisted under each string key.

    Implementations never raise for missing keys, bad data or backend errors;
    they report them through the returned Result. One backend request per call, no retries.
    """

    def get(self, key: str) -> Result[Document]:
        """Fetch the document under ``key`` ("not_found" when absent or empty)."""
        ...

    def set(self, key: str, doc: Document) -> Result[Document]:
        """Overwrite ``key`` with ``doc``; echoes the written document."""
        ...

    def delete(self, key: str) -> Result[int]:
        """Remove ``key``; returns the number of removed keys (0 when absent)."""
        ...


class AsyncDocumentStore(Protocol):
    """Non-blocking form of DocumentStore with the same guarantees."""

    async def get(self, key: str) -> Result[Document]: ...
    async def set(self, key: str, doc: Document) -> Result[Document]: ...
    async def delete(self, key: str) -> Result[int]: ...
