from __future__ import annotations

import threading

from .documents import Document, dump_document, parse_document
from .interfaces import DocumentStore
from .result import Result


class InMemoryDocumentStore(DocumentStore):
    """
    Single-process store keeping each document as JSON text.

    Every get decodes a fresh copy, so callers never share a mutable instance.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._guard = threading.Lock()
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Result[Document]:
        with self._guard:
            raw = self._data.get(key)
        return parse_document(key, raw)

    def set(self, key: str, doc: Document) -> Result[Document]:
        text = dump_document(doc)
        with self._guard:
            self._data[key] = text
        return Result.ok(doc)

    def delete(self, key: str) -> Result[int]:
        with self._guard:
            existed = self._data.pop(key, None) is not None
        return Result.ok(1 if existed else 0)

    def put_raw(self, key: str, text: str) -> None:
        """Store raw text under ``key`` as-is (useful for seeding corrupt data)."""
        with self._guard:
            self._data[key] = text

    def keys(self) -> list[str]:
        with self._guard:
            return sorted(self._data)

    def __contains__(self, key: object) -> bool:
        with self._guard:
            return key in self._data

    def __len__(self) -> int:
        with self._guard:
            return len(self._data)
