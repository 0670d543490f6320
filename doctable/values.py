from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .documents import Document, require
from .interfaces import AsyncDocumentStore, DocumentStore
from .result import Result

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class ValueCodec(Generic[V]):
    """Converts a scalar to and from its stored document form."""

    name: str
    from_doc: Callable[[Document], V]
    to_doc: Callable[[V], Document]


def _wrapped(kind: type) -> Callable[[Document], Any]:
    def _decode(doc: Document) -> Any:
        return require(doc, "value", kind)

    return _decode


def _wrap(value: Any) -> Document:
    return {"value": value}


def _list_of(doc: Document) -> list[Any]:
    return list(require(doc, "value", list))


BOOLEAN: ValueCodec[bool] = ValueCodec("bool", _wrapped(bool), _wrap)
INT: ValueCodec[int] = ValueCodec("int", _wrapped(int), _wrap)
FLOAT: ValueCodec[float] = ValueCodec("float", _wrapped(float), _wrap)
STRING: ValueCodec[str] = ValueCodec("str", _wrapped(str), _wrap)
LIST: ValueCodec[list[Any]] = ValueCodec("list", _list_of, lambda v: {"value": list(v)})
DOCUMENT: ValueCodec[Document] = ValueCodec("document", dict, dict)


def _decode_value(key: str, codec: ValueCodec[V], read: Result[Document]) -> Result[V]:
    if not read.is_ok:
        return read.cast()
    try:
        return Result.ok(codec.from_doc(read.unwrap()))
    except Exception as e:
        return Result.fail("decode", f"Value under {key} is not a {codec.name}: {type(e).__name__}: {e}")


class StoredValue(Generic[V]):
    """
    A single typed value under a fixed key. get() falls back to ``default``
    (and logs) when the value is missing, malformed or the store is unreachable.
    """

    def __init__(self, store: DocumentStore, key: str, codec: ValueCodec[V], default: V):
        self.key = key
        self.codec = codec
        self.default = default
        self._store = store

    def fetch(self) -> Result[V]:
        return _decode_value(self.key, self.codec, self._store.get(self.key))

    def get(self) -> V:
        result = self.fetch()
        if result.is_ok:
            return result.unwrap()
        logger.error("Failed to get %s from store with error: %s", self.key, result.error)
        return self.default

    def set(self, value: V) -> Result[Document]:
        return self._store.set(self.key, self.codec.to_doc(value))


class AsyncStoredValue(Generic[V]):
    def __init__(self, store: AsyncDocumentStore, key: str, codec: ValueCodec[V], default: V):
        self.key = key
        self.codec = codec
        self.default = default
        self._store = store

    async def fetch(self) -> Result[V]:
        return _decode_value(self.key, self.codec, await self._store.get(self.key))

    async def get(self) -> V:
        result = await self.fetch()
        if result.is_ok:
            return result.unwrap()
        logger.error("Failed to get %s from store with error: %s", self.key, result.error)
        return self.default

    async def set(self, value: V) -> Result[Document]:
        return await self._store.set(self.key, self.codec.to_doc(value))
