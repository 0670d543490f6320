from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from .documents import Document, dump_document, parse_document
from .interfaces import AsyncDocumentStore, DocumentStore
from .result import Result

if TYPE_CHECKING:
    from .connection import RedisConnection

logger = logging.getLogger(__name__)

CLOSED_MESSAGE = "Redis connection is closed"


def _error_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class RedisDocumentStore(DocumentStore):
    """Blocking store over the connection's redis-py client; documents are JSON strings."""

    def __init__(self, connection: "RedisConnection"):
        self._connection = connection

    def get(self, key: str) -> Result[Document]:
        if self._connection.closed:
            return Result.fail("store", CLOSED_MESSAGE)
        try:
            raw = self._connection.client.get(key)
        except RedisError as e:
            logger.debug("REDIS GET %s failed: %r", key, e)
            return Result.fail("store", _error_message(e))
        return parse_document(key, raw)

    def set(self, key: str, doc: Document) -> Result[Document]:
        if self._connection.closed:
            return Result.fail("store", CLOSED_MESSAGE)
        try:
            self._connection.client.set(key, dump_document(doc))
        except RedisError as e:
            logger.debug("REDIS SET %s failed: %r", key, e)
            return Result.fail("store", _error_message(e))
        return Result.ok(doc)

    def delete(self, key: str) -> Result[int]:
        if self._connection.closed:
            return Result.fail("store", CLOSED_MESSAGE)
        try:
            removed = self._connection.client.delete(key)
        except RedisError as e:
            logger.debug("REDIS DEL %s failed: %r", key, e)
            return Result.fail("store", _error_message(e))
        return Result.ok(int(removed))


class AsyncRedisDocumentStore(AsyncDocumentStore):
    """Non-blocking store over the connection's redis.asyncio client."""

    def __init__(self, connection: "RedisConnection"):
        self._connection = connection

    async def get(self, key: str) -> Result[Document]:
        if self._connection.closed:
            return Result.fail("store", CLOSED_MESSAGE)
        try:
            raw = await self._connection.async_client.get(key)
        except RedisError as e:
            logger.debug("REDIS GET %s failed: %r", key, e)
            return Result.fail("store", _error_message(e))
        return parse_document(key, raw)

    async def set(self, key: str, doc: Document) -> Result[Document]:
        if self._connection.closed:
            return Result.fail("store", CLOSED_MESSAGE)
        try:
            await self._connection.async_client.set(key, dump_document(doc))
        except RedisError as e:
            logger.debug("REDIS SET %s failed: %r", key, e)
            return Result.fail("store", _error_message(e))
        return Result.ok(doc)

    async def delete(self, key: str) -> Result[int]:
        if self._connection.closed:
            return Result.fail("store", CLOSED_MESSAGE)
        try:
            removed = await self._connection.async_client.delete(key)
        except RedisError as e:
            logger.debug("REDIS DEL %s failed: %r", key, e)
            return Result.fail("store", _error_message(e))
        return Result.ok(int(removed))
