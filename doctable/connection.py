from __future__ import annotations

import logging
from typing import Any, TypeVar

import redis
import redis.asyncio

from .async_table import AsyncTable
from .entries import Codec, TableEntry
from .redis_store import AsyncRedisDocumentStore, RedisDocumentStore
from .settings import Settings, get_settings
from .table import Table
from .values import AsyncStoredValue, StoredValue, ValueCodec

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=TableEntry)
V = TypeVar("V")


def client_kwargs(settings: Settings) -> dict[str, Any]:
    """redis-py client arguments for ``settings`` (shared by the sync and asyncio clients)."""
    timeout = settings.redis_timeout_ms / 1000.0
    kwargs: dict[str, Any] = {
        "host": settings.redis_address,
        "port": settings.redis_port,
        "socket_timeout": timeout,
        "socket_connect_timeout": timeout,
        "decode_responses": True,
    }
    if settings.redis_database is not None:
        kwargs["db"] = settings.redis_database
    if settings.redis_username:
        kwargs["username"] = settings.redis_username
    if settings.redis_password:
        kwargs["password"] = settings.redis_password
    return kwargs


class RedisConnection:
    """
    Explicit handle on one Redis endpoint, passed to every table built from it.

    Holds a blocking and an asyncio client. Nothing connects until the first command.
    Close it with close()/aclose() or use it as a (sync or async) context manager;
    stores built from a closed connection report "Redis connection is closed".
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: Any | None = None,
        async_client: Any | None = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        kwargs = client_kwargs(self.settings)
        self.client = client if client is not None else redis.Redis(**kwargs)
        self.async_client = async_client if async_client is not None else redis.asyncio.Redis(**kwargs)
        self._closed = False
        logger.debug(
            "REDIS CONNECTION: %s:%s db=%s",
            self.settings.redis_address,
            self.settings.redis_port,
            self.settings.redis_database,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def store(self) -> RedisDocumentStore:
        return RedisDocumentStore(self)

    def async_store(self) -> AsyncRedisDocumentStore:
        return AsyncRedisDocumentStore(self)

    def table(self, name: str, codec: Codec[T]) -> Table[T]:
        return Table(name, codec, self.store())

    def async_table(self, name: str, codec: Codec[T]) -> AsyncTable[T]:
        return AsyncTable(name, codec, self.async_store())

    def value(self, key: str, codec: ValueCodec[V], default: V) -> StoredValue[V]:
        return StoredValue(self.store(), key, codec, default)

    def async_value(self, key: str, codec: ValueCodec[V], default: V) -> AsyncStoredValue[V]:
        return AsyncStoredValue(self.async_store(), key, codec, default)

    def close(self) -> None:
        """Close the blocking client. Use aclose() from async code to release both clients."""
        if self._closed:
            return
        self._closed = True
        self.client.close()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            self.client.close()
        await self.async_client.aclose()

    def __enter__(self) -> "RedisConnection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "RedisConnection":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
