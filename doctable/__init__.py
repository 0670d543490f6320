from __future__ import annotations

from .async_table import AsyncTable
from .entries import Codec, FunctionCodec, ModelCodec, TableEntry
from .connection import RedisConnection
from .disk_store import DiskDocumentStore
from .documents import Document, require
from .errors import DocumentShapeError, ResultError
from .interfaces import AsyncDocumentStore, DocumentStore
from .memory_store import InMemoryDocumentStore
from .redis_store import AsyncRedisDocumentStore, RedisDocumentStore
from .registry import AsyncRegistry, Registry
from .result import ErrorKind, Result
from .settings import Settings, get_settings
from .table import Batch, Sweep, Table
from .threaded_store import ThreadedDocumentStore
from .values import AsyncStoredValue, StoredValue, ValueCodec

__all__ = [
    "AsyncDocumentStore",
    "AsyncRedisDocumentStore",
    "AsyncRegistry",
    "AsyncStoredValue",
    "AsyncTable",
    "Batch",
    "Codec",
    "DiskDocumentStore",
    "Document",
    "DocumentShapeError",
    "DocumentStore",
    "ErrorKind",
    "FunctionCodec",
    "InMemoryDocumentStore",
    "ModelCodec",
    "RedisConnection",
    "RedisDocumentStore",
    "Registry",
    "Result",
    "ResultError",
    "Settings",
    "StoredValue",
    "Sweep",
    "Table",
    "TableEntry",
    "ThreadedDocumentStore",
    "ValueCodec",
    "get_settings",
    "require",
]
