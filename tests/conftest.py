from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Callable
from uuid import UUID


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402

from doctable.documents import Document, require  # noqa: E402
from doctable.entries import FunctionCodec, TableEntry  # noqa: E402
from doctable.disk_store import DiskDocumentStore  # noqa: E402
from doctable.interfaces import DocumentStore  # noqa: E402
from doctable.memory_store import InMemoryDocumentStore  # noqa: E402
from doctable.result import Result  # noqa: E402


class User(TableEntry):
    name: str


def user_from_doc(entry_id: UUID, doc: Document) -> User:
    return User(id=entry_id, name=require(doc, "name", str))


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect the disk store's data directory to a temp dir so tests never touch real ./data.
    """
    data = tmp_path / "data"
    monkeypatch.setenv("DOCTABLE_DATA_DIR", str(data))
    return tmp_path


@pytest.fixture(params=["memory", "disk"])
def store(request: pytest.FixtureRequest, sandbox_project: Path) -> DocumentStore:
    if request.param == "memory":
        return InMemoryDocumentStore()
    return DiskDocumentStore()


@pytest.fixture
def user_codec() -> FunctionCodec[User]:
    return FunctionCodec(user_from_doc)


class FlakyStore:
    """Wraps a store and fails chosen (operation, key) pairs with a store error."""

    def __init__(self, inner: DocumentStore):
        self.inner = inner
        self.failing: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, str]] = []

    def fail(self, op: str, key: str) -> None:
        self.failing.add((op, key))

    def _blocked(self, op: str, key: str) -> bool:
        self.calls.append((op, key))
        return (op, key) in self.failing

    def get(self, key: str) -> Result[Document]:
        if self._blocked("get", key):
            return Result.fail("store", "connection refused")
        return self.inner.get(key)

    def set(self, key: str, doc: Document) -> Result[Document]:
        if self._blocked("set", key):
            return Result.fail("store", "connection refused")
        return self.inner.set(key, doc)

    def delete(self, key: str) -> Result[int]:
        if self._blocked("delete", key):
            return Result.fail("store", "connection refused")
        return self.inner.delete(key)


@pytest.fixture
def flaky_store() -> FlakyStore:
    return FlakyStore(InMemoryDocumentStore())


class FakeRedis:
    """Just enough of redis.Redis (decode_responses=True) for the document stores."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.down = False
        self.closed = False

    def _check(self) -> None:
        if self.down:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    def get(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._check()
        self.data[key] = value
        return True

    def delete(self, *keys: str) -> int:
        self._check()
        return sum(1 for k in keys if self.data.pop(k, None) is not None)

    def close(self) -> None:
        self.closed = True


class FakeAsyncRedis:
    """Async twin of FakeRedis sharing the same backing dict."""

    def __init__(self, sync: FakeRedis) -> None:
        self.sync = sync
        self.closed = False

    async def get(self, key: str) -> str | None:
        return self.sync.get(key)

    async def set(self, key: str, value: str) -> bool:
        return self.sync.set(key, value)

    async def delete(self, *keys: str) -> int:
        return self.sync.delete(*keys)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def fake_async_redis(fake_redis: FakeRedis) -> FakeAsyncRedis:
    return FakeAsyncRedis(fake_redis)


@pytest.fixture
def make_user() -> Callable[..., User]:
    def _make(name: str, **kwargs: Any) -> User:
        return User(name=name, **kwargs)

    return _make
