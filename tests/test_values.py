from __future__ import annotations

import asyncio
import logging

from doctable.memory_store import InMemoryDocumentStore
from doctable.threaded_store import ThreadedDocumentStore
from doctable.values import BOOLEAN, DOCUMENT, FLOAT, INT, LIST, STRING, AsyncStoredValue, StoredValue


def test_missing_value_falls_back_to_default(caplog):
    store = InMemoryDocumentStore()
    flag = StoredValue(store, "maintenance", BOOLEAN, False)

    with caplog.at_level(logging.ERROR, logger="doctable.values"):
        assert flag.get() is False
    assert "Failed to get maintenance" in caplog.text
    assert flag.fetch().is_not_found


def test_scalar_values_roundtrip(store):
    cases = [
        (BOOLEAN, True, False),
        (INT, 42, 0),
        (FLOAT, 2.5, 0.0),
        (STRING, "hello", ""),
        (LIST, ["a", 1, None], []),
        (DOCUMENT, {"nested": {"x": 1}}, {}),
    ]
    for codec, value, default in cases:
        stored = StoredValue(store, f"value:{codec.name}", codec, default)
        assert stored.set(value).is_ok
        assert stored.get() == value

    assert store.get("value:int").unwrap() == {"value": 42}
    assert store.get("value:document").unwrap() == {"nested": {"x": 1}}


def test_wrong_shape_is_a_decode_failure():
    store = InMemoryDocumentStore()
    store.set("count", {"value": True})
    store.set("ratio", {"value": 3})

    count = StoredValue(store, "count", INT, 7)
    assert count.fetch().kind == "decode"
    assert count.get() == 7
    # ints are acceptable floats
    assert StoredValue(store, "ratio", FLOAT, 0.0).get() == 3.0


def test_async_stored_value():
    store = ThreadedDocumentStore(InMemoryDocumentStore())
    name = AsyncStoredValue(store, "name", STRING, "anonymous")

    async def _run():
        assert await name.get() == "anonymous"
        await name.set("Ann")
        assert (await name.fetch()).unwrap() == "Ann"
        return await name.get()

    assert asyncio.run(_run()) == "Ann"


def test_any_value_codec_error_is_a_decode_failure():
    from doctable.values import ValueCodec

    store = InMemoryDocumentStore()
    store.set("first", {"value": []})
    first = ValueCodec("first item", lambda doc: doc["value"][0], lambda v: {"value": [v]})
    stored = StoredValue(store, "first", first, "none")

    failed = stored.fetch()
    assert failed.kind == "decode"
    assert "IndexError" in (failed.error or "")
    assert stored.get() == "none"
