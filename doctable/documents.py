from __future__ import annotations

import json
from typing import Any, TypeVar

from .errors import DocumentShapeError
from .result import Result

# A JSON object: string keys, values are str/int/float/bool/None, nested dicts or lists.
Document = dict[str, Any]

T = TypeVar("T")


def parse_document(key: str, raw: str | bytes | None) -> Result[Document]:
    """
    Turn raw stored text into a document.

    Missing or blank text is "not_found"; anything that is not a JSON object is "decode".
    """
    if raw is None:
        return Result.fail("not_found", f"Store get with key {key} returned nothing")
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return Result.fail("decode", f"Value under {key} is not valid UTF-8")
    if not raw.strip():
        return Result.fail("not_found", f"Store get with key {key} returned nothing")
    try:
        doc = json.loads(raw)
    except ValueError:
        return Result.fail("decode", f"Could not convert value under {key} to a document: {raw[:80]!r}")
    if not isinstance(doc, dict):
        return Result.fail("decode", f"Value under {key} is a {type(doc).__name__}, not a document")
    return Result.ok(doc)


def dump_document(doc: Document) -> str:
    return json.dumps(doc, sort_keys=True, separators=(",", ":"))


def require(doc: Document, name: str, kind: type[T]) -> T:
    """
    Typed field accessor. Raises DocumentShapeError instead of defaulting.

    ``bool`` values never satisfy ``int``; ``int`` values satisfy ``float``.
    """
    if name not in doc:
        raise DocumentShapeError(f"document has no field {name!r}")
    value = doc[name]
    if kind is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)  # type: ignore[return-value]
    if kind is int and isinstance(value, bool):
        raise DocumentShapeError(f"field {name!r} is a bool, expected int")
    if not isinstance(value, kind):
        raise DocumentShapeError(f"field {name!r} is a {type(value).__name__}, expected {kind.__name__}")
    return value
