from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from .documents import Document


class TableEntry(BaseModel):
    """
    Base for entities stored in a table.

    The id is the storage key, so it is excluded from the stored document:
      users:            {"ids": ["<uuid>", ...]}
      "<uuid>":         {"name": "Ann"}
    """

    id: UUID = Field(default_factory=uuid4, frozen=True)

    def to_doc(self) -> Document:
        return self.model_dump(mode="json", exclude={"id"})


T = TypeVar("T", bound=TableEntry)
M = TypeVar("M", bound=TableEntry)


class Codec(Protocol[T]):
    def decode(self, entry_id: UUID, doc: Document) -> T:
        ...

    def encode(self, entry: T) -> Document:
        ...


class ModelCodec(Codec[M]):
    """Decodes documents by validating them against a TableEntry subclass."""

    def __init__(self, model: type[M]):
        self._model = model

    @property
    def model(self) -> type[M]:
        return self._model

    def decode(self, entry_id: UUID, doc: Document) -> M:
        payload: dict[str, Any] = dict(doc)
        payload["id"] = entry_id
        return self._model.model_validate(payload)

    def encode(self, entry: M) -> Document:
        return entry.to_doc()


class FunctionCodec(Codec[M]):
    """Wraps a caller-supplied ``(id, document) -> entry`` function."""

    def __init__(self, from_doc: Callable[[UUID, Document], M]):
        self._from_doc = from_doc

    def decode(self, entry_id: UUID, doc: Document) -> M:
        return self._from_doc(entry_id, doc)

    def encode(self, entry: M) -> Document:
        return entry.to_doc()

