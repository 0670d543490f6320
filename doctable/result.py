from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Literal, TypeVar

from .errors import ResultError

T = TypeVar("T")
U = TypeVar("U")

ErrorKind = Literal["not_found", "decode", "store"]


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success/failure wrapper returned by every store-facing call.

    A failure carries a human-readable message and one of three kinds:
      - "not_found": absent key or empty value
      - "decode":    the value exists but is not the expected shape
      - "store":     transport or backend error
    """

    value: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=message, kind=kind)

    @property
    def is_ok(self) -> bool:
        return self.kind is None

    @property
    def is_not_found(self) -> bool:
        return self.kind == "not_found"

    def unwrap(self) -> T:
        if self.kind is not None:
            raise ResultError(self.kind, self.error or "")
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self.value if self.kind is None else default  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        if self.kind is not None:
            return Result(error=self.error, kind=self.kind)
        return Result.ok(fn(self.value))  # type: ignore[arg-type]

    def cast(self) -> "Result[U]":
        """Re-type a failure so it can be returned from a differently typed call."""
        return Result(error=self.error, kind=self.kind)
