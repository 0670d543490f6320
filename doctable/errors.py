from __future__ import annotations


class ResultError(RuntimeError):
    """Raised by ``Result.unwrap()`` when the result holds a failure."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind


class DocumentShapeError(ValueError):
    """A present document does not have the shape a decoder expects."""
