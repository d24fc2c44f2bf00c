"""Discriminated result returned by command-style operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..errors import BoardError, ErrorKind

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Either a success payload or exactly one tagged error."""

    value: T | None = None
    error: BoardError | None = None

    @classmethod
    def ok_result(cls, value: T) -> OperationResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: BoardError) -> OperationResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        """Error kind, or None on success."""
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
