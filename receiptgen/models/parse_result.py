from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

"""Explicit success/failure values returned by the field parsers.

A malformed cell is an expected outcome, so parsers return a ParseResult instead
of raising.
"""

__all__ = [
    "ErrorKind",
    "ParseResult",
]

T = TypeVar("T")


class ErrorKind(Enum):
    """Field-level error taxonomy."""
    MISSING = "missing"  # value absent / empty
    INVALID = "invalid"  # value present, failed type-specific parsing
    TOO_SHORT = "too_short"  # name below minimum length
    NOT_MAPPED = "not_mapped"  # no header assigned to a required field

    @property
    def error_type(self) -> str:
        """UPPER_SNAKE form used in the JSON Lines error log."""
        return self.value.upper()


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    value: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def success(value: T) -> ParseResult[T]:
        return ParseResult(value=value)

    @staticmethod
    def failure(error: str, kind: ErrorKind) -> ParseResult[T]:
        return ParseResult(error=error, kind=kind)
