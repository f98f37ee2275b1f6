from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .parse_result import ErrorKind

"""RawRow and FieldError models.

A RawRow is one physical spreadsheet data row keyed by header. It is created by
the reader and only ever replaced (never patched) by the row validator, which
recomputes ``errors`` and ``is_valid`` together.
"""

__all__ = [
    "Severity",
    "FieldError",
    "RawRow",
]


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"  # reserved, nothing emits it yet


@dataclass(frozen=True)
class FieldError:
    """One problem with one semantic field of a row.

    Attributes:
        field: Semantic field name (camelCase, e.g. "customerName")
        message: Human readable message ("amount invalid", "field not mapped", ...)
        severity: Only ERROR entries make a row invalid
        kind: Error taxonomy entry, used for the error log ``error_type``
    """
    field: str
    message: str
    severity: Severity = Severity.ERROR
    kind: ErrorKind | None = None


@dataclass(frozen=True)
class RawRow:
    """A spreadsheet data row before receipt generation.

    row_number is the 1-based sheet row number, so the first data row below a
    header in sheet row 1 is row 2.
    """
    row_number: int
    data: dict[str, Any]  # header -> raw cell value
    errors: tuple[FieldError, ...] = field(default=())
    is_valid: bool = True

    def get(self, header: str) -> Any:
        """Raw cell value for ``header``; missing headers read as absent (None)."""
        return self.data.get(header)
