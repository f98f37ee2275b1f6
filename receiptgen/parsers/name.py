from __future__ import annotations

from typing import Any

from ..models.cell import classify_cell
from ..models.parse_result import ErrorKind, ParseResult
from .text import cell_to_text

"""Customer name parser."""

__all__ = [
    "NAME_MISSING",
    "NAME_TOO_SHORT",
    "MIN_NAME_LENGTH",
    "parse_name",
]

NAME_MISSING = "name missing"
NAME_TOO_SHORT = "name too short"
MIN_NAME_LENGTH = 2


def parse_name(raw: Any) -> ParseResult[str]:
    """Return the trimmed customer name, or a failure when absent/too short."""
    cell = classify_cell(raw)
    if cell.is_absent:
        return ParseResult.failure(NAME_MISSING, ErrorKind.MISSING)
    name = cell_to_text(cell) or ""
    if len(name) < MIN_NAME_LENGTH:
        return ParseResult.failure(NAME_TOO_SHORT, ErrorKind.TOO_SHORT)
    return ParseResult.success(name)
