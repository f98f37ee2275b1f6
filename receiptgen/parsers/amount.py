from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from ..models.cell import CellKind, classify_cell, is_nan_number
from ..models.parse_result import ErrorKind, ParseResult

"""Amount parser.

Accepts free-form spreadsheet formatting (currency prefixed, thousands
separated) without locale configuration:

    "₪1,234.50" -> 1234.5
    "$ 99"      -> 99.0
    "12.5 ILS"  -> 12.5  (leading number is taken)
"""

__all__ = [
    "AMOUNT_MISSING",
    "AMOUNT_INVALID",
    "parse_amount",
]

AMOUNT_MISSING = "amount missing"
AMOUNT_INVALID = "amount invalid"

# Currency symbols, thousands separators and all whitespace
_STRIP_RE = re.compile(r"[₪$€,\s]")
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(raw: Any) -> ParseResult[float | int | Decimal]:
    """Parse a raw cell into an amount.

    Numbers pass through unchanged (negative and zero included; there is no
    range check) unless they are NaN. Text is cleaned and its leading numeric
    part parsed as a float.
    """
    cell = classify_cell(raw)
    if cell.is_absent:
        return ParseResult.failure(AMOUNT_MISSING, ErrorKind.MISSING)
    if cell.kind is CellKind.NUMBER:
        if is_nan_number(cell.value):
            return ParseResult.failure(AMOUNT_INVALID, ErrorKind.INVALID)
        return ParseResult.success(cell.value)
    if cell.kind is CellKind.TEXT:
        cleaned = _STRIP_RE.sub("", cell.value)
        match = _LEADING_NUMBER_RE.match(cleaned)
        if match is None:
            return ParseResult.failure(AMOUNT_INVALID, ErrorKind.INVALID)
        return ParseResult.success(float(match.group(0)))
    # dates are never amounts
    return ParseResult.failure(AMOUNT_INVALID, ErrorKind.INVALID)
