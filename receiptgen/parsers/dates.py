from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

import pandas as pd
from dateutil import parser as dtparser

from ..models.cell import CellKind, classify_cell
from ..models.parse_result import ErrorKind, ParseResult

"""Date parser.

Text patterns are tried in a fixed order and the first one that yields a real
calendar date wins:

1. DD[/-.]MM[/-.]YYYY
2. YYYY[/-.]MM[/-.]DD
3. DD[/-.]MM[/-.]YY   (YY > 50 -> 19YY, otherwise 20YY)

Day-first is always preferred; US style MM/DD/YYYY is not recognized as such
("12/31/2025" is rejected by pattern 1 and then left to the free-text
fallback). Anything else goes through dateutil's free-text parser and is accepted
only for years 1900..2100. Relative words ("today", "now") are not dates, and
text without an explicit year is rejected.

Numbers are spreadsheet serial dates (day 0 = 1899-12-30).
"""

__all__ = [
    "DATE_MISSING",
    "DATE_INVALID",
    "EXCEL_EPOCH_OFFSET_DAYS",
    "TWO_DIGIT_YEAR_PIVOT",
    "parse_date",
    "serial_to_datetime",
]

DATE_MISSING = "date missing"
DATE_INVALID = "date invalid"

# Days from the spreadsheet epoch (1899-12-30) to 1970-01-01
EXCEL_EPOCH_OFFSET_DAYS = 25569
SECONDS_PER_DAY = 86400
TWO_DIGIT_YEAR_PIVOT = 50
FALLBACK_YEAR_RANGE = (1900, 2100)
_FALLBACK_DEFAULT = datetime(1, 1, 1)

_UNIX_EPOCH = datetime(1970, 1, 1)

_DMY_RE = re.compile(r"^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})$")
_YMD_RE = re.compile(r"^(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})$")
_DMY_SHORT_RE = re.compile(r"^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2})$")


def _calendar_date(year: int, month: int, day: int) -> datetime | None:
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def _expand_two_digit_year(yy: int) -> int:
    return 1900 + yy if yy > TWO_DIGIT_YEAR_PIVOT else 2000 + yy


def serial_to_datetime(serial: float) -> datetime | None:
    """Convert a spreadsheet serial day count to a naive datetime.

    Returns None for NaN/infinite or out of range serials.
    """
    try:
        serial = float(serial)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(serial):
        return None
    try:
        return _UNIX_EPOCH + timedelta(seconds=(serial - EXCEL_EPOCH_OFFSET_DAYS) * SECONDS_PER_DAY)
    except OverflowError:
        return None


def _match_patterns(text: str) -> datetime | None:
    m = _DMY_RE.match(text)
    if m:
        day, month, year = (int(g) for g in m.groups())
        parsed = _calendar_date(year, month, day)
        if parsed is not None:
            return parsed
    m = _YMD_RE.match(text)
    if m:
        year, month, day = (int(g) for g in m.groups())
        parsed = _calendar_date(year, month, day)
        if parsed is not None:
            return parsed
    m = _DMY_SHORT_RE.match(text)
    if m:
        day, month, yy = (int(g) for g in m.groups())
        parsed = _calendar_date(_expand_two_digit_year(yy), month, day)
        if parsed is not None:
            return parsed
    return None


def _parse_free_text(text: str) -> datetime | None:
    # missing components come from year 1, which fails the year range check
    try:
        parsed = dtparser.parse(text, dayfirst=True, default=_FALLBACK_DEFAULT)
    except (ValueError, OverflowError):
        return None
    lo, hi = FALLBACK_YEAR_RANGE
    if not lo <= parsed.year <= hi:
        return None
    return parsed.replace(tzinfo=None)


def parse_date(raw: Any) -> ParseResult[datetime]:
    """Parse a raw cell into a naive datetime (midnight for calendar dates)."""
    cell = classify_cell(raw)
    if cell.is_absent:
        return ParseResult.failure(DATE_MISSING, ErrorKind.MISSING)

    if cell.kind is CellKind.TEMPORAL:
        value = cell.value
        if value is pd.NaT:
            return ParseResult.failure(DATE_INVALID, ErrorKind.INVALID)
        if isinstance(value, pd.Timestamp):
            return ParseResult.success(value.to_pydatetime())
        if isinstance(value, datetime):
            return ParseResult.success(value)
        if isinstance(value, date):
            return ParseResult.success(datetime.combine(value, time()))
        return ParseResult.failure(DATE_INVALID, ErrorKind.INVALID)

    if cell.kind is CellKind.NUMBER:
        converted = serial_to_datetime(cell.value)
        if converted is None:
            return ParseResult.failure(DATE_INVALID, ErrorKind.INVALID)
        return ParseResult.success(converted)

    text = cell.value.strip()
    parsed = _match_patterns(text) or _parse_free_text(text)
    if parsed is None:
        return ParseResult.failure(DATE_INVALID, ErrorKind.INVALID)
    return ParseResult.success(parsed)
