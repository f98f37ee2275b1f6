from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.raw_row import RawRow

"""Spreadsheet reader.

Only the first sheet is read. The header row is the first of the top rows that
looks like a header (at least two non-empty cells, at least two of them
containing letters); when none does, the first row is used. Blank rows are
skipped and every data row keeps its 1-based sheet row number.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "SpreadsheetReadError",
    "EmptySheetError",
    "SheetData",
    "read_spreadsheet",
    "find_header_row",
    "normalize_sheet",
    "load_rows",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".xls", ".csv")
BLANK_HEADER_PREFIX = "Column"
MAX_HEADER_LENGTH = 100
DEFAULT_HEADER_SEARCH_ROWS = 10

# Latin or Hebrew letter
_LETTER_RE = re.compile(r"[A-Za-zא-ת]")


class SpreadsheetReadError(Exception):
    """Raised when a file cannot be decoded as a spreadsheet."""


class EmptySheetError(Exception):
    """Raised when the first sheet has no usable header or data rows."""


@dataclass
class SheetData:
    sheet_name: str
    headers: list[str]
    rows: list[RawRow]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _clean_cell(value: Any) -> Any:
    if _is_blank(value):
        return None
    if isinstance(value, str):
        return value.strip()
    return value


def read_spreadsheet(path: Path, keep_na_strings: list[str] | None = None) -> tuple[str, pd.DataFrame]:
    """Read the first sheet of ``path`` without applying a header.

    Parameters
    ----------
    path: spreadsheet path (.xlsx/.xlsm/.xls/.csv)
    keep_na_strings: strings pandas must not turn into NaN (e.g. ['NA'] for a
        customer literally named "NA")

    Returns
    -------
    (sheet name, raw DataFrame)
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SpreadsheetReadError(f"unsupported file type: {path.name}")

    import pandas._libs.parsers as parsers

    if keep_na_strings:
        na_values = list(parsers.STR_NA_VALUES - set(keep_na_strings))
        keep_default_na = False
    else:
        na_values = None
        keep_default_na = True

    try:
        if suffix == ".csv":
            # blank lines are kept so that row numbers match the file
            df = pd.read_csv(
                path,
                header=None,
                dtype=object,
                encoding="utf-8-sig",
                skip_blank_lines=False,
                keep_default_na=keep_default_na,
                na_values=na_values,
            )
            return path.stem, df
        xls = pd.ExcelFile(path)
        if not xls.sheet_names:
            raise EmptySheetError(f"{path.name}: workbook has no sheets")
        first = xls.sheet_names[0]
        df = xls.parse(first, header=None, keep_default_na=keep_default_na, na_values=na_values)
        return str(first), df
    except EmptySheetError:
        raise
    except pd.errors.EmptyDataError as e:
        raise EmptySheetError(f"{path.name}: file is empty") from e
    except Exception as e:
        raise SpreadsheetReadError(f"{path.name}: cannot read spreadsheet: {e}") from e


def find_header_row(grid: list[list[Any]], max_rows: int = DEFAULT_HEADER_SEARCH_ROWS) -> int:
    """Index of the first row among the top ``max_rows`` that looks like a header.

    Defaults to 0 when no row qualifies.
    """
    for i, row in enumerate(grid[:max_rows]):
        if not row:
            continue
        non_empty = [c for c in row if not _is_blank(c)]
        header_like = [c for c in non_empty if _LETTER_RE.search(str(c))]
        if len(non_empty) >= 2 and len(header_like) >= 2:
            return i
    return 0


def _build_headers(raw_headers: list[Any]) -> tuple[list[str], set[int]]:
    headers: list[str] = []
    synthesized: set[int] = set()
    used: set[str] = set()
    suffixes: dict[str, int] = {}
    for i, h in enumerate(raw_headers):
        if _is_blank(h):
            base = f"{BLANK_HEADER_PREFIX} {i + 1}"
            synthesized.add(i)
        else:
            base = str(h).strip()[:MAX_HEADER_LENGTH]
        # headers are row keys and must be unique: Name, Name.1, Name.2
        name = base
        while name in used:
            suffixes[base] = suffixes.get(base, 0) + 1
            name = f"{base}.{suffixes[base]}"
        used.add(name)
        headers.append(name)
    return headers, synthesized


def normalize_sheet(
    df: pd.DataFrame,
    sheet_name: str,
    header_search_rows: int = DEFAULT_HEADER_SEARCH_ROWS,
) -> SheetData:
    """Turn a raw DataFrame into headers + RawRows.

    Steps:
    1. Locate the header row (find_header_row)
    2. Synthesize names for blank header cells, drop trailing synthesized
       columns that hold no data
    3. Skip fully blank rows; trim text cells, blank cells become None
    """
    grid: list[list[Any]] = [list(r) for r in df.itertuples(index=False, name=None)]
    if not grid:
        raise EmptySheetError(f"sheet '{sheet_name}' is empty")
    if len(grid) < 2:
        raise EmptySheetError(
            f"sheet '{sheet_name}' has a single row; a header row and at least one data row are required"
        )

    header_idx = find_header_row(grid, header_search_rows)
    headers, synthesized = _build_headers(grid[header_idx])
    data_part = grid[header_idx + 1:]

    while headers and (len(headers) - 1) in synthesized:
        col = len(headers) - 1
        if any(col < len(r) and not _is_blank(r[col]) for r in data_part):
            break
        headers.pop()
    if not headers:
        raise EmptySheetError(f"sheet '{sheet_name}' has no columns with data")

    rows: list[RawRow] = []
    for offset, raw in enumerate(data_part):
        cells = raw[:len(headers)]
        if all(_is_blank(c) for c in cells):
            continue
        data = {h: (_clean_cell(cells[j]) if j < len(cells) else None) for j, h in enumerate(headers)}
        rows.append(RawRow(row_number=header_idx + offset + 2, data=data))

    if not rows:
        raise EmptySheetError(f"sheet '{sheet_name}' has no data rows below the headers")
    return SheetData(sheet_name=sheet_name, headers=headers, rows=rows)


def load_rows(
    path: Path,
    header_search_rows: int = DEFAULT_HEADER_SEARCH_ROWS,
    keep_na_strings: list[str] | None = None,
) -> SheetData:
    """read_spreadsheet + normalize_sheet."""
    sheet_name, df = read_spreadsheet(path, keep_na_strings=keep_na_strings)
    return normalize_sheet(df, sheet_name, header_search_rows=header_search_rows)
