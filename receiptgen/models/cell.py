from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

import pandas as pd

"""Raw spreadsheet cell classification.

Cells arrive from the spreadsheet decoder as arbitrary Python objects. They are
classified once, at the boundary, into a closed set of kinds so that the field
parsers branch on the kind instead of probing types themselves.
"""

__all__ = [
    "CellKind",
    "Cell",
    "classify_cell",
    "is_nan_number",
]


class CellKind(Enum):
    ABSENT = "absent"
    TEXT = "text"
    NUMBER = "number"
    TEMPORAL = "temporal"


@dataclass(frozen=True)
class Cell:
    """A raw cell value tagged with its kind.

    ``value`` is ``None`` for ABSENT, ``str`` for TEXT, ``float``/``int``/``Decimal``
    for NUMBER and ``datetime``/``date``/``pd.Timestamp`` for TEMPORAL. NaN numbers
    and NaT timestamps are kept as-is; they are not treated as absent because the
    parsers report them as invalid rather than missing.
    """
    kind: CellKind
    value: Any = None

    @property
    def is_absent(self) -> bool:
        return self.kind is CellKind.ABSENT


_ABSENT = Cell(CellKind.ABSENT)


def classify_cell(raw: Any) -> Cell:
    """Classify a raw cell value into a tagged :class:`Cell`.

    ``None``, ``pd.NA`` and the empty string are absent. The reader already turns
    blank cells into ``None``, so a NaN that reaches this point is a real value.
    Booleans are text ("True"/"False"); nothing in a receipt is boolean.
    """
    if raw is None or raw is pd.NA:
        return _ABSENT
    if isinstance(raw, Cell):
        return raw
    if isinstance(raw, str):
        return _ABSENT if raw == "" else Cell(CellKind.TEXT, raw)
    if isinstance(raw, bool):
        return Cell(CellKind.TEXT, str(raw))
    # pd.Timestamp subclasses datetime, NaT does not
    if raw is pd.NaT or isinstance(raw, (datetime, date)):
        return Cell(CellKind.TEMPORAL, raw)
    if isinstance(raw, (int, float, Decimal)):
        return Cell(CellKind.NUMBER, raw)
    # numpy scalars
    if hasattr(raw, "item"):
        try:
            return classify_cell(raw.item())
        except (TypeError, ValueError):
            pass
    return Cell(CellKind.TEXT, str(raw))


def is_nan_number(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    try:
        return math.isnan(value)
    except TypeError:
        return False
