from __future__ import annotations

from decimal import Decimal

from ..models.cell import Cell, CellKind

"""Best-effort text coercion for cells (names and optional receipt fields)."""

__all__ = [
    "cell_to_text",
]


def cell_to_text(cell: Cell) -> str | None:
    """Render a classified cell as trimmed text.

    Returns None for absent cells. Integral floats drop the ".0" that pandas adds
    to whole numbers read from numeric columns (a transaction id 1234 must not
    become "1234.0").
    """
    if cell.is_absent:
        return None
    value = cell.value
    if cell.kind is CellKind.NUMBER:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
            return str(value.quantize(Decimal(1)))
    if cell.kind is CellKind.TEMPORAL and hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value).strip()
