from __future__ import annotations

from dataclasses import dataclass

from .receipt_field import ReceiptField

"""ColumnMapping model: one spreadsheet header assigned to one receipt field."""

__all__ = [
    "ColumnMapping",
]


@dataclass(frozen=True)
class ColumnMapping:
    """Assignment of a header to a semantic field.

    A mapping list holds at most one entry per header. Inference never lets two
    headers claim the same field, but manual overrides may; consumers take the
    first entry for a field.
    """
    excel_column: str  # header string as read from the sheet
    receipt_field: ReceiptField
    confidence: float = 0.0  # 0..1, 1.0 for exact keyword hits
    is_manual: bool = False

    @property
    def is_ignored(self) -> bool:
        return self.receipt_field is ReceiptField.IGNORE
