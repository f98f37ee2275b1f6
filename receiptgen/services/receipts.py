from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..models.cell import classify_cell
from ..models.column_mapping import ColumnMapping
from ..models.raw_row import RawRow
from ..models.receipt import Receipt
from ..models.receipt_field import ReceiptField
from ..parsers import cell_to_text, parse_amount, parse_date, parse_name
from .column_mapping import find_mapping

"""Receipt building: turns validated rows into numbered Receipt records."""

__all__ = [
    "ReceiptBuildError",
    "build_receipt",
    "build_receipts",
    "render_amount",
    "render_date",
]


class ReceiptBuildError(Exception):
    """Raised when a receipt is requested for a row that does not validate."""


def _optional_text(row: RawRow, mappings: Sequence[ColumnMapping], field: ReceiptField) -> str | None:
    mapping = find_mapping(mappings, field)
    if mapping is None:
        return None
    text = cell_to_text(classify_cell(row.get(mapping.excel_column)))
    return text or None


def _required_value(row: RawRow, mappings: Sequence[ColumnMapping], field: ReceiptField, parser):
    mapping = find_mapping(mappings, field)
    if mapping is None:
        raise ReceiptBuildError(f"row {row.row_number}: {field.value} not mapped")
    result = parser(row.get(mapping.excel_column))
    if not result.ok:
        raise ReceiptBuildError(f"row {row.row_number}: {field.value}: {result.error}")
    return result.value


def build_receipt(row: RawRow, mappings: Sequence[ColumnMapping], receipt_number: int) -> Receipt:
    """Build the receipt for one row that passed validation.

    Raises:
        ReceiptBuildError: if a required field is unmapped or fails to parse
            (i.e. the row was not validated against the same mappings)
    """
    return Receipt(
        receipt_number=receipt_number,
        row_number=row.row_number,
        customer_name=_required_value(row, mappings, ReceiptField.CUSTOMER_NAME, parse_name),
        amount=float(_required_value(row, mappings, ReceiptField.AMOUNT, parse_amount)),
        date=_required_value(row, mappings, ReceiptField.DATE, parse_date),
        description=_optional_text(row, mappings, ReceiptField.DESCRIPTION) or "",
        payment_method=_optional_text(row, mappings, ReceiptField.PAYMENT_METHOD),
        transaction_id=_optional_text(row, mappings, ReceiptField.TRANSACTION_ID),
        notes=_optional_text(row, mappings, ReceiptField.NOTES),
    )


def build_receipts(
    valid_rows: Sequence[RawRow], mappings: Sequence[ColumnMapping], starting_number: int = 1
) -> list[Receipt]:
    """Number the valid rows sequentially from ``starting_number``, in row order."""
    return [
        build_receipt(row, mappings, starting_number + i)
        for i, row in enumerate(valid_rows)
    ]


def render_amount(amount: float, currency_symbol: str = "₪") -> str:
    """Format an amount for display, e.g. 1234.5 -> "₪1,234.50"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}"


def render_date(value: datetime, strftime_format: str = "%d/%m/%Y") -> str:
    return value.strftime(strftime_format)
