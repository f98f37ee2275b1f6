from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.config_models import ReceiptSettings
from ..models.receipt import Receipt
from .receipts import render_amount, render_date

"""Receipts CSV export.

One CSV per source spreadsheet, one line per receipt, formatted with the
configured currency symbol and date format. PDF rendering consumes the same
Receipt records and lives outside this package.
"""

__all__ = [
    "EXPORT_COLUMNS",
    "receipts_to_frame",
    "write_receipts_csv",
]

EXPORT_COLUMNS = [
    "receipt_number",
    "row_number",
    "customer_name",
    "amount",
    "amount_display",
    "date",
    "description",
    "payment_method",
    "transaction_id",
    "notes",
]


def receipts_to_frame(receipts: Sequence[Receipt], settings: ReceiptSettings) -> pd.DataFrame:
    records = [
        {
            "receipt_number": r.receipt_number,
            "row_number": r.row_number,
            "customer_name": r.customer_name,
            "amount": r.amount,
            "amount_display": render_amount(r.amount, settings.currency_symbol),
            "date": render_date(r.date, settings.strftime_format),
            "description": r.description,
            "payment_method": r.payment_method,
            "transaction_id": r.transaction_id,
            "notes": r.notes,
        }
        for r in receipts
    ]
    return pd.DataFrame.from_records(records, columns=EXPORT_COLUMNS)


def write_receipts_csv(
    receipts: Sequence[Receipt], settings: ReceiptSettings, output_dir: Path, source_name: str
) -> Path:
    """Write ``<source stem>_receipts.csv`` into ``output_dir`` and return its path.

    UTF-8 with BOM so that spreadsheet programs open Hebrew text correctly.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{Path(source_name).stem}_receipts.csv"
    receipts_to_frame(receipts, settings).to_csv(path, index=False, encoding="utf-8-sig")
    return path
