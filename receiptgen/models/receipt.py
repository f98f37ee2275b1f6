from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Receipt record produced for each valid spreadsheet row."""

__all__ = [
    "Receipt",
]


@dataclass(frozen=True)
class Receipt:
    """Normalized receipt data ready for rendering/export.

    Receipt numbers are allocated sequentially over the valid rows of a run,
    starting at ReceiptSettings.starting_number.
    """
    receipt_number: int
    row_number: int  # source sheet row, for tracing back to the spreadsheet
    customer_name: str
    amount: float
    date: datetime
    description: str = ""
    payment_method: str | None = None
    transaction_id: str | None = None
    notes: str | None = None
