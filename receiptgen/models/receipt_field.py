from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Semantic receipt fields and the static keyword table used for column inference.

The field set is closed. customerName, amount and date are required for a row
to produce a receipt; everything else is optional pass-through text.
"""

__all__ = [
    "ReceiptField",
    "FieldInfo",
    "RECEIPT_FIELDS",
    "REQUIRED_FIELDS",
    "FIELD_KEYWORDS",
]


class ReceiptField(str, Enum):
    """Closed set of receipt attributes a spreadsheet column can map to.

    Values keep the camelCase wire names so that config files and error logs
    use the same vocabulary as the receipt templates.
    """
    CUSTOMER_NAME = "customerName"
    AMOUNT = "amount"
    DATE = "date"
    DESCRIPTION = "description"
    PAYMENT_METHOD = "paymentMethod"
    TRANSACTION_ID = "transactionId"
    NOTES = "notes"
    IGNORE = "ignore"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldInfo:
    label: str  # Hebrew display label
    required: bool


# Declaration order of the required entries is the validation error order.
RECEIPT_FIELDS: dict[ReceiptField, FieldInfo] = {
    ReceiptField.CUSTOMER_NAME: FieldInfo(label="שם לקוח", required=True),
    ReceiptField.AMOUNT: FieldInfo(label="סכום", required=True),
    ReceiptField.DATE: FieldInfo(label="תאריך", required=True),
    ReceiptField.DESCRIPTION: FieldInfo(label="תיאור/פירוט", required=False),
    ReceiptField.PAYMENT_METHOD: FieldInfo(label="אמצעי תשלום", required=False),
    ReceiptField.TRANSACTION_ID: FieldInfo(label="מספר עסקה", required=False),
    ReceiptField.NOTES: FieldInfo(label="הערות", required=False),
    ReceiptField.IGNORE: FieldInfo(label="התעלם", required=False),
}

REQUIRED_FIELDS: tuple[ReceiptField, ...] = tuple(
    f for f, info in RECEIPT_FIELDS.items() if info.required
)

# Declaration order is the inference tie-break order (fields, then keywords).
FIELD_KEYWORDS: dict[ReceiptField, tuple[str, ...]] = {
    ReceiptField.CUSTOMER_NAME: (
        "שם", "לקוח", "לקוחה", "שם לקוח", "customer", "name", "client", "מקבל",
    ),
    ReceiptField.AMOUNT: (
        "סכום", 'סה"כ', "סהכ", "מחיר", "עלות", "amount", "total", "price", "sum", "שולם",
    ),
    ReceiptField.DATE: ("תאריך", "date", "יום", "תאריך תשלום"),
    ReceiptField.DESCRIPTION: (
        "תיאור", "פירוט", "שירות", "מוצר", "description", "details", "service", "product",
    ),
    ReceiptField.PAYMENT_METHOD: (
        "אמצעי תשלום", "תשלום", "payment", "method", "צ'יק", "מזומן", "העברה", "אשראי",
    ),
    ReceiptField.TRANSACTION_ID: (
        "מספר עסקה", "אסמכתא", "reference", "transaction", "id", "מספר",
    ),
    ReceiptField.NOTES: ("הערות", "הערה", "notes", "note", "comments"),
    ReceiptField.IGNORE: (),
}
