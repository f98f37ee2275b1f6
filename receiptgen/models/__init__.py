"""Domain models for the spreadsheet -> receipt generator.

This package contains the value objects passed between pipeline stages. All of
them are frozen dataclasses; stages return new objects instead of mutating.
"""

from .cell import Cell, CellKind, classify_cell
from .column_mapping import ColumnMapping
from .config_models import AppConfig, ReceiptSettings
from .error_record import ErrorRecord
from .parse_result import ErrorKind, ParseResult
from .raw_row import FieldError, RawRow, Severity
from .receipt import Receipt
from .receipt_field import FIELD_KEYWORDS, RECEIPT_FIELDS, REQUIRED_FIELDS, ReceiptField

__all__ = [
    # Raw input
    "Cell",
    "CellKind",
    "classify_cell",
    "RawRow",
    # Mapping
    "ColumnMapping",
    "ReceiptField",
    "FIELD_KEYWORDS",
    "RECEIPT_FIELDS",
    "REQUIRED_FIELDS",
    # Validation
    "ErrorKind",
    "FieldError",
    "ParseResult",
    "Severity",
    "ErrorRecord",
    # Output / config
    "Receipt",
    "AppConfig",
    "ReceiptSettings",
]
