"""receiptgen: spreadsheet rows -> validated, numbered receipt records.

Core API::

    mappings = infer_column_mappings(headers)
    valid_rows, invalid_rows = partition_rows(rows, mappings)
    receipts = build_receipts(valid_rows, mappings, starting_number=1)
"""

from .parsers import parse_amount, parse_date, parse_name
from .services.column_mapping import apply_override, infer_column_mappings, mappings_from_suggestion
from .services.receipts import build_receipts
from .services.validation import partition_rows, validate_row

__version__ = "0.1.0"

__all__ = [
    "parse_amount",
    "parse_date",
    "parse_name",
    "infer_column_mappings",
    "apply_override",
    "mappings_from_suggestion",
    "validate_row",
    "partition_rows",
    "build_receipts",
]
