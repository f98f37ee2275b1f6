from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .raw_row import FieldError, RawRow

"""ErrorRecord model for the JSON Lines error log.

One record is written per field error of an invalid row, plus one record per
file-level failure (row=-1, field="<FILE_LEVEL>"). The key set is fixed by
receiptgen/logging/error_log_schema.json.
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL",
]

FILE_LEVEL = "<FILE_LEVEL>"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Spreadsheet filename being processed
        row: Sheet row number (1-based). -1 for file-level errors
        field: Semantic field name, or FILE_LEVEL
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    field: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, field: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            field=field,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def file_level(file: str, error_type: str, message: str) -> ErrorRecord:
        return ErrorRecord.create(file=file, row=-1, field=FILE_LEVEL, error_type=error_type, message=message)

    @staticmethod
    def from_field_error(file: str, row: RawRow, error: FieldError) -> ErrorRecord:
        error_type = error.kind.error_type if error.kind is not None else "INVALID"
        return ErrorRecord.create(
            file=file,
            row=row.row_number,
            field=error.field,
            error_type=error_type,
            message=error.message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON line (no keys beyond the dataclass fields)."""
        return json.dumps(asdict(self), ensure_ascii=False)
