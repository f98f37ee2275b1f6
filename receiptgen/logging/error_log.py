from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord
from ..models.raw_row import RawRow

"""Error log buffering.

Invalid rows are reported as JSON Lines, one record per field error, to
``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC, one file per run). Records are
buffered and written on flush(); nothing is created when there is nothing to
write.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "SCHEMA_PATH",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
SCHEMA_PATH = Path(__file__).with_name("error_log_schema.json")


class ErrorLogBuffer:
    """In-memory buffer of error records; flush() appends them as JSON Lines.

    The file path is fixed on first access. Not thread safe (files are
    processed serially).
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def written(self) -> bool:
        """True once at least one flush wrote records."""
        return self._file_path is not None and self._file_path.exists()

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def extend_from_rows(self, file: str, rows: Iterable[RawRow]) -> int:
        """Buffer one record per field error of ``rows``; returns the count added."""
        added = 0
        for row in rows:
            for error in row.errors:
                self._records.append(ErrorRecord.from_field_error(file, row, error))
                added += 1
        return added

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file.

        Returns:
            The log path, or None when nothing has ever been written
        """
        if not self._records:
            return self.file_path if self.written else None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
