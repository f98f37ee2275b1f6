from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models: per-file statistics and the aggregated run result
that feeds the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (helper for ProcessingResult)."""
    file_name: str
    status: str  # success/failed
    receipts: int  # receipts built from valid rows
    invalid_rows: int
    elapsed_seconds: float
    first_receipt_number: int | None = None
    last_receipt_number: int | None = None
    output_path: str | None = None  # receipts CSV, success only


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one run over the source directory."""
    success_files: int
    failed_files: int
    total_receipts: int
    total_invalid_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None  # set only when errors were written

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
