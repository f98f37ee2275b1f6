from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .column_mapping import ColumnMapping
from .raw_row import RawRow
from .receipt import Receipt

"""ProcessedFile domain model and FileStatus enum.

A ProcessedFile is the outcome of one spreadsheet session: the mappings that
were used, the partitioned rows and the receipts built from the valid ones.
"""


class FileStatus(Enum):
    """Outcome of one spreadsheet.

    - FAILED covers unreadable files and files without a single valid row
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ProcessedFile:
    path: Path
    name: str
    status: FileStatus
    headers: list[str] = field(default_factory=list)
    mappings: list[ColumnMapping] = field(default_factory=list)
    valid_rows: list[RawRow] = field(default_factory=list)
    invalid_rows: list[RawRow] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)
    start_time: datetime | None = None  # UTC
    end_time: datetime | None = None  # UTC
    error: str | None = None  # failure reason summary

    @property
    def total_rows(self) -> int:
        return len(self.valid_rows) + len(self.invalid_rows)
