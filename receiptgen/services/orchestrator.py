from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import SUPPORTED_SUFFIXES, EmptySheetError, SpreadsheetReadError, load_rows
from ..logging.error_log import ErrorLogBuffer
from ..models.column_mapping import ColumnMapping
from ..models.config_models import AppConfig
from ..models.error_record import ErrorRecord
from ..models.processed_file import FileStatus, ProcessedFile
from ..models.processing_result import FileStat, ProcessingResult
from ..models.receipt_field import REQUIRED_FIELDS, ReceiptField
from .column_mapping import apply_override, find_mapping, infer_column_mappings
from .export import write_receipts_csv
from .progress import ProgressTracker
from .receipts import build_receipts
from .validation import partition_rows

logger = logging.getLogger(__name__)

"""Run orchestration.

process_all() handles every spreadsheet in the source directory, one session
per file:

1. read the first sheet into headers + rows
2. infer column mappings, then apply configured overrides
3. validate and partition the rows
4. number receipts for the valid rows (numbering continues across files)
5. export receipts, buffer error records for invalid rows

A file that cannot be read, or that yields no valid row, is FAILED; the run
continues with the next file.
"""


class ProcessingError(Exception):
    """Fatal run error (source directory unusable)."""


NO_VALID_ROWS = "no valid rows"


def scan_spreadsheet_files(directory: Path) -> list[Path]:
    """Spreadsheets directly inside ``directory``, sorted by name.

    Raises:
        ProcessingError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def resolve_mappings(headers: list[str], overrides: Mapping[str, ReceiptField] | None = None) -> list[ColumnMapping]:
    """Inferred mappings with manual overrides applied on top."""
    mappings = infer_column_mappings(headers)
    for header, field in (overrides or {}).items():
        if header in headers:
            mappings = apply_override(mappings, header, field)
        else:
            logger.debug("override for absent column %r skipped", header)
    return mappings


def process_file(
    path: Path,
    config: AppConfig,
    starting_number: int,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessedFile:
    """Run one spreadsheet through the pipeline.

    Args:
        path: spreadsheet to process
        config: run configuration (overrides, header search depth, workers)
        starting_number: receipt number of this file's first valid row
        error_log: buffer receiving field errors and file-level failures

    Returns:
        ProcessedFile with status SUCCESS or FAILED; never raises for bad data
    """
    start_time = datetime.now(UTC)
    try:
        sheet = load_rows(
            path,
            header_search_rows=config.header_search_rows,
            keep_na_strings=config.keep_na_strings,
        )
    except (SpreadsheetReadError, EmptySheetError) as e:
        error_type = "EMPTY_SHEET" if isinstance(e, EmptySheetError) else "READ_ERROR"
        if error_log is not None:
            error_log.append(ErrorRecord.file_level(path.name, error_type, str(e)))
        return ProcessedFile(
            path=path,
            name=path.name,
            status=FileStatus.FAILED,
            start_time=start_time,
            end_time=datetime.now(UTC),
            error=str(e),
        )

    mappings = resolve_mappings(sheet.headers, config.column_overrides)
    for field in REQUIRED_FIELDS:
        if find_mapping(mappings, field) is None:
            logger.warning("%s: no column mapped to %s", path.name, field.value)

    valid_rows, invalid_rows = partition_rows(sheet.rows, mappings, workers=config.workers)
    receipts = build_receipts(valid_rows, mappings, starting_number)

    if error_log is not None:
        error_log.extend_from_rows(path.name, invalid_rows)
    if invalid_rows:
        logger.warning("%s: %d of %d rows invalid", path.name, len(invalid_rows), len(sheet.rows))

    status = FileStatus.SUCCESS
    error = None
    if not valid_rows:
        status = FileStatus.FAILED
        error = NO_VALID_ROWS
        if error_log is not None:
            error_log.append(ErrorRecord.file_level(path.name, "NO_VALID_ROWS", NO_VALID_ROWS))

    return ProcessedFile(
        path=path,
        name=path.name,
        status=status,
        headers=sheet.headers,
        mappings=mappings,
        valid_rows=valid_rows,
        invalid_rows=invalid_rows,
        receipts=receipts,
        start_time=start_time,
        end_time=datetime.now(UTC),
        error=error,
    )


def process_all(config: AppConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Process every spreadsheet in ``config.source_directory``.

    Raises:
        ProcessingError: when the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    file_paths = scan_spreadsheet_files(Path(config.source_directory))
    output_dir = Path(config.output_directory)

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_receipts = 0
    total_invalid = 0
    next_number = config.receipt_settings.starting_number

    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start(path.name)
            result = process_file(path, config, next_number, error_log)

            output_path: Path | None = None
            if result.status is FileStatus.SUCCESS:
                success_count += 1
                output_path = write_receipts_csv(result.receipts, config.receipt_settings, output_dir, path.name)
                logger.info(
                    "%s: %d receipts (#%d-#%d) -> %s",
                    path.name,
                    len(result.receipts),
                    result.receipts[0].receipt_number,
                    result.receipts[-1].receipt_number,
                    output_path,
                )
            else:
                failed_count += 1
                logger.error("%s: failed: %s", path.name, result.error)

            total_receipts += len(result.receipts)
            total_invalid += len(result.invalid_rows)
            next_number += len(result.receipts)
            progress.advance(receipts=total_receipts, invalid=total_invalid)

            elapsed = 0.0
            if result.start_time is not None and result.end_time is not None:
                elapsed = (result.end_time - result.start_time).total_seconds()
            file_stats.append(FileStat(
                file_name=path.name,
                status=result.status.value,
                receipts=len(result.receipts),
                invalid_rows=len(result.invalid_rows),
                elapsed_seconds=elapsed,
                first_receipt_number=result.receipts[0].receipt_number if result.receipts else None,
                last_receipt_number=result.receipts[-1].receipt_number if result.receipts else None,
                output_path=str(output_path) if output_path is not None else None,
            ))

    log_path: Path | None = None
    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.error("error log flush failed: %s", e)
    if log_path is not None:
        logger.info("error log: %s", log_path)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_receipts=total_receipts,
        total_invalid_rows=total_invalid,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        error_log_path=str(log_path) if log_path is not None else None,
    )
