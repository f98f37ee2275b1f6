from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from receiptgen.config.loader import ConfigError, load_config, resolve_config_path
from receiptgen.excel.reader import EmptySheetError, SpreadsheetReadError, load_rows
from receiptgen.logging.init import enable_debug, log_summary, setup_logging
from receiptgen.models.receipt_field import RECEIPT_FIELDS
from receiptgen.services.orchestrator import ProcessingError, process_all, resolve_mappings, scan_spreadsheet_files
from receiptgen.services.summary import render_summary_line

"""CLI entrypoint.

    receiptgen [--config PATH] [--debug] [--inspect-data]

Exit codes: 0 every file produced receipts (or there were no files),
2 at least one file failed, 1 fatal (config or source directory).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load .env (e.g. RECEIPTGEN_CONFIG) without overriding the real environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="receiptgen", description="Spreadsheet -> receipt generator")
    p.add_argument("--config", help="config file (default: $RECEIPTGEN_CONFIG or config/receipts.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print headers, inferred column mappings and first rows, then exit",
    )
    return p.parse_args(argv)


def _inspect_data(cfg) -> int:
    directory = Path(cfg.source_directory)
    try:
        paths = scan_spreadsheet_files(directory)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not paths:
        print("inspect: no spreadsheet files")
        return EXIT_SUCCESS_ALL
    for path in paths:
        print(f"FILE: {path.name}")
        try:
            sheet = load_rows(path, header_search_rows=cfg.header_search_rows, keep_na_strings=cfg.keep_na_strings)
        except (SpreadsheetReadError, EmptySheetError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEET: {sheet.sheet_name} cols={sheet.headers}")
        for m in resolve_mappings(sheet.headers, cfg.column_overrides):
            manual = " (manual)" if m.is_manual else ""
            label = RECEIPT_FIELDS[m.receipt_field].label
            print(f"    {m.excel_column!r} -> {m.receipt_field.value} confidence={m.confidence:.2f}{manual} [{label}]")
        for row in sheet.rows[:INSPECT_SAMPLE_ROWS]:
            # datetimes are not JSON friendly; print ISO strings
            safe = {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in row.data.items()}
            print(f"    row {row.row_number}: {safe}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
