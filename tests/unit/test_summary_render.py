from __future__ import annotations

from datetime import datetime, timezone

import pytest

from receiptgen.models.processing_result import ProcessingResult
from receiptgen.services.summary import render_summary_line


def _result(success=1, failed=0, receipts=10, invalid=0, elapsed=1.0) -> ProcessingResult:
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return ProcessingResult(
        success_files=success,
        failed_files=failed,
        total_receipts=receipts,
        total_invalid_rows=invalid,
        start_time=start,
        end_time=start,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line():
    line = render_summary_line(_result(success=1, failed=1, receipts=40, invalid=3, elapsed=2.0))
    assert line == "SUMMARY files=2/2 success=1 failed=1 receipts=40 invalid_rows=3 elapsed_sec=2"


@pytest.mark.parametrize(
    "elapsed, rendered",
    [
        (0.0, "0"),
        (3.0, "3"),
        (1.23456, "1.235"),
        (0.5, "0.5"),
        (0.000123, "0.000123"),
    ],
)
def test_elapsed_formatting(elapsed, rendered):
    assert render_summary_line(_result(elapsed=elapsed)).endswith(f"elapsed_sec={rendered}")


def test_empty_run():
    line = render_summary_line(_result(success=0, failed=0, receipts=0, elapsed=0.0))
    assert line.startswith("SUMMARY files=0/0 success=0 failed=0 receipts=0")
