# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from receiptgen.logging.init import APP_LOGGER_NAME, reset_logging
from receiptgen.models.column_mapping import ColumnMapping
from receiptgen.models.raw_row import RawRow
from receiptgen.models.receipt_field import ReceiptField


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    # handlers hold the captured stdout of the finished test
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
receipt_settings:
  starting_number: 100
  currency: ILS
  currency_symbol: "₪"
  date_format: dd/MM/yyyy
column_overrides:
  Paid: amount
header_search_rows: 10
workers: 1
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "receipts.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_excel() -> Callable[..., Path]:
    """Write ``rows`` (header row included) as the first sheet of an .xlsx file."""
    def _make(directory: Path, name: str, rows: list[list[Any]], extra_sheets: dict[str, list[list[Any]]] | None = None) -> Path:
        p = directory / name
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
            for sheet, extra in (extra_sheets or {}).items():
                pd.DataFrame(extra).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return p
    return _make


@pytest.fixture()
def basic_mappings() -> list[ColumnMapping]:
    return [
        ColumnMapping("Name", ReceiptField.CUSTOMER_NAME, 1.0),
        ColumnMapping("Sum", ReceiptField.AMOUNT, 1.0),
        ColumnMapping("Date", ReceiptField.DATE, 1.0),
    ]


@pytest.fixture()
def sample_rows() -> list[RawRow]:
    return [
        RawRow(row_number=2, data={"Name": "Dana", "Sum": "100", "Date": "01/01/2025"}),
        RawRow(row_number=3, data={"Name": "", "Sum": "200", "Date": "02/01/2025"}),
        RawRow(row_number=4, data={"Name": "Avi Cohen", "Sum": "abc", "Date": None}),
        RawRow(row_number=5, data={"Name": "Noa", "Sum": 75.5, "Date": 45658}),
    ]
