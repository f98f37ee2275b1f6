from __future__ import annotations

from dataclasses import dataclass, field

from .receipt_field import ReceiptField

"""Config dataclasses for the receipt generator.

These are built by the loader in receiptgen/config/loader.py after the YAML file
has passed schema validation, so they carry no validation of their own.
"""

# dateFormat setting -> strftime pattern
DATE_FORMATS: dict[str, str] = {
    "dd/MM/yyyy": "%d/%m/%Y",
    "yyyy-MM-dd": "%Y-%m-%d",
    "dd.MM.yyyy": "%d.%m.%Y",
}


@dataclass(frozen=True)
class ReceiptSettings:
    """Receipt numbering and formatting settings."""
    starting_number: int = 1  # first receipt number of a run
    currency: str = "ILS"  # ILS / USD / EUR
    currency_symbol: str = "₪"
    date_format: str = "dd/MM/yyyy"  # key of DATE_FORMATS

    @property
    def strftime_format(self) -> str:
        return DATE_FORMATS[self.date_format]


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for a generation run."""
    source_directory: str  # directory scanned for spreadsheets
    output_directory: str = "./output"  # receipts CSV destination
    receipt_settings: ReceiptSettings = field(default_factory=ReceiptSettings)
    # header -> field, applied on top of inferred mappings as manual overrides
    column_overrides: dict[str, ReceiptField] = field(default_factory=dict)
    header_search_rows: int = 10
    workers: int = 1  # >1 validates rows on a thread pool
    keep_na_strings: list[str] | None = None  # strings pandas must not read as NaN
