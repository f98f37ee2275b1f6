from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..models.column_mapping import ColumnMapping
from ..models.parse_result import ErrorKind, ParseResult
from ..models.raw_row import FieldError, RawRow, Severity
from ..models.receipt_field import REQUIRED_FIELDS, ReceiptField
from ..parsers import parse_amount, parse_date, parse_name
from .column_mapping import find_mapping

logger = logging.getLogger(__name__)

"""Row validation and batch partitioning.

Neither operation raises for bad data: a row with problems comes back with
``is_valid=False`` and a FieldError per failing required field, and
partitioning always returns both partitions (possibly empty).
"""

__all__ = [
    "FIELD_NOT_MAPPED",
    "FIELD_PARSERS",
    "validate_row",
    "partition_rows",
]

FIELD_NOT_MAPPED = "field not mapped"

FIELD_PARSERS: dict[ReceiptField, Callable[[Any], ParseResult[Any]]] = {
    ReceiptField.CUSTOMER_NAME: parse_name,
    ReceiptField.AMOUNT: parse_amount,
    ReceiptField.DATE: parse_date,
}


def validate_row(row: RawRow, mappings: Sequence[ColumnMapping]) -> RawRow:
    """Recompute ``errors``/``is_valid`` of ``row`` against ``mappings``.

    Only the required fields are checked, in REQUIRED_FIELDS order. The input
    row is not modified; a new RawRow is returned with every other attribute
    unchanged.
    """
    errors: list[FieldError] = []
    for field in REQUIRED_FIELDS:
        mapping = find_mapping(mappings, field)
        if mapping is None:
            errors.append(FieldError(
                field=field.value,
                message=FIELD_NOT_MAPPED,
                severity=Severity.ERROR,
                kind=ErrorKind.NOT_MAPPED,
            ))
            continue
        result = FIELD_PARSERS[field](row.get(mapping.excel_column))
        if not result.ok:
            errors.append(FieldError(
                field=field.value,
                message=result.error or "",
                severity=Severity.ERROR,
                kind=result.kind,
            ))
    is_valid = not any(e.severity is Severity.ERROR for e in errors)
    return dataclasses.replace(row, errors=tuple(errors), is_valid=is_valid)


def partition_rows(
    rows: Sequence[RawRow],
    mappings: Sequence[ColumnMapping],
    workers: int | None = None,
) -> tuple[list[RawRow], list[RawRow]]:
    """Validate every row and split into (valid_rows, invalid_rows).

    Relative input order is preserved inside each partition. With ``workers``
    > 1 rows are validated on a thread pool; ``Executor.map`` yields results in
    submission order, so the partitions are identical to the serial ones.
    """
    if workers is not None and workers > 1 and len(rows) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            validated = list(pool.map(lambda r: validate_row(r, mappings), rows))
    else:
        validated = [validate_row(r, mappings) for r in rows]

    valid_rows = [r for r in validated if r.is_valid]
    invalid_rows = [r for r in validated if not r.is_valid]
    logger.debug("partitioned %d rows: valid=%d invalid=%d", len(validated), len(valid_rows), len(invalid_rows))
    return valid_rows, invalid_rows
