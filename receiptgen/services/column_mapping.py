from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..models.column_mapping import ColumnMapping
from ..models.receipt_field import FIELD_KEYWORDS, ReceiptField

logger = logging.getLogger(__name__)

"""Column mapping inference.

Greedy, single pass, left to right: every header gets the best scoring field
that no earlier header has claimed. The score constants below are fixed design
constants, not learned or configurable.
"""

__all__ = [
    "EXACT_SCORE",
    "HEADER_CONTAINS_WEIGHT",
    "KEYWORD_CONTAINS_WEIGHT",
    "MIN_CONFIDENCE",
    "infer_column_mappings",
    "score_header",
    "apply_override",
    "mappings_from_suggestion",
    "find_mapping",
]

EXACT_SCORE = 1.0
HEADER_CONTAINS_WEIGHT = 0.9
KEYWORD_CONTAINS_WEIGHT = 0.8
MIN_CONFIDENCE = 0.3
# "keyword contains header" only for headers longer than this
MIN_CONTAINED_HEADER_LENGTH = 2


def _normalize(text: str) -> str:
    return text.lower().strip()


def score_header(
    header: str,
    used_fields: set[ReceiptField] | frozenset[ReceiptField] = frozenset(),
    keywords: Mapping[ReceiptField, Sequence[str]] = FIELD_KEYWORDS,
) -> tuple[ReceiptField | None, float]:
    """Best (field, score) for one header among the fields not in ``used_fields``.

    Fields and keywords are scanned in table order and only a strictly higher
    score replaces the current best, so ties keep the first seen pair. An exact
    match short-circuits the scan.

    Returns:
        (None, 0.0) when nothing scored at all
    """
    normalized = _normalize(header)
    best_field: ReceiptField | None = None
    best_score = 0.0
    if not normalized:
        return best_field, best_score

    for field, candidates in keywords.items():
        if field is ReceiptField.IGNORE or field in used_fields:
            continue
        for keyword in candidates:
            kw = _normalize(keyword)
            if not kw:
                continue
            if normalized == kw:
                return field, EXACT_SCORE
            if kw in normalized:
                score = len(kw) / len(normalized) * HEADER_CONTAINS_WEIGHT
                if best_field is None or score > best_score:
                    best_field, best_score = field, score
            if normalized in kw and len(normalized) > MIN_CONTAINED_HEADER_LENGTH:
                score = len(normalized) / len(kw) * KEYWORD_CONTAINS_WEIGHT
                if best_field is None or score > best_score:
                    best_field, best_score = field, score
    return best_field, best_score


def infer_column_mappings(headers: Sequence[str]) -> list[ColumnMapping]:
    """Suggest one mapping per header, in header order.

    A header whose best score is below MIN_CONFIDENCE maps to IGNORE with
    confidence 0. Claimed fields are tracked in a set local to this call, so
    concurrent calls never share state.
    """
    used_fields: set[ReceiptField] = set()
    mappings: list[ColumnMapping] = []
    for header in headers:
        field, score = score_header(header, used_fields)
        if field is not None and score >= MIN_CONFIDENCE:
            used_fields.add(field)
            mappings.append(ColumnMapping(excel_column=header, receipt_field=field, confidence=score))
        else:
            mappings.append(ColumnMapping(excel_column=header, receipt_field=ReceiptField.IGNORE, confidence=0.0))
    logger.debug(
        "inferred mappings: %s",
        ", ".join(f"{m.excel_column}->{m.receipt_field.value}({m.confidence:.2f})" for m in mappings),
    )
    return mappings


def apply_override(
    mappings: Sequence[ColumnMapping], excel_column: str, receipt_field: ReceiptField | str
) -> list[ColumnMapping]:
    """Return a copy of ``mappings`` with one header reassigned by hand.

    Only the matching entry changes (``is_manual=True``, confidence kept). Other
    headers that already claim the same field are left alone; consumers take
    the first claim. An unknown header leaves the list unchanged.
    """
    field = ReceiptField(receipt_field)
    updated: list[ColumnMapping] = []
    found = False
    for m in mappings:
        if m.excel_column == excel_column:
            found = True
            updated.append(ColumnMapping(
                excel_column=m.excel_column,
                receipt_field=field,
                confidence=m.confidence,
                is_manual=True,
            ))
        else:
            updated.append(m)
    if not found:
        logger.warning("override ignored: no column named %r", excel_column)
    return updated


def mappings_from_suggestion(
    headers: Sequence[str], suggestion: Mapping[ReceiptField | str, str | None]
) -> list[ColumnMapping]:
    """Build a mapping list from an alternate source (e.g. an AI suggestion).

    ``suggestion`` maps fields to header names. Suggested headers that are not
    in ``headers`` are dropped; when two fields name the same header the first
    one wins. Everything else maps to IGNORE.
    """
    by_header: dict[str, ReceiptField] = {}
    for raw_field, header in suggestion.items():
        if not header:
            continue
        try:
            field = ReceiptField(raw_field)
        except ValueError:
            logger.debug("suggestion skipped: unknown field %r", raw_field)
            continue
        if field is ReceiptField.IGNORE or header not in headers:
            logger.debug("suggestion skipped: %s -> %r", field.value, header)
            continue
        by_header.setdefault(header, field)
    return [
        ColumnMapping(excel_column=h, receipt_field=by_header[h], confidence=1.0)
        if h in by_header
        else ColumnMapping(excel_column=h, receipt_field=ReceiptField.IGNORE, confidence=0.0)
        for h in headers
    ]


def find_mapping(mappings: Sequence[ColumnMapping], field: ReceiptField) -> ColumnMapping | None:
    """First mapping claiming ``field``, or None."""
    for m in mappings:
        if m.receipt_field is field:
            return m
    return None
