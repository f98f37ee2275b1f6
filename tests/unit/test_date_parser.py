from __future__ import annotations

import warnings
from datetime import date, datetime

import pandas as pd
import pytest

from receiptgen.models.parse_result import ErrorKind
from receiptgen.parsers.dates import DATE_INVALID, DATE_MISSING, parse_date, serial_to_datetime


@pytest.mark.parametrize("raw", [None, ""])
def test_absent_date_is_missing(raw):
    result = parse_date(raw)
    assert result.error == DATE_MISSING
    assert result.kind is ErrorKind.MISSING


def test_datetime_passes_through():
    value = datetime(2025, 3, 4, 10, 30)
    assert parse_date(value).value == value


def test_timestamp_becomes_datetime():
    result = parse_date(pd.Timestamp("2025-03-04"))
    assert result.ok
    assert type(result.value) is datetime
    assert result.value == datetime(2025, 3, 4)


def test_plain_date_becomes_midnight():
    assert parse_date(date(2024, 12, 31)).value == datetime(2024, 12, 31)


def test_nat_is_invalid():
    assert parse_date(pd.NaT).kind is ErrorKind.INVALID


@pytest.mark.parametrize(
    "serial, expected",
    [
        (45658, datetime(2025, 1, 1)),
        (25569, datetime(1970, 1, 1)),
        (1, datetime(1899, 12, 31)),
        (45658.5, datetime(2025, 1, 1, 12, 0)),
    ],
)
def test_serial_numbers(serial, expected):
    result = parse_date(serial)
    assert result.ok
    assert result.value == expected


def test_serial_out_of_range_is_invalid():
    assert parse_date(10**12).error == DATE_INVALID
    assert serial_to_datetime(float("inf")) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("15/03/2024", datetime(2024, 3, 15)),
        ("1-2-2025", datetime(2025, 2, 1)),
        ("31.12.2023", datetime(2023, 12, 31)),
        ("2025-01-01", datetime(2025, 1, 1)),
        ("2024/02/29", datetime(2024, 2, 29)),
        ("  05/06/2025 ", datetime(2025, 6, 5)),
    ],
)
def test_numeric_patterns(text, expected):
    assert parse_date(text).value == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("15/03/24", datetime(2024, 3, 15)),
        ("01/01/50", datetime(2050, 1, 1)),
        ("01/01/51", datetime(1951, 1, 1)),
        ("31.12.99", datetime(1999, 12, 31)),
    ],
)
def test_two_digit_years_pivot_at_50(text, expected):
    assert parse_date(text).value == expected


def test_day_first_wins_over_month_first():
    # 03/04 is the 3rd of April, never March 4th
    assert parse_date("03/04/2025").value == datetime(2025, 4, 3)


def test_free_text_fallback():
    result = parse_date("March 5, 2025")
    assert result.ok
    assert result.value == datetime(2025, 3, 5)


@pytest.mark.parametrize("text", ["not a date", "31/02/2025", "hello world", "99/99/9999"])
def test_unparseable_text_is_invalid(text):
    result = parse_date(text)
    assert not result.ok
    assert result.error == DATE_INVALID
    assert result.kind is ErrorKind.INVALID


def test_success_is_a_real_datetime():
    for raw in ["15/03/2024", 45000, datetime(2020, 1, 1)]:
        result = parse_date(raw)
        assert isinstance(result.value, datetime)
        assert not pd.isna(result.value)


@pytest.mark.parametrize("text", ["today", "now", "Today", "tomorrow", "yesterday"])
def test_relative_words_are_invalid(text):
    result = parse_date(text)
    assert result.error == DATE_INVALID
    assert result.kind is ErrorKind.INVALID


@pytest.mark.parametrize("text", ["March 5", "5 March", "10:30"])
def test_free_text_without_year_is_invalid(text):
    assert parse_date(text).error == DATE_INVALID


def test_free_text_is_naive():
    result = parse_date("5 March 2025 10:00 +02:00")
    assert result.ok
    assert result.value == datetime(2025, 3, 5, 10, 0)
    assert result.value.tzinfo is None


def test_free_text_leaves_warning_filters_alone():
    before = list(warnings.filters)
    parse_date("March 5, 2025")
    parse_date("not a date")
    assert warnings.filters == before
