from __future__ import annotations

from decimal import Decimal

import pytest

from receiptgen.models.cell import Cell, CellKind, classify_cell
from receiptgen.models.parse_result import ErrorKind
from receiptgen.parsers.name import NAME_MISSING, NAME_TOO_SHORT, parse_name
from receiptgen.parsers.text import cell_to_text


@pytest.mark.parametrize("raw", [None, ""])
def test_absent_name_is_missing(raw):
    result = parse_name(raw)
    assert result.error == NAME_MISSING
    assert result.kind is ErrorKind.MISSING


@pytest.mark.parametrize("raw", ["A", " B ", "   "])
def test_short_name(raw):
    result = parse_name(raw)
    assert result.error == NAME_TOO_SHORT
    assert result.kind is ErrorKind.TOO_SHORT


def test_name_is_trimmed():
    result = parse_name("  ישראל ישראלי  ")
    assert result.ok
    assert result.value == "ישראל ישראלי"


def test_two_characters_is_enough():
    assert parse_name("Li").value == "Li"


def test_numeric_name_is_text():
    assert parse_name(1234).value == "1234"
    assert parse_name(12.0).value == "12"


class TestClassifyCell:
    def test_kinds(self):
        assert classify_cell(None).kind is CellKind.ABSENT
        assert classify_cell("").kind is CellKind.ABSENT
        assert classify_cell("x").kind is CellKind.TEXT
        assert classify_cell(3).kind is CellKind.NUMBER
        assert classify_cell(float("nan")).kind is CellKind.NUMBER

    def test_only_absent_cells_are_absent(self):
        assert classify_cell(None).is_absent
        assert classify_cell("").is_absent
        assert not classify_cell(" ").is_absent
        assert not classify_cell(float("nan")).is_absent
        assert not classify_cell(0).is_absent

    def test_bool_is_text(self):
        cell = classify_cell(True)
        assert cell == Cell(CellKind.TEXT, "True")

    def test_cell_passes_through(self):
        cell = Cell(CellKind.TEXT, "abc")
        assert classify_cell(cell) is cell


class TestCellToText:
    def test_absent_is_none(self):
        assert cell_to_text(classify_cell(None)) is None

    def test_integral_numbers_drop_fraction(self):
        assert cell_to_text(classify_cell(1234.0)) == "1234"
        assert cell_to_text(classify_cell(Decimal("77.00"))) == "77"

    def test_fractional_number_kept(self):
        assert cell_to_text(classify_cell(12.5)) == "12.5"

    def test_text_trimmed(self):
        assert cell_to_text(classify_cell("  card ")) == "card"
