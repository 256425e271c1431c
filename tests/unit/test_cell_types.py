"""
DataLens - Unit Tests for Cell Type Inference
"""

import pytest

from core.cell_types import (
    NumberCell,
    TextCell,
    display_value,
    format_number,
    infer_cell,
    is_blank,
    is_number,
    parse_number,
)


class TestParseNumber:
    """Tests for parse_number"""

    @pytest.mark.parametrize("raw, expected", [
        ("10", 10.0),
        ("-3.5", -3.5),
        ("+7", 7.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("2.5E-2", 0.025),
        ("0", 0.0),
    ])
    def test_well_formed_literals(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [
        "", "abc", "12abc", "NaN", "nan", "Infinity", "inf", "-inf",
        "0x1F", "1_000", "1,000", "1,5", "1e", ".", "+", "1e999", "--1",
    ])
    def test_rejected_literals(self, raw):
        assert parse_number(raw) is None


class TestInferCell:
    """Tests for infer_cell"""

    def test_number(self):
        assert infer_cell("42") == NumberCell(42.0)

    def test_text(self):
        assert infer_cell("Alice") == TextCell("Alice")

    def test_blank_is_text(self):
        cell = infer_cell("")
        assert isinstance(cell, TextCell)
        assert cell.is_blank

    def test_zero_is_not_blank(self):
        cell = infer_cell("0")
        assert is_number(cell)
        assert not is_blank(cell)

    def test_overflow_stays_text(self):
        assert infer_cell("1e999") == TextCell("1e999")


class TestDisplayValue:
    """Tests for display_value / format_number"""

    def test_integral_float_has_no_fraction(self):
        assert display_value(NumberCell(10.0)) == "10"
        assert display_value(NumberCell(-3.0)) == "-3"

    def test_fractional_uses_shortest_repr(self):
        assert display_value(NumberCell(2.5)) == "2.5"
        assert format_number(0.1 + 0.2) == "0.30000000000000004"

    def test_huge_integral_uses_exponent(self):
        assert format_number(1e21) == "1e+21"

    def test_text_verbatim(self):
        assert display_value(TextCell("North")) == "North"

    def test_missing_cell_is_empty(self):
        assert display_value(None) == ""

    def test_negative_zero(self):
        assert format_number(-0.0) == "0"
