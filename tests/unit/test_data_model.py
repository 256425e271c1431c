"""
DataLens - Unit Tests for RawGrid / Record model
"""

import pytest

from core.cell_types import NumberCell, TextCell
from core.data_model import (
    ParseWarning,
    RawGrid,
    build_records,
    categorical_columns,
    numeric_columns,
)
from core.exceptions import ErrorCode, InsufficientRowsError


class TestRawGrid:
    """Tests for RawGrid.from_rows"""

    def test_trims_cells(self):
        grid = RawGrid.from_rows([[" a ", "b"], [" 1", "x  "]])
        assert grid.headers == ("a", "b")
        assert grid.rows == (("1", "x"),)

    def test_pads_short_rows(self):
        grid = RawGrid.from_rows([["a", "b", "c"], ["1"]])
        assert grid.rows == (("1", "", ""),)

    def test_truncates_long_rows(self):
        grid = RawGrid.from_rows([["a", "b"], ["1", "2", "3", "4"]])
        assert grid.rows == (("1", "2"),)

    def test_none_cells_become_empty(self):
        grid = RawGrid.from_rows([["a", "b"], ["1", None]])
        assert grid.rows == (("1", ""),)

    def test_drops_blank_rows(self):
        grid = RawGrid.from_rows([["a", "b"], ["", "  "], ["1", "2"], [], ["", ""]])
        assert grid.n_rows == 1
        assert grid.n_columns == 2

    def test_header_and_one_row_is_accepted(self):
        grid = RawGrid.from_rows([["a"], ["1"]])
        assert grid.n_rows == 1

    @pytest.mark.parametrize("rows", [
        [],
        [["a", "b"]],
        [["a", "b"], ["", ""]],
        [["", ""], [" "]],
    ])
    def test_insufficient_rows(self, rows):
        with pytest.raises(InsufficientRowsError) as exc:
            RawGrid.from_rows(rows)
        assert exc.value.error_code == ErrorCode.INSUFFICIENT_ROWS
        assert "header row and one data row" in exc.value.message


class TestRecords:
    """Tests for build_records and column classes"""

    def test_cells_are_typed(self, scores):
        headers, records = scores
        assert records[0].get("score") == NumberCell(10.0)
        assert records[0].get("name") == TextCell("Alice")
        assert records[2].get("score") == TextCell("")

    def test_indexes_follow_kept_rows(self):
        grid = RawGrid.from_rows([["a"], ["x"], [""], ["y"]])
        records = build_records(grid)
        assert [r.index for r in records] == [0, 1]

    def test_duplicate_header_rightmost_wins(self):
        grid = RawGrid.from_rows([["a", "a"], ["1", "2"]])
        record = build_records(grid)[0]
        assert record.get("a") == NumberCell(2.0)

    def test_records_are_read_only(self, scores):
        _, records = scores
        with pytest.raises(TypeError):
            records[0].values["score"] = NumberCell(1.0)

    def test_unknown_column(self, scores):
        _, records = scores
        assert records[0].get("nope") is None
        assert not records[0].has_column("nope")

    def test_column_classes(self, sales):
        headers, records = sales
        assert numeric_columns(records, headers) == ["units", "price"]
        # price holds "n/a" so it is mixed
        assert categorical_columns(records, headers) == ["region", "product", "price"]

    def test_blank_only_column_has_no_class(self, records_from):
        headers, records = records_from([["a", "b"], ["1", ""], ["2", ""]])
        assert numeric_columns(records, headers) == ["a"]
        assert categorical_columns(records, headers) == []


class TestParseWarning:
    def test_to_dict(self):
        w = ParseWarning(row=3, code="TooFewFields", message="Too few fields")
        assert w.to_dict() == {
            "row": 3,
            "code": "TooFewFields",
            "message": "Too few fields",
            "kind": "parse_warning",
        }
