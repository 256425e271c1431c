"""
DataLens - Unit Tests for the CSV Data Loader
"""

import pytest

from config.constants import TOO_FEW_FIELDS, TOO_MANY_FIELDS
from core.data_loader import DataLoader, get_data_loader, sniff_delimiter
from core.exceptions import (
    DataLoadError,
    FileTooLargeError,
    InsufficientRowsError,
    InvalidFileTypeError,
)


class TestSniffDelimiter:
    """Tests for sniff_delimiter"""

    @pytest.mark.parametrize("sample, expected", [
        ("a,b,c\n1,2,3\n4,5,6\n", ","),
        ("a;b;c\n1;2;3\n4;5;6\n", ";"),
        ("a\tb\tc\n1\t2\t3\n4\t5\t6\n", "\t"),
        ("a|b|c\n1|2|3\n4|5|6\n", "|"),
    ])
    def test_detects_candidates(self, sample, expected):
        assert sniff_delimiter(sample) == expected

    def test_single_column_falls_back_to_comma(self):
        assert sniff_delimiter("name\nAlice\nBob\n") == ","

    def test_empty_sample_falls_back_to_comma(self):
        assert sniff_delimiter("") == ","


class TestLoadText:
    """Tests for DataLoader.load_text"""

    def test_basic_table(self):
        table = get_data_loader().load_text("name,score\nAlice,10\nBob,20\n", "scores.csv")
        assert table.delimiter == ","
        assert table.grid.headers == ("name", "score")
        assert table.grid.rows == (("Alice", "10"), ("Bob", "20"))
        assert table.warnings == []

    def test_quoted_fields_keep_delimiter(self):
        table = DataLoader().load_text('city,pop\n"Paris, FR",2\n"Lyon, FR",1\n', "c.csv")
        assert table.grid.rows[0] == ("Paris, FR", "2")

    def test_semicolon_file(self):
        table = DataLoader().load_text("a;b\n1;2\n3;4\n", "semi.csv")
        assert table.delimiter == ";"
        assert table.grid.rows == (("1", "2"), ("3", "4"))

    def test_blank_lines_are_skipped(self):
        table = DataLoader().load_text("a,b\n\n1,2\n,\n\n3,4\n", "blank.csv")
        assert table.grid.n_rows == 2

    def test_header_plus_one_row(self):
        table = DataLoader().load_text("a,b\n1,2\n", "one.csv")
        assert table.grid.n_rows == 1

    def test_bom_is_stripped(self):
        table = DataLoader().load_text("\ufeffa,b\n1,2\n", "bom.csv")
        assert table.grid.headers == ("a", "b")

    def test_ragged_rows_are_kept_with_warnings(self):
        table = DataLoader().load_text("a,b,c\n1,2\n3,4,5,6\n7,8,9\n", "ragged.csv")
        assert table.grid.rows == (("1", "2", ""), ("3", "4", "5"), ("7", "8", "9"))

        codes = [(w.row, w.code) for w in table.warnings]
        assert codes == [(1, TOO_FEW_FIELDS), (2, TOO_MANY_FIELDS)]
        assert "expected 3 fields but parsed 2" in table.warnings[0].message

    @pytest.mark.parametrize("text", ["", "\n\n", "a,b\n", "a,b\n,\n"])
    def test_insufficient_rows(self, text):
        with pytest.raises(InsufficientRowsError):
            DataLoader().load_text(text, "empty.csv")

    @pytest.mark.parametrize("name", ["data.txt", "data.xlsx", "data", "csv"])
    def test_rejects_other_extensions(self, name):
        with pytest.raises(InvalidFileTypeError) as exc:
            DataLoader().load_text("a,b\n1,2\n", name)
        assert exc.value.message == "Please upload a CSV file"

    def test_extension_is_case_insensitive(self):
        table = DataLoader().load_text("a,b\n1,2\n", "DATA.CSV")
        assert table.file_name == "DATA.CSV"

    def test_to_frame(self):
        frame = DataLoader().load_text("a,b\n1,x\n2,y\n", "f.csv").to_frame()
        assert list(frame.columns) == ["a", "b"]
        assert frame.shape == (2, 2)
        assert frame.iloc[1, 1] == "y"


class TestLoadBytesAndFiles:
    """Tests for DataLoader.load_bytes / load"""

    def test_utf8_bom_bytes(self):
        table = DataLoader().load_bytes(b"\xef\xbb\xbfname,n\nA,1\n", "bom.csv")
        assert table.grid.headers == ("name", "n")

    def test_latin1_fallback(self):
        table = DataLoader().load_bytes(b"name,n\ncaf\xe9,1\n", "latin.csv")
        assert table.grid.rows[0][0] == "café"

    def test_file_too_large(self, test_settings):
        small = test_settings.model_copy(update={"MAX_UPLOAD_SIZE_MB": 1})
        payload = b"a\n" + b"1\n" * (512 * 1024 + 1)
        with pytest.raises(FileTooLargeError) as exc:
            DataLoader(small).load_bytes(payload, "big.csv")
        assert isinstance(exc.value, DataLoadError)

    def test_load_from_disk(self, sales_csv):
        table = DataLoader().load(sales_csv)
        assert table.file_name == "sales.csv"
        assert table.grid.headers == ("region", "product", "units", "price")
        assert table.grid.n_rows == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            DataLoader().load(tmp_path / "nope.csv")

    def test_extension_checked_before_existence(self, tmp_path):
        with pytest.raises(InvalidFileTypeError):
            DataLoader().load(tmp_path / "nope.json")
