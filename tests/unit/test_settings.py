"""
DataLens - Unit Tests for Settings
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.CSV_DELIMITERS == ",;\t|"
        assert s.ALLOWED_EXTENSIONS == [".csv"]
        assert s.REPORT_JSON_INDENT == 2
        assert s.max_upload_bytes == s.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_extensions_are_normalized(self):
        s = Settings(ALLOWED_EXTENSIONS=["CSV", ".Tsv"])
        assert s.ALLOWED_EXTENSIONS == [".csv", ".tsv"]

    @pytest.mark.parametrize("field, value", [
        ("LOG_LEVEL", "LOUD"),
        ("MAX_UPLOAD_SIZE_MB", 0),
        ("MAX_UPLOAD_SIZE_MB", 10_001),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    @pytest.mark.parametrize("delimiters", ["", ",,;", ",a", ";1", ",\"", ",\n"])
    def test_invalid_delimiters(self, delimiters):
        with pytest.raises(ValidationError):
            Settings(CSV_DELIMITERS=delimiters)

    def test_custom_delimiters(self):
        assert Settings(CSV_DELIMITERS=";|").CSV_DELIMITERS == ";|"
