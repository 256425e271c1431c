"""
DataLens - Unit Tests for Report Export
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from agents.eda.eda_orchestrator import build_analysis
from config.constants import REPORT_KEYS
from core.exceptions import ReportExportError
from services.report.report_service import (
    build_report,
    render_report_json,
    report_filename,
    save_report,
    utc_timestamp,
)

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=timezone.utc)


@pytest.fixture
def scores_report(scores):
    headers, records = scores
    return build_report(build_analysis(records, headers), "scores.csv", FIXED_NOW)


class TestTimestamps:
    def test_millisecond_utc_with_z(self):
        assert utc_timestamp(FIXED_NOW) == "2024-03-05T14:07:09.123Z"

    def test_converts_other_timezones(self):
        cet = FIXED_NOW.astimezone(timezone(timedelta(hours=1)))
        assert utc_timestamp(cet) == "2024-03-05T14:07:09.123Z"


class TestBuildReport:
    """Tests for build_report / render_report_json"""

    def test_top_level_keys_in_order(self, scores_report):
        assert tuple(scores_report) == REPORT_KEYS

    def test_content(self, scores_report):
        assert scores_report["fileName"] == "scores.csv"
        assert scores_report["timestamp"] == "2024-03-05T14:07:09.123Z"
        assert scores_report["summary"]["missingByColumn"] == {"score": 1}
        assert scores_report["numericStatistics"]["score"]["stdDev"] == 5.0
        assert scores_report["categoricalStatistics"]["name"]["Bob"] == 1

    def test_json_uses_two_space_indent(self, scores_report):
        payload = render_report_json(scores_report, indent=2)
        text = payload.decode("utf-8")
        assert text.startswith('{\n  "fileName": "scores.csv"')
        assert json.loads(text) == scores_report

    def test_non_ascii_is_kept(self, records_from):
        headers, records = records_from([["miasto"], ["Łódź"], ["Kraków"]])
        report = build_report(build_analysis(records, headers), "miasta.csv", FIXED_NOW)
        assert "Łódź".encode("utf-8") in render_report_json(report)

    def test_byte_identical_for_same_input(self, scores):
        headers, records = scores
        a = render_report_json(build_report(build_analysis(records, headers), "s.csv", FIXED_NOW))
        b = render_report_json(build_report(build_analysis(records, headers), "s.csv", FIXED_NOW))
        assert a == b


class TestReportFilename:
    def test_strips_csv_and_appends_epoch_ms(self):
        expected_ms = int(FIXED_NOW.timestamp() * 1000)
        assert report_filename("sales.csv", FIXED_NOW) == f"analysis_sales_{expected_ms}.json"

    def test_upper_case_extension(self):
        assert report_filename("SALES.CSV", FIXED_NOW).startswith("analysis_SALES_")


class TestSaveReport:
    def test_writes_into_directory(self, scores_report, tmp_path):
        path = save_report(scores_report, tmp_path / "out", FIXED_NOW)
        assert path.parent == tmp_path / "out"
        assert path.name.startswith("analysis_scores_")
        assert json.loads(path.read_text(encoding="utf-8"))["fileName"] == "scores.csv"
        assert not list((tmp_path / "out").glob("*.tmp"))

    def test_unwritable_target(self, scores_report, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ReportExportError):
            save_report(scores_report, blocker / "sub", FIXED_NOW)

    def test_nan_cannot_be_serialized(self):
        with pytest.raises(ReportExportError):
            render_report_json({"fileName": "x.csv", "value": float("nan")})
