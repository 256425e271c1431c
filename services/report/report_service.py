"""Report export service: Analysis → downloadable JSON document."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from agents.eda.schemas import Analysis
from config.constants import REPORT_FILE_PREFIX
from config.settings import settings
from core.exceptions import ReportExportError, exception_context

__all__ = [
    "utc_timestamp",
    "build_report",
    "render_report_json",
    "report_filename",
    "save_report",
]


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with milliseconds and a trailing ``Z``."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_report(analysis: Analysis, file_name: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Export document for one analysis.

    Keys (in order): fileName, timestamp, summary, numericStatistics,
    categoricalStatistics.
    """
    dumped = analysis.to_dict()
    report = {
        "fileName": file_name,
        "timestamp": utc_timestamp(now),
        "summary": dumped["summary"],
        "numericStatistics": dumped["numericStats"],
        "categoricalStatistics": dumped["categoricalStats"],
    }
    return report


def render_report_json(report: Dict[str, Any], indent: Optional[int] = None) -> bytes:
    """UTF-8 JSON bytes of the report."""
    if indent is None:
        indent = settings.REPORT_JSON_INDENT
    with exception_context(to=ReportExportError, message="Failed to serialize report"):
        text = json.dumps(report, ensure_ascii=False, indent=indent, allow_nan=False)
    return text.encode("utf-8")


def report_filename(file_name: str, now: Optional[datetime] = None) -> str:
    """``analysis_<name without .csv>_<epoch ms>.json``"""
    stem = file_name[:-4] if file_name.lower().endswith(".csv") else file_name
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    epoch_ms = int(now.timestamp() * 1000)
    return f"{REPORT_FILE_PREFIX}{stem}_{epoch_ms}.json"


def save_report(
    report: Dict[str, Any],
    directory: Optional[Union[str, Path]] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write the report into ``directory`` (default REPORTS_PATH); returns the path."""
    target_dir = Path(directory) if directory is not None else settings.REPORTS_PATH
    path = target_dir / report_filename(report["fileName"], now)
    payload = render_report_json(report)

    with exception_context(
        to=ReportExportError,
        message=f"Failed to save report to {target_dir}",
        context={"path": str(path)},
    ):
        target_dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_bytes(payload)
        tmp.replace(path)

    logger.info(f"Report saved: {path} ({len(payload)} bytes)")
    return path
