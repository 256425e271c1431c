# backend/session_manager.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Analysis Session                                              ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  ✓ One Loaded File at a Time                                             ║
║  ✓ Typed Records + Immutable Analysis Snapshot                           ║
║  ✓ Column / Chart Selection                                              ║
║  ✓ Series & Report Export                                                ║
║  ✓ Failed Loads Keep the Previous State                                  ║
╚════════════════════════════════════════════════════════════════════════════╝

The session is the caller-owned context around the pure engine functions:
it holds the current grid, Records and Analysis, plus the user's selection
(x column, optional y column, chart kind).

Usage:
```python
    from backend.session_manager import AnalysisSession

    session = AnalysisSession()
    analysis = session.load_file("sales.csv")

    session.select_columns("region", "revenue")
    session.set_chart_kind("pie")
    points = session.series()

    name, payload = session.export_report()
```

Dependencies:
    • loguru
"""

from __future__ import annotations

import secrets
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from loguru import logger

from agents.eda.eda_orchestrator import EDAOrchestrator
from agents.eda.schemas import Analysis, ChartKind, SeriesPoint
from agents.eda.visualization_engine import build_series, parse_chart_kind
from config.logging_config import clear_session_context, set_session_context
from config.settings import Settings, settings as default_settings
from core.data_loader import DataLoader, LoadedTable
from core.data_model import ParseWarning, RawGrid, Record, build_records
from core.exceptions import (
    AgentExecutionError,
    DataLoadError,
    InvalidSelectionError,
    handle_exception,
)
from services.report.report_service import (
    build_report,
    render_report_json,
    report_filename,
    save_report,
)

__all__ = ["AnalysisSession"]


class AnalysisSession:
    """
    🗂️ **Analysis Session**

    State after a successful load:
        file_name, headers, records, analysis, warnings,
        x_column (first header), y_column (second header or None),
        chart_kind (bar)
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        loader: Optional[DataLoader] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.config = config or default_settings
        self.loader = loader or DataLoader(self.config)
        self.session_id = session_id or secrets.token_hex(8)
        self.orchestrator = EDAOrchestrator()

        self._lock = threading.RLock()
        self._log = logger.bind(component="session", session=self.session_id)

        self.file_name: Optional[str] = None
        self.headers: Tuple[str, ...] = ()
        self.records: List[Record] = []
        self.analysis: Optional[Analysis] = None
        self.warnings: List[ParseWarning] = []

        self.x_column: Optional[str] = None
        self.y_column: Optional[str] = None
        self.chart_kind: ChartKind = ChartKind.BAR

    # ───────────────────────────────────────────────────────────────────
    # Loading
    # ───────────────────────────────────────────────────────────────────

    @property
    def is_loaded(self) -> bool:
        return self.analysis is not None

    def load_file(self, path: Union[str, Path]) -> Analysis:
        """Load a CSV file from disk and replace the session state."""
        with self._session_log_context():
            return self._install(self.loader.load(path))

    def load_bytes(self, content: bytes, file_name: str) -> Analysis:
        """Load an uploaded CSV payload and replace the session state."""
        with self._session_log_context():
            return self._install(self.loader.load_bytes(content, file_name))

    def load_grid(
        self,
        grid: RawGrid,
        file_name: str,
        warnings: Sequence[ParseWarning] = (),
    ) -> Analysis:
        """Install an already tokenized grid."""
        with self._session_log_context():
            table = LoadedTable(file_name=file_name, delimiter="", grid=grid, warnings=list(warnings))
            return self._install(table)

    def _install(self, table: LoadedTable) -> Analysis:
        # everything is computed before any attribute is touched
        records = build_records(table.grid)
        # input errors reach the caller with their own kind
        self.orchestrator.validate_input(records=records, headers=table.grid.headers)
        result = self.orchestrator.run(
            records=records,
            headers=table.grid.headers,
            parse_warnings=table.warnings,
        )
        if result.is_failed():
            raise AgentExecutionError(
                f"Analysis failed for {table.file_name}",
                details={"errors": result.errors},
            )
        analysis: Analysis = result.data["analysis"]

        with self._lock:
            self.file_name = table.file_name
            self.headers = table.grid.headers
            self.records = records
            self.analysis = analysis
            self.warnings = list(table.warnings)

            self.x_column = self.headers[0] if self.headers else None
            self.y_column = self.headers[1] if len(self.headers) > 1 else None
            self.chart_kind = ChartKind.BAR

        self._log.info(
            f"Session loaded {table.file_name}: {len(records)} records, "
            f"{len(self.warnings)} warnings, status={result.status}"
        )
        return analysis

    # ───────────────────────────────────────────────────────────────────
    # Selection
    # ───────────────────────────────────────────────────────────────────

    def select_columns(self, x: str, y: Optional[str] = None) -> None:
        """
        Raises:
            InvalidSelectionError: column is not a header of the loaded file
        """
        for column in (x, y):
            if column is not None and column not in self.headers:
                raise InvalidSelectionError(
                    f"Unknown column: {column!r}",
                    details={"headers": list(self.headers)},
                )
        with self._lock:
            self.x_column = x
            self.y_column = y

    def set_chart_kind(self, kind: Union[str, ChartKind]) -> ChartKind:
        chart = parse_chart_kind(kind)
        with self._lock:
            self.chart_kind = chart
        return chart

    def series(self) -> List[SeriesPoint]:
        """Series for the current selection; empty before a load."""
        if not self.is_loaded:
            return []
        return build_series(self.records, self.chart_kind, self.x_column, self.y_column)

    # ───────────────────────────────────────────────────────────────────
    # Report
    # ───────────────────────────────────────────────────────────────────

    def _require_analysis(self) -> Analysis:
        if self.analysis is None or self.file_name is None:
            raise DataLoadError("No data loaded")
        return self.analysis

    def build_report(self, now: Optional[datetime] = None) -> dict:
        return build_report(self._require_analysis(), self.file_name, now)

    def export_report(self, now: Optional[datetime] = None) -> Tuple[str, bytes]:
        """Download name and JSON payload for the current analysis."""
        report = self.build_report(now)
        return report_filename(self.file_name, now), render_report_json(report, self.config.REPORT_JSON_INDENT)

    def save_report(self, directory: Optional[Union[str, Path]] = None, now: Optional[datetime] = None) -> Path:
        return save_report(self.build_report(now), directory or self.config.REPORTS_PATH, now)

    # ───────────────────────────────────────────────────────────────────
    # Helpers
    # ───────────────────────────────────────────────────────────────────

    @staticmethod
    def user_message(exc: BaseException) -> str:
        """User-visible message for an error raised by any session call."""
        return handle_exception(exc)

    @contextmanager
    def _session_log_context(self) -> Iterator[None]:
        set_session_context(self.session_id)
        try:
            yield
        finally:
            clear_session_context()

    def __repr__(self) -> str:
        return (
            f"AnalysisSession(id={self.session_id!r}, file={self.file_name!r}, "
            f"records={len(self.records)}, chart={self.chart_kind.value!r})"
        )
