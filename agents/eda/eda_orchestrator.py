# === MODULE DESCRIPTION ===
"""
DataLens - EDA Orchestrator
Builds the immutable ``Analysis`` snapshot for one loaded dataset: summary,
numeric statistics and categorical statistics, each computed independently
over the same typed Records.

``build_analysis`` is the pure entry point. ``EDAOrchestrator`` wraps it in
the agent lifecycle, adds timing, and turns tokenizer row warnings into
result warnings (status "partial").

Contract (AgentResult.data):
{
  "analysis": Analysis,
  "telemetry": {"n_records": int, "n_headers": int, "n_parse_warnings": int}
}
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from loguru import logger

from agents.eda.missing_data_analyzer import build_summary
from agents.eda.schemas import Analysis
from agents.eda.statistical_analysis import categorical_statistics, numeric_statistics
from core.base_agent import AgentResult, BaseAgent
from core.data_model import ParseWarning, Record
from core.exceptions import InsufficientRowsError

__all__ = ["build_analysis", "EDAOrchestrator"]


# === PURE BUILDER ===
def build_analysis(records: Sequence[Record], headers: Sequence[str]) -> Analysis:
    """Summary + numeric + categorical statistics for ``records``."""
    return Analysis(
        summary=build_summary(records, headers),
        numeric_stats=numeric_statistics(records, headers),
        categorical_stats=categorical_statistics(records, headers),
    )


# === AGENT ===
class EDAOrchestrator(BaseAgent):
    """Runs the analysis for one dataset inside the agent lifecycle."""

    def __init__(self) -> None:
        super().__init__(
            name="EDAOrchestrator",
            description="Summary, numeric and categorical statistics of a dataset",
        )
        self._log = logger.bind(agent="EDAOrchestrator")

    def validate_input(self, **kwargs) -> bool:
        records = kwargs.get("records")
        headers = kwargs.get("headers")
        if records is None or headers is None:
            raise ValueError("EDAOrchestrator requires 'records' and 'headers'")
        if len(records) < 1:
            raise InsufficientRowsError(
                "CSV file must contain at least a header row and one data row",
                details={"rows": len(records)},
            )
        return True

    def execute(
        self,
        records: Sequence[Record],
        headers: Sequence[str],
        parse_warnings: Optional[List[ParseWarning]] = None,
        **kwargs,
    ) -> AgentResult:
        result = AgentResult(agent_name=self.name)

        analysis = build_analysis(records, headers)
        result.add_data(
            analysis=analysis,
            telemetry={
                "n_records": len(records),
                "n_headers": len(headers),
                "n_parse_warnings": len(parse_warnings or []),
            },
        )

        for w in parse_warnings or []:
            result.add_warning(f"Row {w.row}: {w.message} ({w.code})")

        summary = analysis.summary
        self._log.info(
            f"Analysis ready: {summary.total_rows} rows, "
            f"{summary.numeric_column_count} numeric / {summary.categorical_column_count} categorical columns"
        )
        return result
