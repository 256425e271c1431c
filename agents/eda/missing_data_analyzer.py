# === MODULE DESCRIPTION ===
"""
DataLens - Missing Data / Summary Builder

Dataset-level summary: row and column counts, numbers of numeric and
categorical columns, and missing values per column.

A cell is missing only when it holds the empty text value. Numbers (zero
included) are never missing. Columns without missing cells are omitted from
``missingByColumn``.

Contract (Summary, dumped by alias):
{
  "totalRows": int, "totalColumns": int,
  "numericColumnCount": int, "categoricalColumnCount": int,
  "missingByColumn": {"<col>": int}
}
"""

from __future__ import annotations

from typing import Dict, Sequence

from loguru import logger

from agents.eda.schemas import Summary
from core.cell_types import is_blank
from core.data_model import Record, categorical_columns, numeric_columns

__all__ = ["missing_by_column", "build_summary"]


# === MISSING COUNTS ===
def missing_by_column(records: Sequence[Record], headers: Sequence[str]) -> Dict[str, int]:
    """Header → number of blank cells, only for headers with at least one."""
    out: Dict[str, int] = {}
    for header in dict.fromkeys(headers):
        n_missing = sum(1 for r in records if is_blank(r.get(header)))
        if n_missing > 0:
            out[header] = n_missing
    return out


# === SUMMARY ===
def build_summary(records: Sequence[Record], headers: Sequence[str]) -> Summary:
    missing = missing_by_column(records, headers)
    summary = Summary(
        total_rows=len(records),
        total_columns=len(headers),
        numeric_column_count=len(numeric_columns(records, headers)),
        categorical_column_count=len(categorical_columns(records, headers)),
        missing_by_column=missing,
    )

    if missing:
        worst = max(missing, key=missing.get)
        logger.bind(agent="MissingDataAnalyzer").debug(
            f"{len(missing)} columns with missing values (max: {worst!r} = {missing[worst]})"
        )
    return summary
