# === MODULE DESCRIPTION ===
"""
DataLens - Statistical Analyzer
Descriptive statistics for numeric columns and value counts for categorical
columns, computed directly over typed Records.

Numeric (per column holding at least one number; text and blanks are skipped,
never treated as zero):
  min, max, mean, median (positional: sorted[n // 2]), stdDev (population)

Categorical (per column holding at least one non-empty text):
  {value → count}, exact case-sensitive match, keys in first-seen order

Contract:
{
  "numericStats":     {"<col>": {"min": float, "max": float, "mean": float,
                                 "median": float, "stdDev": float}},
  "categoricalStats": {"<col>": {"<value>": int}}
}
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np
from loguru import logger

from agents.eda.schemas import NumericColumnStats
from core.cell_types import NumberCell, TextCell
from core.data_model import Record, categorical_columns, numeric_columns

__all__ = [
    "positional_median",
    "scaled_mean",
    "population_std",
    "describe_numbers",
    "numeric_statistics",
    "categorical_statistics",
]

_log = logger.bind(agent="StatisticalAnalyzer")


# === NUMERIC ===
def positional_median(values: Sequence[float]) -> float:
    """
    Element at index ``n // 2`` of the ascending sort.

    For an even count this is the upper of the two middle values, not their
    average.
    """
    if len(values) == 0:
        raise ValueError("positional_median() of an empty sequence")
    ordered = np.sort(np.asarray(values, dtype="float64"), kind="stable")
    return float(ordered[len(ordered) // 2])


def _scale(arr: np.ndarray) -> float:
    scale = float(np.max(np.abs(arr)))
    return scale if scale > 0 else 1.0


def scaled_mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean that stays finite for finite input.

    When the plain sum overflows (values near ``1e308``), the values are
    divided by the largest magnitude before averaging and scaled back. The
    result is clamped to ``[min, max]``.
    """
    arr = np.asarray(values, dtype="float64")
    with np.errstate(over="ignore"):
        mean = float(arr.mean())
    if not np.isfinite(mean):
        scale = _scale(arr)
        mean = float((arr / scale).mean()) * scale
    return min(max(mean, float(arr.min())), float(arr.max()))


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation (ddof=0), finite for finite input."""
    arr = np.asarray(values, dtype="float64")
    with np.errstate(over="ignore", invalid="ignore"):
        std = float(arr.std(ddof=0))
    if not np.isfinite(std):
        scale = _scale(arr)
        std = float((arr / scale).std(ddof=0)) * scale
    return std


def describe_numbers(values: Sequence[float]) -> NumericColumnStats:
    """min / max / mean / positional median / population std of ``values``."""
    arr = np.asarray(values, dtype="float64")
    lo = float(arr.min())
    hi = float(arr.max())

    # constant column: avoid float noise in mean/std
    if lo == hi:
        return NumericColumnStats(min=lo, max=hi, mean=lo, median=lo, std_dev=0.0)

    return NumericColumnStats(
        min=lo,
        max=hi,
        mean=scaled_mean(arr),
        median=positional_median(arr),
        std_dev=population_std(arr),
    )


def _numbers(records: Sequence[Record], column: str) -> List[float]:
    out = []
    for r in records:
        cell = r.get(column)
        if isinstance(cell, NumberCell):
            out.append(cell.value)
    return out


def numeric_statistics(records: Sequence[Record], headers: Sequence[str]) -> Dict[str, NumericColumnStats]:
    stats: Dict[str, NumericColumnStats] = {}
    for column in numeric_columns(records, headers):
        if column in stats:
            continue
        stats[column] = describe_numbers(_numbers(records, column))
    _log.debug(f"Numeric statistics for {len(stats)} columns")
    return stats


# === CATEGORICAL ===
def categorical_statistics(records: Sequence[Record], headers: Sequence[str]) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = {}
    for column in categorical_columns(records, headers):
        if column in stats:
            continue
        counts: Dict[str, int] = {}
        for r in records:
            cell = r.get(column)
            if isinstance(cell, TextCell) and not cell.is_blank:
                counts[cell.text] = counts.get(cell.text, 0) + 1
        stats[column] = counts
    _log.debug(f"Categorical statistics for {len(stats)} columns")
    return stats
