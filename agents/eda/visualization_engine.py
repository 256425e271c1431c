# agents/eda/visualization_engine.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Visualization Engine                                          ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  Chart-ready series from typed Records:                                   ║
║    ✓ Pie slices (top 10 groups, share of all rows)                        ║
║    ✓ Scatter points (rows where x and y are both numeric)                 ║
║    ✓ Grouped means (top 15 groups, numeric y probe on first row)          ║
║    ✓ Grouped counts (top 15 groups)                                       ║
╚════════════════════════════════════════════════════════════════════════════╝

Dispatch order:
```
    pie     + x            → aggregate_pie
    scatter + x + y        → aggregate_scatter
    scatter without y      → []
    y and first y numeric  → aggregate_mean
    otherwise              → aggregate_counts
```

Groups are keyed by the display form of the x cell (``10.0`` → ``"10"``),
kept in first-seen order; blank x values form their own ``""`` group. Empty
input, a missing x selection and an x column that is not a header all give
an empty series. An unknown y column counts as no y selection.

Usage:
```python
    from agents.eda.visualization_engine import build_series

    points = build_series(records, "bar", x="region", y="sales")
    payload = series_to_records(points)
```
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

from loguru import logger

from agents.eda.schemas import (
    CategoryCount,
    CategoryMean,
    ChartKind,
    PieSlice,
    ScatterPoint,
    SeriesPoint,
)
from agents.eda.statistical_analysis import scaled_mean
from config.constants import CATEGORY_MAX_GROUPS, PERCENTAGE_DECIMALS, PIE_MAX_SLICES
from core.cell_types import NumberCell, display_value, format_number
from core.data_model import Record
from core.exceptions import InvalidSelectionError

__all__ = [
    "parse_chart_kind",
    "group_by_display",
    "aggregate_pie",
    "aggregate_scatter",
    "aggregate_mean",
    "aggregate_counts",
    "build_series",
    "series_to_records",
]

_log = logger.bind(component="visualization_engine")


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def parse_chart_kind(kind: Union[str, ChartKind]) -> ChartKind:
    """
    Raises:
        InvalidSelectionError: unknown chart kind
    """
    if isinstance(kind, ChartKind):
        return kind
    try:
        return ChartKind(str(kind).strip().lower())
    except ValueError as e:
        raise InvalidSelectionError(
            f"Unknown chart type: {kind!r}",
            details={"allowed": [k.value for k in ChartKind]},
            cause=e,
        ) from e


def group_by_display(records: Sequence[Record], column: str) -> Dict[str, List[Record]]:
    """Display form of ``column`` → records, in first-seen order."""
    groups: Dict[str, List[Record]] = {}
    for r in records:
        groups.setdefault(display_value(r.get(column)), []).append(r)
    return groups


# ═══════════════════════════════════════════════════════════════════════════
# Aggregations
# ═══════════════════════════════════════════════════════════════════════════

def aggregate_pie(records: Sequence[Record], x: str, limit: int = PIE_MAX_SLICES) -> List[PieSlice]:
    """Group sizes with percentage of *all* records, first ``limit`` groups."""
    total = len(records)
    if total == 0:
        return []
    groups = group_by_display(records, x)
    return [
        PieSlice(
            name=name,
            value=len(members),
            percentage=round(len(members) / total * 100, PERCENTAGE_DECIMALS),
        )
        for name, members in list(groups.items())[:limit]
    ]


def aggregate_scatter(records: Sequence[Record], x: str, y: str) -> List[ScatterPoint]:
    """One point per record whose x and y cells are both numeric. No cap."""
    points = []
    for r in records:
        xc, yc = r.get(x), r.get(y)
        if isinstance(xc, NumberCell) and isinstance(yc, NumberCell):
            points.append(ScatterPoint(
                x=xc.value,
                y=yc.value,
                label=f"{x}: {format_number(xc.value)}, {y}: {format_number(yc.value)}",
            ))
    return points


def aggregate_mean(
    records: Sequence[Record],
    x: str,
    y: str,
    limit: int = CATEGORY_MAX_GROUPS,
) -> List[CategoryMean]:
    """Mean of numeric y per x group; ``value`` is None for groups without one."""
    out = []
    for name, members in list(group_by_display(records, x).items())[:limit]:
        ys = [c.value for c in (m.get(y) for m in members) if isinstance(c, NumberCell)]
        out.append(CategoryMean(
            name=name,
            value=scaled_mean(ys) if ys else None,
            count=len(members),
        ))
    return out


def aggregate_counts(records: Sequence[Record], x: str, limit: int = CATEGORY_MAX_GROUPS) -> List[CategoryCount]:
    """Group sizes, first ``limit`` groups."""
    return [
        CategoryCount(name=name, value=len(members))
        for name, members in list(group_by_display(records, x).items())[:limit]
    ]


# ═══════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════

def build_series(
    records: Sequence[Record],
    kind: Union[str, ChartKind],
    x: Optional[str],
    y: Optional[str] = None,
) -> List[SeriesPoint]:
    """
    📈 **Build Chart Series**

    Args:
        records: Typed data rows
        kind: bar / line / pie / scatter
        x: Grouping (or horizontal) column
        y: Optional value column

    Returns:
        List of points; empty when nothing qualifies

    Raises:
        InvalidSelectionError: unknown chart kind
    """
    chart = parse_chart_kind(kind)

    if not records or not x:
        return []
    if not records[0].has_column(x):
        _log.warning(f"Column {x!r} not found; returning empty series")
        return []
    if y and not records[0].has_column(y):
        _log.warning(f"Column {y!r} not found; ignoring y selection")
        y = None

    if chart is ChartKind.PIE:
        series: List[SeriesPoint] = list(aggregate_pie(records, x))
    elif chart is ChartKind.SCATTER:
        series = list(aggregate_scatter(records, x, y)) if y else []
    elif y and isinstance(records[0].get(y), NumberCell):
        series = list(aggregate_mean(records, x, y))
    else:
        series = list(aggregate_counts(records, x))

    _log.debug(f"{chart.value} series x={x!r} y={y!r}: {len(series)} points")
    return series


def series_to_records(series: Sequence[SeriesPoint]) -> List[dict]:
    """JSON-ready list of point dictionaries."""
    return [point.to_dict() for point in series]
