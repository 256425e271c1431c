# agents/eda/schemas.py
"""
DataLens - analysis and series models.

All models are frozen pydantic models. Field names are snake_case in Python
and dump to the stable camelCase names (``by_alias=True``):

```
    Analysis
    ├── summary            Summary {totalRows, totalColumns, numericColumnCount,
    │                               categoricalColumnCount, missingByColumn}
    ├── numericStats       {column → NumericColumnStats {min, max, mean, median, stdDev}}
    └── categoricalStats   {column → {value → count}}
```

Series points (one shape per aggregation mode):

```
    CategoryCount   {name, value}              count mode
    CategoryMean    {name, value, count}       mean mode (value may be null)
    PieSlice        {name, value, percentage}  pie
    ScatterPoint    {x, y, label}              scatter
```
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "ChartKind",
    "Summary",
    "NumericColumnStats",
    "Analysis",
    "CategoryCount",
    "CategoryMean",
    "PieSlice",
    "ScatterPoint",
    "SeriesPoint",
]


class ChartKind(str, Enum):
    """Supported chart shapes."""
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """camelCase, JSON-ready dictionary."""
        return self.model_dump(mode="json", by_alias=True)


# === ANALYSIS ===

class Summary(_FrozenModel):
    total_rows: int = Field(ge=0)
    total_columns: int = Field(ge=0)
    numeric_column_count: int = Field(ge=0)
    categorical_column_count: int = Field(ge=0)
    missing_by_column: Dict[str, int] = Field(default_factory=dict)


class NumericColumnStats(_FrozenModel):
    min: float
    max: float
    mean: float
    median: float
    std_dev: float = Field(ge=0.0)


class Analysis(_FrozenModel):
    """Immutable snapshot of one loaded dataset."""
    summary: Summary
    numeric_stats: Dict[str, NumericColumnStats] = Field(default_factory=dict)
    categorical_stats: Dict[str, Dict[str, int]] = Field(default_factory=dict)


# === SERIES POINTS ===

class CategoryCount(_FrozenModel):
    name: str
    value: int


class CategoryMean(_FrozenModel):
    name: str
    value: Optional[float] = None
    count: int


class PieSlice(_FrozenModel):
    name: str
    value: int
    percentage: float


class ScatterPoint(_FrozenModel):
    x: float
    y: float
    label: str


SeriesPoint = Union[CategoryCount, CategoryMean, PieSlice, ScatterPoint]
Series = List[SeriesPoint]
