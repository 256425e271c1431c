# agents/eda/__init__.py
"""
DataLens - exploratory analysis.

```
    agents/eda/
    ├── schemas.py                # Analysis / Summary / series point models
    ├── missing_data_analyzer.py  # Dataset summary (rows, columns, missing)
    ├── statistical_analysis.py   # Numeric + categorical statistics
    ├── eda_orchestrator.py       # Analysis agent
    └── visualization_engine.py   # Chart series aggregation
```
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Tuple

_LAZY_EXPORTS: Dict[str, Tuple[str, str]] = {
    "Analysis": ("agents.eda.schemas", "Analysis"),
    "Summary": ("agents.eda.schemas", "Summary"),
    "NumericColumnStats": ("agents.eda.schemas", "NumericColumnStats"),
    "ChartKind": ("agents.eda.schemas", "ChartKind"),
    "build_summary": ("agents.eda.missing_data_analyzer", "build_summary"),
    "numeric_statistics": ("agents.eda.statistical_analysis", "numeric_statistics"),
    "categorical_statistics": ("agents.eda.statistical_analysis", "categorical_statistics"),
    "EDAOrchestrator": ("agents.eda.eda_orchestrator", "EDAOrchestrator"),
    "build_analysis": ("agents.eda.eda_orchestrator", "build_analysis"),
    "build_series": ("agents.eda.visualization_engine", "build_series"),
}

__all__ = tuple(_LAZY_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name in _LAZY_EXPORTS:
        mod_name, symbol = _LAZY_EXPORTS[name]
        obj = getattr(import_module(mod_name), symbol)
        globals()[name] = obj
        return obj
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> List[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
