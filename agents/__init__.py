# agents/__init__.py
"""
DataLens - agents package.

```
    agents/
    └── eda/                 # Summary, statistics, chart aggregation
```
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Tuple

_LAZY_EXPORTS: Dict[str, Tuple[str, str]] = {
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
