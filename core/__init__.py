# core/__init__.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Core Package                                                  ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  ✓ Lazy Module Loading                                                   ║
║  ✓ Clean Public API                                                      ║
╚════════════════════════════════════════════════════════════════════════════╝

Core Package Structure:
```
    core/
    ├── __init__.py          # Lazy exports (this file)
    ├── base_agent.py        # Agent framework
    ├── cell_types.py        # NumberCell / TextCell inference
    ├── data_model.py        # RawGrid, Record, ParseWarning
    ├── data_loader.py       # CSV ingestion
    └── exceptions.py        # Error taxonomy
```

Usage:
```python
    from core import get_data_loader, build_records

    table = get_data_loader().load("sales.csv")
    records = build_records(table.grid)
```
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Tuple

_LAZY_EXPORTS: Dict[str, Tuple[str, str]] = {
    # Agent framework
    "BaseAgent": ("core.base_agent", "BaseAgent"),
    "AgentResult": ("core.base_agent", "AgentResult"),
    # Cells
    "NumberCell": ("core.cell_types", "NumberCell"),
    "TextCell": ("core.cell_types", "TextCell"),
    "infer_cell": ("core.cell_types", "infer_cell"),
    "display_value": ("core.cell_types", "display_value"),
    # Data model
    "RawGrid": ("core.data_model", "RawGrid"),
    "Record": ("core.data_model", "Record"),
    "ParseWarning": ("core.data_model", "ParseWarning"),
    "build_records": ("core.data_model", "build_records"),
    # Loader
    "DataLoader": ("core.data_loader", "DataLoader"),
    "LoadedTable": ("core.data_loader", "LoadedTable"),
    "get_data_loader": ("core.data_loader", "get_data_loader"),
    # Errors
    "DataLensException": ("core.exceptions", "DataLensException"),
}

__all__ = tuple(_LAZY_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    """Resolve exports on first access and cache them in module globals."""
    if name in _LAZY_EXPORTS:
        mod_name, symbol = _LAZY_EXPORTS[name]
        obj = getattr(import_module(mod_name), symbol)
        globals()[name] = obj
        return obj
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> List[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))
