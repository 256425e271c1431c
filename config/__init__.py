# config/__init__.py
"""
DataLens - configuration package (lazy exports).

```
    config/
    ├── __init__.py          # Lazy exports (this file)
    ├── settings.py          # Application settings
    ├── constants.py         # Engine constants (caps, report keys)
    └── logging_config.py    # loguru setup
```

Usage:
```python
    from config import settings, setup_logging
```
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Tuple

_LAZY_EXPORTS: Dict[str, Tuple[str, str]] = {
    "settings": ("config.settings", "settings"),
    "Settings": ("config.settings", "Settings"),
    "get_settings": ("config.settings", "get_settings"),
    "setup_logging": ("config.logging_config", "setup_logging"),
    "get_logger": ("config.logging_config", "get_logger"),
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
