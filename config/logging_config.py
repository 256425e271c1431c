# config/logging_config.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Logging Configuration                                         ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  ✓ Structured Logging (JSON + Human-Readable)                            ║
║  ✓ Multiple Sinks (Console, Files, JSONL)                                ║
║  ✓ Session Context Variable                                              ║
║  ✓ Stdlib Interception                                                   ║
║  ✓ Execution Time Decorator                                              ║
╚════════════════════════════════════════════════════════════════════════════╝

Architecture:
```
    Application Code
         ├─→ loguru.logger
         ├─→ stdlib logging → InterceptHandler → loguru
         └─→ warnings → loguru

    Sinks:
    ├── Console (stdout, colorized)
    ├── app.log (all logs, rotated)
    ├── errors.log (ERROR+ only)
    └── app.jsonl (structured JSON)
```

File sinks are skipped when ``settings.TEST_MODE`` is on.

Usage:
```python
    from config.logging_config import setup_logging, get_logger

    setup_logging(log_level="DEBUG")
    log = get_logger(__name__, component="loader")
    log.info("Loading file")
```

Dependencies:
    • loguru
"""

from __future__ import annotations

import logging
import sys
import time
import warnings
from contextvars import ContextVar
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger

from config.settings import settings

__all__ = [
    "setup_logging",
    "get_logger",
    "set_session_context",
    "clear_session_context",
    "log_execution_time",
    "InterceptHandler",
]


# ═══════════════════════════════════════════════════════════════════════════
# Context Variables
# ═══════════════════════════════════════════════════════════════════════════

_ctx_session_id: ContextVar[Optional[str]] = ContextVar("session_id", default=None)


def set_session_context(session_id: Optional[str]) -> None:
    """Tag every following log record with ``session_id``."""
    _ctx_session_id.set(session_id)


def clear_session_context() -> None:
    """Clear the session tag."""
    _ctx_session_id.set(None)


# ═══════════════════════════════════════════════════════════════════════════
# Stdlib Logging Interception
# ═══════════════════════════════════════════════════════════════════════════

class InterceptHandler(logging.Handler):
    """
    🔌 **Stdlib Logging Interceptor**

    Routes standard library logging (pandas, warnings) into loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Emit log record to loguru."""
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _patch_record(record: Dict[str, Any]) -> None:
    """Add the session id to ``extra`` so every format can reference it."""
    extra = record["extra"]
    extra.setdefault("session_id", _ctx_session_id.get() or "-")


# ═══════════════════════════════════════════════════════════════════════════
# Log Formats
# ═══════════════════════════════════════════════════════════════════════════

LOG_FORMAT_HUMAN = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "sess=<blue>{extra[session_id]}</blue> | "
    "<level>{message}</level>"
)

LOG_FORMAT_COMPACT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"


# ═══════════════════════════════════════════════════════════════════════════
# Initialization State
# ═══════════════════════════════════════════════════════════════════════════

_INITIALIZED_FLAG = False
_SINK_IDS: List[int] = []


def setup_logging(
    app_name: Optional[str] = None,
    log_level: Optional[str] = None,
    *,
    enable_json: Optional[bool] = None,
    console_compact: Optional[bool] = None,
    logs_path: Optional[Union[str, Path]] = None,
    reset_existing: bool = False
) -> None:
    """
    🔧 **Setup Centralized Logging**

    Idempotent - repeated calls are no-ops unless ``reset_existing`` is set.

    Args:
        app_name: Application name
        log_level: Log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        enable_json: Enable JSONL sink
        console_compact: Use compact console format
        logs_path: Directory for log files
        reset_existing: Force re-initialization
    """
    global _INITIALIZED_FLAG

    if _INITIALIZED_FLAG and not reset_existing:
        return

    app_name = app_name or settings.APP_NAME
    log_level = (log_level or settings.LOG_LEVEL).upper()
    logs_dir = Path(logs_path or settings.LOGS_PATH).resolve()
    enable_json = settings.LOG_JSON_ENABLED if enable_json is None else enable_json
    console_compact = settings.LOG_CONSOLE_COMPACT if console_compact is None else console_compact

    try:
        logger.remove()
    except ValueError:
        pass
    _SINK_IDS.clear()

    logger.configure(patcher=_patch_record)

    _SINK_IDS.append(
        logger.add(
            sys.stdout,
            format=LOG_FORMAT_COMPACT if console_compact else LOG_FORMAT_HUMAN,
            level=log_level,
            colorize=True,
            backtrace=(log_level == "DEBUG"),
            diagnose=False,
        )
    )

    if not settings.TEST_MODE:
        logs_dir.mkdir(parents=True, exist_ok=True)

        _SINK_IDS.append(
            logger.add(
                logs_dir / "app.log",
                format=LOG_FORMAT_HUMAN,
                level=log_level,
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                compression="zip",
                encoding="utf-8",
                enqueue=True,
            )
        )

        _SINK_IDS.append(
            logger.add(
                logs_dir / "errors.log",
                format=LOG_FORMAT_HUMAN,
                level="ERROR",
                rotation=settings.LOG_ROTATION,
                retention="90 days",
                compression="zip",
                encoding="utf-8",
                enqueue=True,
            )
        )

        if enable_json:
            _SINK_IDS.append(
                logger.add(
                    logs_dir / "app.jsonl",
                    serialize=True,
                    level=log_level,
                    rotation=settings.LOG_ROTATION,
                    retention=settings.LOG_RETENTION,
                    compression="zip",
                    encoding="utf-8",
                    enqueue=True,
                )
            )

    # Intercept stdlib logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    warnings.simplefilter("default")
    logging.captureWarnings(True)

    logger.info(
        f"✓ Logging initialized: app={app_name}, level={log_level}, "
        f"json={enable_json}, logs_dir={logs_dir}"
    )

    _INITIALIZED_FLAG = True


# ═══════════════════════════════════════════════════════════════════════════
# Utilities
# ═══════════════════════════════════════════════════════════════════════════

def get_logger(name: Optional[str] = None, **binds: Any):
    """
    📝 **Get Bound Logger**

    Example:
```python
        log = get_logger(__name__, component="report")
        log.info("Report written")
```
    """
    lgr = logger
    if name:
        lgr = lgr.bind(name=name)
    if binds:
        lgr = lgr.bind(**binds)
    return lgr


def log_execution_time(func: Callable) -> Callable:
    """
    ⏱️ **Log Execution Time**

    Logs the wall time of the wrapped call at DEBUG level.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__qualname__} took {elapsed_ms:.1f} ms")

    return wrapper
