# core/exceptions.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Exceptions                                                    ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  ✓ Centralized Exception Hierarchy                                       ║
║  ✓ Error Code & Severity System                                          ║
║  ✓ Context & Details Tracking                                            ║
║  ✓ Context Manager for Wrapping Foreign Errors                           ║
║  ✓ User-Facing Message Formatting                                        ║
╚════════════════════════════════════════════════════════════════════════════╝

Hierarchy:
```
    DataLensException (Base)
    ├── InvalidFileTypeError      INVALID_FILE_TYPE
    ├── InsufficientRowsError     INSUFFICIENT_ROWS
    ├── DataLoadError             DATA_LOAD
    │   └── FileTooLargeError     FILE_TOO_LARGE
    ├── InvalidSelectionError     INVALID_SELECTION
    ├── ReportExportError         REPORT_EXPORT
    └── AgentExecutionError       AGENT
```

PARSE_WARNING is part of the taxonomy but never raised: malformed rows are
collected as ``core.data_model.ParseWarning`` records next to the grid.

Usage:
```python
    from core.exceptions import InsufficientRowsError, exception_context

    raise InsufficientRowsError(
        "CSV file must contain at least a header row and one data row",
        details={"rows": 1},
    )

    with exception_context(to=DataLoadError, message="Failed to tokenize"):
        frame = pd.read_csv(buffer)
```

Dependencies:
    • loguru
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Type

from loguru import logger

__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "DataLensException",
    "InvalidFileTypeError",
    "InsufficientRowsError",
    "DataLoadError",
    "FileTooLargeError",
    "InvalidSelectionError",
    "ReportExportError",
    "AgentExecutionError",
    "handle_exception",
    "exception_context",
]


# ═══════════════════════════════════════════════════════════════════════════
# Error Taxonomy
# ═══════════════════════════════════════════════════════════════════════════

class ErrorSeverity(str, Enum):
    """🚨 Severity classification for errors."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCode(str, Enum):
    """🏷️ Standardized error codes."""
    UNKNOWN = "unknown_error"
    INVALID_FILE_TYPE = "invalid_file_type"
    INSUFFICIENT_ROWS = "insufficient_rows"
    PARSE_WARNING = "parse_warning"
    DATA_LOAD = "data_load_error"
    FILE_TOO_LARGE = "file_too_large"
    INVALID_SELECTION = "invalid_selection"
    REPORT_EXPORT = "report_export_error"
    AGENT = "agent_execution_error"


# ═══════════════════════════════════════════════════════════════════════════
# Base Exception
# ═══════════════════════════════════════════════════════════════════════════

class DataLensException(Exception):
    """
    🎯 **Base DataLens Exception**

    Carries an error code, a severity, free-form details, the execution
    context and the original cause when wrapping another exception.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        *,
        error_code: ErrorCode = ErrorCode.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}
        self.error_code: ErrorCode = error_code
        self.severity: ErrorSeverity = severity
        self.context: Dict[str, Any] = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation with full context."""
        parts = [f"{self.error_code.value}: {self.message}"]

        if self.details:
            parts.append(f"Details: {self.details}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.cause:
            parts.append(f"Cause: {type(self.cause).__name__}: {self.cause}")

        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "details": self.details,
                "context": self.context,
                "severity": self.severity.value,
                "cause": str(self.cause) if self.cause else None
            }
        }


# ═══════════════════════════════════════════════════════════════════════════
# Specific Exception Classes
# ═══════════════════════════════════════════════════════════════════════════

class InvalidFileTypeError(DataLensException):
    """❌ Input is not a recognized delimited text file."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        super().__init__(message, details, error_code=ErrorCode.INVALID_FILE_TYPE, **kwargs)


class InsufficientRowsError(DataLensException):
    """📉 Fewer than a header row plus one data row."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        super().__init__(message, details, error_code=ErrorCode.INSUFFICIENT_ROWS, **kwargs)


class DataLoadError(DataLensException):
    """❌ File could not be read or tokenized."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        kwargs.setdefault("error_code", ErrorCode.DATA_LOAD)
        super().__init__(message, details, **kwargs)


class FileTooLargeError(DataLoadError):
    """📦 Upload exceeds MAX_UPLOAD_SIZE_MB."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        super().__init__(message, details, error_code=ErrorCode.FILE_TOO_LARGE, **kwargs)


class InvalidSelectionError(DataLensException):
    """🎯 Unknown chart kind or malformed column selection."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        super().__init__(message, details, error_code=ErrorCode.INVALID_SELECTION, **kwargs)


class ReportExportError(DataLensException):
    """📊 Report could not be serialized or written."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        super().__init__(message, details, error_code=ErrorCode.REPORT_EXPORT, **kwargs)


class AgentExecutionError(DataLensException):
    """🤖 Agent execution error."""
    def __init__(self, message: str, details: Optional[Dict] = None, **kwargs):
        super().__init__(message, details, error_code=ErrorCode.AGENT, **kwargs)


# ═══════════════════════════════════════════════════════════════════════════
# Helper Functions
# ═══════════════════════════════════════════════════════════════════════════

def handle_exception(e: BaseException, context: str = "") -> str:
    """
    📝 **Format Exception for Display**

    Produces the user-visible message for any error that reaches the
    presentation layer.
    """
    if isinstance(e, DataLensException):
        msg = f"❌ Error: {e.message}"
    else:
        msg = f"❌ Unexpected Error: {e}"

    if context:
        msg += f"\n\nContext: {context}"

    if isinstance(e, DataLensException) and e.details:
        msg += f"\n\nDetails: {e.details}"

    return msg


@contextmanager
def exception_context(
    *,
    to: Type[DataLensException] = DataLensException,
    message: str = "Operation failed",
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    context: Optional[Dict[str, Any]] = None,
    log: bool = True
) -> Iterator[None]:
    """
    🔒 **Exception Context Manager**

    Re-raises foreign exceptions as ``to``; DataLens exceptions pass through.

    Example:
```python
        with exception_context(to=ReportExportError, message="Failed to save report"):
            path.write_bytes(payload)
```
    """
    try:
        yield
    except DataLensException:
        raise
    except Exception as e:
        dl_exc = to(
            message,
            details={"original_error": str(e)},
            severity=severity,
            context=context,
            cause=e
        )

        if log:
            logger.error(str(dl_exc))

        raise dl_exc from e
