# core/base_agent.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Base Agent                                                    ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  ✓ Abstract Base Agent Class                                             ║
║  ✓ Lifecycle Hooks (validate → before → execute → after)                 ║
║  ✓ Standard AgentResult (success / partial / failed)                     ║
║  ✓ Timing & Trace Metadata                                               ║
║  ✓ Failures Captured as Results                                          ║
╚════════════════════════════════════════════════════════════════════════════╝

Usage:
```python
    from core.base_agent import BaseAgent, AgentResult

    class RowCounter(BaseAgent):
        def __init__(self):
            super().__init__(name="row_counter", description="Counts records")

        def execute(self, records, **kwargs) -> AgentResult:
            result = AgentResult(agent_name=self.name)
            result.add_data(rows=len(records))
            return result

    result = RowCounter().run(records=records)
    if result.is_success():
        print(result.data["rows"])
```

Dependencies:
    • loguru
    • pydantic
"""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from loguru import logger
from pydantic import BaseModel, Field

from core.exceptions import AgentExecutionError

__all__ = ["BaseAgent", "AgentResult", "AgentStatus"]


AgentStatus = Literal["success", "failed", "partial"]


# ═══════════════════════════════════════════════════════════════════════════
# Agent Result
# ═══════════════════════════════════════════════════════════════════════════

class AgentResult(BaseModel):
    """
    📊 **Agent Execution Result**

    Attributes:
        agent_name: Name of the agent
        status: success / failed / partial
        execution_time: Duration in seconds
        started_at / finished_at: Wall clock bounds of the run
        trace_id: Unique trace identifier
        data: Result payload
        metadata: Additional metadata
        errors: Error messages (any error marks the result failed)
        warnings: Warning messages (any warning marks a success partial)
    """

    agent_name: str
    status: AgentStatus = Field(default="success")

    execution_time: float = Field(default=0.0)
    timestamp: datetime = Field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    trace_id: str = Field(default_factory=lambda: uuid4().hex)

    data: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    # ───────────────────────────────────────────────────────────────────
    # Status Checks
    # ───────────────────────────────────────────────────────────────────

    def is_success(self) -> bool:
        return self.status == "success"

    def is_failed(self) -> bool:
        return self.status == "failed"

    def is_partial(self) -> bool:
        return self.status == "partial"

    # ───────────────────────────────────────────────────────────────────
    # Mutations
    # ───────────────────────────────────────────────────────────────────

    def add_error(self, error: str) -> None:
        """Add error and mark as failed."""
        self.errors.append(error)
        self.status = "failed"

    def add_warning(self, warning: str) -> None:
        """Add warning and mark as partial if success."""
        self.warnings.append(warning)
        if self.status == "success":
            self.status = "partial"

    def add_data(self, **items: Any) -> None:
        self.data.update(items)

    def add_metadata(self, **items: Any) -> None:
        self.metadata.update(items)

    def summary_json(self) -> str:
        """Status line for logs: everything except the payload."""
        return json.dumps(
            {
                "agent": self.agent_name,
                "status": self.status,
                "execution_time": round(self.execution_time, 4),
                "trace_id": self.trace_id,
                "errors": self.errors,
                "warnings": len(self.warnings),
            },
            ensure_ascii=False,
        )


# ═══════════════════════════════════════════════════════════════════════════
# Base Agent
# ═══════════════════════════════════════════════════════════════════════════

class BaseAgent(ABC):
    """
    🤖 **Base Agent Class**

    Lifecycle:
```
        run() → validate_input()
              → before_execute()
              → execute()
              → measure time
              → after_execute()
              → return AgentResult
```
    ``run`` never raises: any exception becomes a failed ``AgentResult``.
    Call ``execute`` directly to get exceptions instead.
    """

    def __init__(self, name: str, description: str = "", version: str = "1.0"):
        self.name = name
        self.description = description
        self.version = version

        self.logger = logger.bind(agent=name, component="agent", version=version)
        self._result: Optional[AgentResult] = None

    @property
    def last_result(self) -> Optional[AgentResult]:
        return self._result

    @abstractmethod
    def execute(self, **kwargs) -> AgentResult:
        """Agent logic; implemented by subclasses."""
        raise NotImplementedError

    # ───────────────────────────────────────────────────────────────────
    # Lifecycle Hooks
    # ───────────────────────────────────────────────────────────────────

    def validate_input(self, **kwargs) -> bool:
        """
        Validate input before execution.

        Raises:
            DataLensException subclass when the input cannot be processed
        """
        return True

    def before_execute(self, **kwargs) -> None:
        self.logger.info(f"[{self.name}] Starting execution")

    def after_execute(self, result: AgentResult) -> None:
        self.logger.info(
            f"[{self.name}] Execution completed: "
            f"status={result.status}, time={result.execution_time:.3f}s"
        )

    # ───────────────────────────────────────────────────────────────────
    # Main Execution
    # ───────────────────────────────────────────────────────────────────

    def run(self, **kwargs) -> AgentResult:
        """
        🚀 **Execute Agent**

        Returns:
            AgentResult (always, even on failure)
        """
        start_perf = time.perf_counter()
        started_at = datetime.now()

        try:
            self.validate_input(**kwargs)
            self.before_execute(**kwargs)

            result = self.execute(**kwargs)
            if not isinstance(result, AgentResult):
                raise AgentExecutionError(
                    f"Invalid result type returned by {self.name}: "
                    f"expected AgentResult, got {type(result).__name__}"
                )

            result.execution_time = time.perf_counter() - start_perf
            result.started_at = started_at
            result.finished_at = datetime.now()

            self._result = result
            self.after_execute(result)
            return result

        except Exception as e:
            self.logger.opt(exception=e).error(f"[{self.name}] Execution failed: {e}")

            failed = AgentResult(
                agent_name=self.name,
                status="failed",
                execution_time=time.perf_counter() - start_perf,
                started_at=started_at,
                finished_at=datetime.now(),
            )
            failed.add_error(f"{type(e).__name__}: {getattr(e, 'message', str(e))}")
            failed.add_metadata(error_type=type(e).__name__)
            if hasattr(e, "error_code"):
                failed.add_metadata(error_code=e.error_code.value)

            self._result = failed
            self.after_execute(failed)
            return failed

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, version={self.version!r})"
