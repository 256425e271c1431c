"""
DataLens - Unit Tests for Logging Configuration
"""

import pytest
from loguru import logger

from config.logging_config import (
    clear_session_context,
    get_logger,
    log_execution_time,
    set_session_context,
    setup_logging,
)


@pytest.fixture
def captured():
    setup_logging(log_level="DEBUG", reset_existing=True)
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record), level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)


class TestLogging:
    def test_session_id_is_attached(self, captured):
        set_session_context("abc123")
        try:
            get_logger(__name__, component="test").info("hello")
        finally:
            clear_session_context()
        get_logger().info("bye")

        hello = next(r for r in captured if r["message"] == "hello")
        bye = next(r for r in captured if r["message"] == "bye")
        assert hello["extra"]["session_id"] == "abc123"
        assert hello["extra"]["component"] == "test"
        assert bye["extra"]["session_id"] == "-"

    def test_execution_time_decorator(self, captured):
        @log_execution_time
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert any("took" in r["message"] for r in captured)
