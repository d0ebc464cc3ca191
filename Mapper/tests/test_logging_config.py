"""
Tests for correlation-id binding and call logging.
"""
import pytest
import structlog

from Mapper.config.logging_config import CorrelationIdContext, get_logger, log_function_call


class TestCorrelationIdContext:

    def test_binds_and_resets(self):
        with CorrelationIdContext(collection="vendors") as correlation_id:
            bound = structlog.contextvars.get_contextvars()
            assert bound["correlation_id"] == correlation_id
            assert bound["collection"] == "vendors"
            assert correlation_id.startswith("corr-")

        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_explicit_id(self):
        with CorrelationIdContext("corr-fixed") as correlation_id:
            assert correlation_id == "corr-fixed"


class TestLogFunctionCall:

    def test_returns_result(self):
        @log_function_call(get_logger(__name__))
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"

    def test_reraises(self):
        @log_function_call(get_logger(__name__))
        def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            fail()
