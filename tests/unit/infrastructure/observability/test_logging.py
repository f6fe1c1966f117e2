"""Tests for structured logging."""

import io
import json
import logging

import pytest

from numberones.infrastructure.observability.logger_template import log_operation
from numberones.infrastructure.observability.logging import (
    ChartJsonFormatter,
    CorrelationIdFilter,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self):
        """Test setting and getting correlation ID."""
        test_id = "test-123-abc"
        result = set_correlation_id(test_id)
        assert result == test_id
        assert get_correlation_id() == test_id

    def test_set_correlation_id_generates_uuid_when_none(self):
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert result is not None
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_stamps_records(self):
        """Test the filter copies the current ID onto each record."""
        set_correlation_id("lookup-42")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hi", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "lookup-42"


class TestLoggingConfiguration:
    """Test logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """configure_logging owns the root logger; put it back afterwards."""
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_stream_override(self):
        """Test log lines can be sent somewhere other than stdout."""
        stream = io.StringIO()
        configure_logging(log_level="INFO", json_format=True, stream=stream)

        logging.getLogger("numberones.test").info("hello")

        assert json.loads(stream.getvalue().splitlines()[-1])["message"] == "hello"

    def test_configure_logging_debug_level(self):
        """Test configuring logging with DEBUG level."""
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        logger = logging.getLogger("test")
        assert logger.getEffectiveLevel() <= logging.DEBUG

    def test_configure_logging_info_level(self):
        """Test configuring logging with INFO level."""
        configure_logging(log_level="INFO", json_format=False, app_name="test-app")
        logger = logging.getLogger("test")
        assert logger.getEffectiveLevel() == logging.INFO

    def test_repeated_configuration_does_not_stack_handlers(self):
        """Test calling configure twice leaves one handler."""
        configure_logging(log_level="INFO", json_format=True, app_name="test-app")
        configure_logging(log_level="INFO", json_format=True, app_name="test-app")
        assert len(logging.getLogger().handlers) == 1

    def test_http_libraries_quietened(self):
        """Test httpx request logs are pinned to WARNING."""
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_formatter_output(self):
        """Test JSON lines carry level, logger and correlation ID."""
        formatter = ChartJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s", app_name="test-app"
        )
        record = logging.LogRecord(
            "numberones.test", logging.WARNING, __file__, 10, "Skipping %d", (1990,), None
        )
        record.correlation_id = "abc"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "Skipping 1990"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "numberones.test"
        assert payload["correlation_id"] == "abc"
        assert payload["app"] == "test-app"


class TestLogOperation:
    """Tests for the log_operation context manager."""

    async def test_logs_start_and_completion(self, caplog):
        """Test started/completed lines with a duration."""
        logger = logging.getLogger("numberones.test.ops")
        with caplog.at_level(logging.INFO, logger="numberones.test.ops"):
            async with log_operation(logger, "backfill", total=3):
                pass

        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["backfill.started", "backfill.completed"]
        assert caplog.records[-1].duration_ms >= 0
        assert caplog.records[-1].total == 3

    async def test_logs_failure_and_reraises(self, caplog):
        """Test failures are logged with the error type and re-raised."""
        logger = logging.getLogger("numberones.test.ops")
        with caplog.at_level(logging.INFO, logger="numberones.test.ops"):
            with pytest.raises(RuntimeError):
                async with log_operation(logger, "backfill"):
                    raise RuntimeError("boom")

        failed = caplog.records[-1]
        assert failed.getMessage() == "backfill.failed"
        assert failed.levelno == logging.ERROR
        assert failed.error_type == "RuntimeError"
