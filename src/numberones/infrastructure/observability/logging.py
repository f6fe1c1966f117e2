"""Structured logging configuration with JSON formatting and correlation IDs."""

import contextvars
import logging
import sys
import traceback
import uuid
from pathlib import Path
from typing import Any, TextIO

from pythonjsonlogger import jsonlogger

# Hey future me, a correlation ID ties together every log line produced while serving one
# birthday lookup (up to ~100 concurrent year fetches!) or one backfill run. contextvars is
# asyncio-safe - each task inherits the ID of the task that spawned it. default="" covers
# startup logs and anything outside a request.
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def get_correlation_id() -> str:
    """Get the current correlation ID from context, or "" if unset."""
    return correlation_id_var.get()


# Listen up, this AUTO-GENERATES a UUID when given None. Call it once per request or per
# CLI command, not in loops, or every year lookup ends up with its own ID.
def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID in context.

    Args:
        correlation_id: Correlation ID to set. If None, generates a new UUID

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


class CorrelationIdFilter(logging.Filter):
    """Add correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


class CompactExceptionFormatter(logging.Formatter):
    """Formatter that prints exception chains compactly.

    Each exception in the chain gets one "╰─►" header line followed by the frames
    from our own package only, root cause first:

    ERROR │ numberones.cli:88 │ Backfill failed
    ╰─► httpx.ConnectError: All connection attempts failed
    ╰─► FetchError: Request for https://... failed
        File "official_charts_client.py", line 143, in fetch_remote
          raise FetchError(f"Request for {url} failed: {e}", key) from e
    """

    def formatException(self, ei: Any) -> str:
        _exc_type, exc_value, _exc_tb = ei
        if exc_value is None:
            return ""

        chain: list[BaseException] = []
        current: BaseException | None = exc_value
        while current is not None and current not in chain:
            chain.append(current)
            current = current.__cause__ or current.__context__
        chain.reverse()

        lines: list[str] = []
        for exc in chain:
            lines.append(f"╰─► {exc.__class__.__name__}: {exc}")
            if not exc.__traceback__:
                continue
            for frame in traceback.extract_tb(exc.__traceback__):
                if "/site-packages/" in frame.filename or "numberones" not in frame.filename:
                    continue
                lines.append(
                    f'    File "{Path(frame.filename).name}", line {frame.lineno}, in {frame.name}'
                )
                if frame.line:
                    lines.append(f"      {frame.line.strip()}")

        return "\n".join(lines)


class ChartJsonFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined,misc]
    """One JSON object per line, tagged with app name and correlation ID.

    Chart fields passed via ``extra`` (date_key, status_code, duration_ms, ...) end up as
    top-level keys, so a log pipeline can filter a backfill by date without regexes.
    """

    def __init__(self, *args: Any, app_name: str = "numberones", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.app_name = app_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["app"] = self.app_name
        log_record["source"] = f"{record.module}:{record.lineno}"

        correlation_id = getattr(record, "correlation_id", "")
        if correlation_id:
            log_record["correlation_id"] = correlation_id

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)


# HTTP libraries log every request at INFO - a 27k-date backfill would bury everything.
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "asyncio", "uvicorn.access")


# Listen future me, call this ONCE per process (lifespan or CLI). It owns the root
# logger: existing handlers are removed so repeated calls in tests don't stack handlers.
# The CLI passes stream=sys.stderr so stdout carries only the lookup results.
def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    app_name: str = "numberones",
    stream: TextIO | None = None,
) -> None:
    """Configure root logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: One JSON object per line instead of the compact text format
        app_name: Added to every JSON line as "app"
        stream: Where log lines go (default: stdout)
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())

    if json_format:
        formatter: logging.Formatter = ChartJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            app_name=app_name,
        )
    else:
        formatter = CompactExceptionFormatter(
            fmt="%(asctime)s │ %(levelname)-7s │ %(name)s:%(lineno)d │ %(message)s",
            datefmt="%H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s json=%s", log_level, json_format
    )
