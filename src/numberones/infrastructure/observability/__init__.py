"""Observability infrastructure: logging, operation timing and the access log."""

from numberones.infrastructure.observability.access_log import AccessLog
from numberones.infrastructure.observability.logger_template import log_operation
from numberones.infrastructure.observability.logging import (
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "AccessLog",
    "configure_logging",
    "get_correlation_id",
    "log_operation",
    "set_correlation_id",
]
