"""Shared logger helpers.

USAGE:
    from numberones.infrastructure.observability.logger_template import log_operation

    async with log_operation(logger, "backfill", start="2020-01-01"):
        await run_backfill()
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any


# Yo, this logs {operation}.started / .completed / .failed with a duration_ms field. On
# exception it logs with exc_info and RE-RAISES, it never swallows anything.
@asynccontextmanager
async def log_operation(
    logger: logging.Logger,
    operation: str,
    **context: Any,
) -> AsyncIterator[None]:
    """Log operation start/end with automatic timing.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "backfill", "lookup_yearly")
        **context: Extra fields included in every log line
    """
    start = time.monotonic()
    logger.info("%s.started", operation, extra=context)

    try:
        yield
    except Exception as e:
        duration_ms = int((time.monotonic() - start) * 1000)
        logger.error(
            "%s.failed",
            operation,
            extra={
                **context,
                "duration_ms": duration_ms,
                "error": str(e),
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        raise

    duration_ms = int((time.monotonic() - start) * 1000)
    logger.info(
        "%s.completed", operation, extra={**context, "duration_ms": duration_ms}
    )
