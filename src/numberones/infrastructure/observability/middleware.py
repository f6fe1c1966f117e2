"""Middleware for observability: per-request correlation IDs and access logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from numberones.infrastructure.observability.logging import set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


# Hey future me, this runs BEFORE the route handlers. One birthday request fans out to
# ~100 year lookups; every log line they emit inherits the correlation ID set here
# (contextvars flow into the gathered tasks). The ID is echoed back in the response
# header so a user report can be matched to the server logs.
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Sets the correlation ID and logs each request with its duration."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        method = request.method
        path = request.url.path

        logger.info("→ %s %s", method, path, extra={"method": method, "path": path})

        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed: %s %s",
                method,
                path,
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": int((time.monotonic() - start) * 1000),
                    "error_type": type(e).__name__,
                },
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "%s %s %s → %d (%dms)",
            "✓" if response.status_code < 400 else "✗",
            method,
            path,
            response.status_code,
            duration_ms,
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
