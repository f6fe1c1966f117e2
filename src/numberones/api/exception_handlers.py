"""Custom exception handlers for the FastAPI application.

Domain exceptions become JSON error responses with proper status codes instead of
leaking out as 500s.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from numberones.domain.exceptions import (
    ChartLookupError,
    ConfigurationError,
    FetchError,
    ParseError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain exceptions.

    - ParseError / ValidationError -> 422
    - ChartLookupError -> 404
    - FetchError -> 502
    - ConfigurationError -> 503
    """

    @app.exception_handler(ParseError)
    async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
        logger.warning(
            "Parse error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message},
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        logger.warning("Validation error at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message},
        )

    @app.exception_handler(ChartLookupError)
    async def chart_lookup_error_handler(
        request: Request, exc: ChartLookupError
    ) -> JSONResponse:
        logger.info(
            "No chart entry at %s: %s",
            request.url.path,
            exc.date_key,
            extra={"path": request.url.path, "date_key": exc.date_key},
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(FetchError)
    async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
        logger.error("Chart source error at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error("Configuration error at %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": exc.message},
        )
