"""FastAPI application factory."""

from fastapi import FastAPI

from numberones import __version__
from numberones.api.exception_handlers import register_exception_handlers
from numberones.api.routers import api_router, health
from numberones.infrastructure.lifecycle import lifespan
from numberones.infrastructure.observability.middleware import RequestLoggingMiddleware


def create_app() -> FastAPI:
    """Create the JSON API application."""
    app = FastAPI(
        title="numberones",
        description="UK number one singles for every birthday since you were born",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    app.include_router(health.router)
    return app


app = create_app()
