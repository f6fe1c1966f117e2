# Hey future me - health checks for Docker/Kubernetes!
#
# - /health/live   -> process is up (always 200)
# - /health/ready  -> services are wired and the chart store has been read (503 before)
#
# Docker HEALTHCHECK: curl -f http://localhost:8000/health/ready || exit 1
"""Health check endpoints for Docker/Kubernetes."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

router = APIRouter(prefix="/health", tags=["health"])


class LivenessStatus(BaseModel):
    """Simple liveness check response."""

    status: str = Field(description="alive or dead")
    timestamp: str = Field(description="ISO timestamp")
    cached_entries: int = Field(default=0, description="Entries in the chart cache")


class ReadinessStatus(BaseModel):
    """Readiness check response."""

    status: str = Field(description="ready or not_ready")
    timestamp: str = Field(description="ISO timestamp")
    cache_path: str | None = Field(default=None, description="Chart store file")
    cached_entries: int = Field(default=0, description="Entries in the chart cache")


@router.get("/live", response_model=LivenessStatus)
async def liveness_check(request: Request) -> LivenessStatus:
    """Liveness check. Reports the cache size when services are up."""
    services = getattr(request.app.state, "services", None)
    return LivenessStatus(
        status="alive",
        timestamp=datetime.now(UTC).isoformat(),
        cached_entries=len(services.cache) if services is not None else 0,
    )


# An empty cache is still ready - lookups fall back to the live chart site.
@router.get("/ready", response_model=ReadinessStatus)
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness check. 503 until the lifespan has built the services."""
    now = datetime.now(UTC).isoformat()
    services = getattr(request.app.state, "services", None)
    if services is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ReadinessStatus(status="not_ready", timestamp=now).model_dump(),
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=ReadinessStatus(
            status="ready",
            timestamp=now,
            cache_path=str(services.settings.cache.path),
            cached_entries=len(services.cache),
        ).model_dump(),
    )
