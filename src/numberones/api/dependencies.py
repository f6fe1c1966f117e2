"""Dependency injection for API endpoints."""

from fastapi import Depends, Request

from numberones.application.services import BackfillService, ChartLookupService
from numberones.config import Settings
from numberones.infrastructure.lifecycle import AppServices
from numberones.infrastructure.observability import AccessLog


# Hey future me, services live on app.state (set in lifecycle.lifespan). Tests override
# get_services via app.dependency_overrides instead of running the lifespan.
def get_services(request: Request) -> AppServices:
    """Get the wired services from app state."""
    return request.app.state.services  # type: ignore[no-any-return]


def get_lookup_service(
    services: AppServices = Depends(get_services),
) -> ChartLookupService:
    return services.lookup


def get_backfill_service(
    services: AppServices = Depends(get_services),
) -> BackfillService:
    return services.backfill


def get_access_log(services: AppServices = Depends(get_services)) -> AccessLog:
    return services.access_log


def get_app_settings(services: AppServices = Depends(get_services)) -> Settings:
    return services.settings
