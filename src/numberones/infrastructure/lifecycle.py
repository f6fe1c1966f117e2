"""Application lifecycle: build the services at startup, release them at shutdown.

Hey future me - the chart store is read exactly ONCE here, into the ChartCache snapshot
every lookup uses. Both the FastAPI lifespan and the CLI go through build_services() so
they wire things identically.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from fastapi import FastAPI

from numberones.application.cache import ChartCache
from numberones.application.services import BackfillService, ChartLookupService
from numberones.config import Settings, get_settings
from numberones.infrastructure.integrations import (
    HttpClientPool,
    OfficialChartsClient,
    request_headers,
)
from numberones.infrastructure.observability import AccessLog, configure_logging
from numberones.infrastructure.persistence import JsonChartStore

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """Everything a request handler or CLI command needs."""

    settings: Settings
    store: JsonChartStore
    cache: ChartCache
    fetcher: OfficialChartsClient
    lookup: ChartLookupService
    backfill: BackfillService
    access_log: AccessLog


async def build_services(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> AppServices:
    """Load the chart store and wire the services.

    Args:
        settings: Application settings
        client: Optional HTTP client (tests); defaults to the shared pool
    """
    if client is None:
        # Size the pool for the backfill cap so workers wait on our cap, not on httpx
        client = await HttpClientPool.get_client(
            timeout=settings.chart_source.timeout,
            max_connections=settings.backfill.max_concurrency,
            headers=request_headers(settings.chart_source),
        )

    store = JsonChartStore(settings.cache.path)
    cache = await ChartCache.from_store(store)
    fetcher = OfficialChartsClient(settings.chart_source, client=client)

    services = AppServices(
        settings=settings,
        store=store,
        cache=cache,
        fetcher=fetcher,
        lookup=ChartLookupService(cache, fetcher),
        backfill=BackfillService(
            fetcher,
            store,
            cache=cache,
            max_concurrency=settings.backfill.max_concurrency,
        ),
        access_log=AccessLog(settings.observability.access_log_path),
    )
    logger.info(
        "Services ready: %d cached chart entries from %s",
        len(cache),
        settings.cache.path,
    )
    return services


async def shutdown_services(services: AppServices) -> None:
    """Flush the access log and close the shared HTTP pool."""
    await services.access_log.drain()
    await HttpClientPool.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI lifespan: configure logging, build services, tear down on exit."""
    settings = get_settings()
    configure_logging(
        log_level=settings.observability.log_level,
        json_format=settings.observability.json_logs,
        app_name=settings.app_name,
    )

    services = await build_services(settings)
    app.state.services = services
    logger.info("%s started", settings.app_name)

    try:
        yield
    finally:
        await shutdown_services(services)
        logger.info("%s stopped", settings.app_name)
