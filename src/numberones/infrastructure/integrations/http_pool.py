"""Shared HTTP client for the chart site.

Hey future me - a backfill from 1952 is ~27,000 page fetches against ONE host. An
httpx.AsyncClient per fetch would pay a TCP+TLS handshake every time, so every fetcher
borrows this one pooled client instead. The pool is sized from the backfill cap
(lifecycle.py passes settings.backfill.max_concurrency): if the pool were smaller, the
workers would queue inside httpx and our own cap would mean nothing.

Call HttpClientPool.close() at shutdown (lifecycle.shutdown_services does).
"""

import asyncio
import logging
from typing import ClassVar

import httpx

logger = logging.getLogger(__name__)


class HttpClientPool:
    """Process-wide lazily created httpx.AsyncClient."""

    _client: ClassVar[httpx.AsyncClient | None] = None
    _lock: ClassVar[asyncio.Lock | None] = None

    DEFAULT_TIMEOUT: ClassVar[float] = 30.0
    DEFAULT_MAX_CONNECTIONS: ClassVar[int] = 100

    @classmethod
    def _get_lock(cls) -> asyncio.Lock:
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def get_client(
        cls,
        timeout: float | None = None,
        max_connections: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.AsyncClient:
        """Return the shared client, creating it on first use.

        Only the FIRST call's arguments count. Later callers get the existing client
        whatever they pass.

        Args:
            timeout: Per-request timeout in seconds
            max_connections: Pool size, also used as the keep-alive limit since every
                connection goes to the same host
            headers: Default headers (User-Agent) for every request
        """
        async with cls._get_lock():
            if cls._client is None:
                pool_size = max_connections or cls.DEFAULT_MAX_CONNECTIONS
                cls._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(timeout or cls.DEFAULT_TIMEOUT),
                    limits=httpx.Limits(
                        max_connections=pool_size,
                        max_keepalive_connections=pool_size,
                    ),
                    headers=headers,
                    http2=True,
                    # Chart pages redirect to the canonical week URL
                    follow_redirects=True,
                )
                logger.info("Chart HTTP client created (pool size %d)", pool_size)
            return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the shared client. The next get_client() builds a fresh one."""
        async with cls._get_lock():
            if cls._client is not None:
                await cls._client.aclose()
                cls._client = None
                logger.info("Chart HTTP client closed")

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._client is not None
