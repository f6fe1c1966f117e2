"""Tests for the shared HTTP client pool."""

import pytest

from numberones.infrastructure.integrations.http_pool import HttpClientPool


@pytest.fixture(autouse=True)
async def reset_pool():
    """Each test starts and ends without a shared client."""
    await HttpClientPool.close()
    HttpClientPool._lock = None
    yield
    await HttpClientPool.close()
    HttpClientPool._lock = None


class TestHttpClientPool:
    """Test suite for HttpClientPool."""

    async def test_same_client_returned(self) -> None:
        """Test repeated calls share one client."""
        first = await HttpClientPool.get_client(max_connections=5)
        second = await HttpClientPool.get_client(max_connections=50)

        assert first is second
        assert HttpClientPool.is_initialized()

    async def test_default_headers_applied(self) -> None:
        """Test headers given on first use are sent with every request."""
        client = await HttpClientPool.get_client(headers={"User-Agent": "numberones-test"})

        assert client.headers["User-Agent"] == "numberones-test"

    async def test_close_resets(self) -> None:
        """Test close() drops the client so the next call builds a new one."""
        first = await HttpClientPool.get_client()
        await HttpClientPool.close()

        assert not HttpClientPool.is_initialized()
        assert first.is_closed
        second = await HttpClientPool.get_client()
        assert second is not first
