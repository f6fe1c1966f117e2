"""External integrations: chart provider scraping and shared HTTP pool."""

from numberones.infrastructure.integrations.http_pool import HttpClientPool
from numberones.infrastructure.integrations.official_charts_client import (
    OfficialChartsClient,
    parse_chart_page,
    request_headers,
)

__all__ = ["HttpClientPool", "OfficialChartsClient", "parse_chart_page", "request_headers"]
