"""Official Charts scraper - fetches the UK #1 single for a single date."""

import logging

import httpx
from bs4 import BeautifulSoup

from numberones.config.settings import ChartSourceSettings
from numberones.domain.entities import ChartEntry
from numberones.domain.exceptions import FetchError
from numberones.domain.ports import IChartFetcher
from numberones.domain.value_objects import (
    date_key,
    pad2,
    parse_long_date,
    to_sentence_case,
)
from numberones.infrastructure.integrations.http_pool import HttpClientPool

logger = logging.getLogger(__name__)

# Hey future me, these selectors are tied to officialcharts.com's page layout. The first
# row after the "headings" row of the chart table is position #1. If the site redesigns,
# fetches start raising FetchError("... missing ...") - that's your cue to update these.
CHART_DATE_SELECTOR = ".article-date"
TITLE_SELECTOR = ".chart tr.headings + tr .track .title-artist .title"
ARTIST_SELECTOR = ".chart tr.headings + tr .track .title-artist .artist"
COVER_SELECTOR = ".cover img"


def request_headers(settings: ChartSourceSettings) -> dict[str, str]:
    """Default headers for every chart page request."""
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "en-GB,en;q=0.9",
    }


def chart_page_path(year: int | str, month: int | str, day: int | str) -> str:
    """Path of the singles chart page covering the given date."""
    return f"/charts/singles-chart/{int(year):04d}{pad2(month)}{pad2(day)}"


def parse_chart_page(
    html: str, year: int | str, month: int | str, day: int | str
) -> ChartEntry:
    """Extract the #1 single from a chart page.

    Args:
        html: Raw page HTML
        year: Queried year
        month: Queried month
        day: Queried day

    Returns:
        ChartEntry for the queried date

    Raises:
        FetchError: If the page lacks the chart date range, title or artist
        ParseError: If the chart date range uses an unknown month name
    """
    key = date_key(year, month, day)
    soup = BeautifulSoup(html or "", "html.parser")

    chart_date = soup.select_one(CHART_DATE_SELECTOR)
    if chart_date is None:
        raise FetchError(f"Chart page for {key} is missing the chart date", key)

    # "1 August 2020 - 7 August 2020"
    week = [part.strip() for part in chart_date.get_text().strip().split("-")]
    if len(week) < 2 or not week[0] or not week[1]:
        raise FetchError(
            f"Chart page for {key} has an unexpected date range {chart_date.get_text()!r}",
            key,
        )

    title = soup.select_one(TITLE_SELECTOR)
    artist = soup.select_one(ARTIST_SELECTOR)
    if title is None or artist is None:
        raise FetchError(f"Chart page for {key} is missing the top track", key)

    cover = soup.select_one(COVER_SELECTOR)
    cover_url = cover.get("src") if cover is not None else None

    return ChartEntry.for_date(
        year,
        month,
        day,
        chart_week_start=parse_long_date(week[0]),
        chart_week_end=parse_long_date(week[1]),
        track=to_sentence_case(title.get_text().strip()),
        artist=to_sentence_case(artist.get_text().strip()),
        cover_url=str(cover_url) if cover_url else None,
    )


class OfficialChartsClient(IChartFetcher):
    """HTTP client for officialcharts.com singles chart pages."""

    # Yo, pass a client in tests (httpx.MockTransport) - otherwise we borrow the shared
    # pool. We never close a pooled client here, lifecycle.py owns that.
    def __init__(
        self,
        settings: ChartSourceSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the chart client.

        Args:
            settings: Chart source configuration
            client: Optional pre-built HTTP client (defaults to the shared pool)
        """
        self.settings = settings
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = await HttpClientPool.get_client(
                timeout=self.settings.timeout, headers=request_headers(self.settings)
            )
        return self._client

    def chart_url(self, year: int | str, month: int | str, day: int | str) -> str:
        """Full URL of the chart page covering the given date."""
        return f"{self.settings.base_url}{chart_page_path(year, month, day)}"

    async def fetch_remote(
        self, year: int | str, month: int | str, day: int | str
    ) -> ChartEntry:
        """Fetch the #1 single for one date from the live site.

        Returns:
            ChartEntry parsed from the chart page

        Raises:
            FetchError: On network failure, non-200 response or a malformed page
            ParseError: If the page's chart week uses an unknown month name
        """
        key = date_key(year, month, day)
        url = self.chart_url(year, month, day)
        client = await self._get_client()

        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"Request for {url} failed: {e}", key) from e

        if response.status_code != 200:
            raise FetchError(
                f"Chart page {url} returned HTTP {response.status_code}",
                key,
                status_code=response.status_code,
            )

        entry = parse_chart_page(response.text, year, month, day)
        logger.debug("Fetched %s: %s - %s", key, entry.artist, entry.track)
        return entry
