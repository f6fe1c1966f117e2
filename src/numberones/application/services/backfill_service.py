"""Backfill service - bulk-fetch every date since a start date into the durable cache.

Hey future me - a backfill from 1952 is ~27,000 dates! The worker pool below keeps at
most `max_concurrency` fetches in flight: N workers pull dates off one queue until it
runs dry. Don't replace it with one gather() over all dates - that opens a socket per
date at once and the chart site (and our file descriptor limit) will hate it.

Failure policy:
- FetchError for one date -> logged, date left out, NO retry. Run the backfill again
  over the same range to pick up stragglers.
- Anything else (ParseError = the page format changed) -> logged at ERROR with the
  date, remaining workers are cancelled, the entries fetched so far ARE merged into
  the store, then the exception propagates. A format change must be loud, but it
  must not throw away hours of good fetches either.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from numberones.application.cache import ChartCache
from numberones.domain.entities import ChartEntry
from numberones.domain.exceptions import ConfigurationError, FetchError
from numberones.domain.ports import IChartFetcher
from numberones.domain.value_objects import iter_dates, parse_iso_date
from numberones.infrastructure.observability import log_operation
from numberones.infrastructure.persistence import JsonChartStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 100


async def _stop(workers: list[asyncio.Task[None]]) -> None:
    for task in workers:
        task.cancel()
    await asyncio.gather(*workers, return_exceptions=True)


class BackfillService:
    """Fetches date ranges under a concurrency cap and merges them into the store."""

    def __init__(
        self,
        fetcher: IChartFetcher,
        store: JsonChartStore,
        cache: ChartCache | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """
        Args:
            fetcher: Live chart source
            store: Durable store rewritten after the run
            cache: Snapshot to replace once the store is written (optional)
            max_concurrency: Max simultaneous fetches
            clock: Returns "today" when a caller doesn't pass one explicitly

        Raises:
            ConfigurationError: If max_concurrency is below 1
        """
        if max_concurrency < 1:
            raise ConfigurationError(
                f"Backfill concurrency must be at least 1, got {max_concurrency}"
            )
        self._fetcher = fetcher
        self._store = store
        self._cache = cache
        self._max_concurrency = max_concurrency
        self._clock = clock

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def _fetch_all(
        self, dates: list[date]
    ) -> tuple[list[ChartEntry | None], Exception | None]:
        """Fetch every date with a fixed-size worker pool.

        Returns:
            A list aligned with ``dates`` (None marks a date that wasn't fetched) and
            the error that stopped the run early, if any
        """
        results: list[ChartEntry | None] = [None] * len(dates)
        queue: asyncio.Queue[int] = asyncio.Queue()
        for index in range(len(dates)):
            queue.put_nowait(index)

        async def worker() -> None:
            while True:
                try:
                    index = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                day = dates[index]
                try:
                    results[index] = await self._fetcher.fetch_remote(
                        day.year, day.month, day.day
                    )
                except FetchError as e:
                    logger.warning("Backfill skipped %s: %s", day.isoformat(), e.message)
                except Exception:
                    logger.error("Backfill stopped at %s", day.isoformat(), exc_info=True)
                    raise

        workers = [
            asyncio.create_task(worker())
            for _ in range(min(self._max_concurrency, len(dates)))
        ]
        failure: Exception | None = None
        try:
            await asyncio.gather(*workers)
        except Exception as e:
            failure = e
        except BaseException:
            # Cancelled from outside - don't persist a run nobody is waiting for
            await _stop(workers)
            raise
        if failure is not None:
            await _stop(workers)

        return results, failure

    async def backfill(
        self, start_date: date | str, today: date | None = None
    ) -> list[ChartEntry]:
        """Fetch every date from ``start_date`` to ``today`` and persist the results.

        Args:
            start_date: First date (inclusive); a date or "YYYY-MM-DD"/"YYYYMMDD"
            today: Last date (inclusive), defaults to the clock

        Returns:
            Newly fetched entries in ascending date order (failed dates omitted)

        Raises:
            ParseError: If start_date is a malformed string, or a page's format changed
                (raised after the entries fetched so far have been saved)
        """
        if isinstance(start_date, str):
            start_date = parse_iso_date(start_date)
        today = today or self._clock()

        dates = list(iter_dates(start_date, today))
        if not dates:
            logger.info("Backfill from %s: nothing to do before %s", start_date, today)
            return []

        async with log_operation(
            logger,
            "backfill",
            start_date=start_date.isoformat(),
            end_date=today.isoformat(),
            total=len(dates),
            max_concurrency=self._max_concurrency,
        ):
            results, failure = await self._fetch_all(dates)
            entries = [entry for entry in results if entry is not None]

            merged = await self._store.merge(entries)
            if self._cache is not None:
                self._cache.replace(merged)

            if failure is not None:
                logger.error(
                    "Backfill aborted after saving %d entries: %s", len(entries), failure
                )
                raise failure

        logger.info(
            "Backfill from %s: %d fetched, %d failed, %d total in store",
            start_date.isoformat(),
            len(entries),
            len(dates) - len(entries),
            len(merged),
        )
        return entries
