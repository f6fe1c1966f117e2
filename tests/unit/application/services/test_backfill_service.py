"""Unit tests for BackfillService."""

import asyncio
from datetime import date
from pathlib import Path

import pytest

from numberones.application.cache import ChartCache
from numberones.application.services.backfill_service import BackfillService
from numberones.domain.entities import ChartEntry
from numberones.domain.exceptions import ConfigurationError, FetchError, ParseError
from numberones.domain.ports import IChartFetcher
from numberones.infrastructure.persistence import JsonChartStore


class RecordingFetcher(IChartFetcher):
    """Fake fetcher that tracks how many fetches are in flight at once."""

    def __init__(
        self,
        failing: set[date] | None = None,
        parse_error_on: date | None = None,
        delay: float = 0.0,
    ):
        self.failing = failing or set()
        self.parse_error_on = parse_error_on
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = 0

    async def fetch_remote(self, year, month, day) -> ChartEntry:
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            queried = date(int(year), int(month), int(day))
            if queried == self.parse_error_on:
                raise ParseError("Unknown month 'Juli'")
            if queried in self.failing:
                raise FetchError("HTTP 500", date_key=queried.isoformat(), status_code=500)
            return ChartEntry.for_date(
                year,
                month,
                day,
                chart_week_start=f"{year}-{int(month)}-{int(day)}",
                chart_week_end=f"{year}-{int(month)}-{int(day)}",
                track=f"Track {queried.isoformat()}",
                artist="Someone",
            )
        finally:
            self.in_flight -= 1


@pytest.fixture
def store(tmp_path: Path) -> JsonChartStore:
    return JsonChartStore(tmp_path / "number-ones.json")


class TestBackfillService:
    """Test suite for BackfillService."""

    def test_rejects_zero_concurrency(self, store: JsonChartStore) -> None:
        """Test a cap below 1 is a configuration error."""
        with pytest.raises(ConfigurationError):
            BackfillService(RecordingFetcher(), store, max_concurrency=0)

    async def test_failed_date_is_skipped(self, store: JsonChartStore, make_entry) -> None:
        """Test one failing date out of three leaves two results and keeps old keys."""
        existing = make_entry(1990, 6, 15)
        store.save({existing.date: existing})
        fetcher = RecordingFetcher(failing={date(2020, 1, 2)})
        service = BackfillService(fetcher, store)

        entries = await service.backfill(date(2020, 1, 1), today=date(2020, 1, 3))

        assert [entry.date for entry in entries] == ["2020-01-01", "2020-01-03"]
        assert set(store.load()) == {"1990-06-15", "2020-01-01", "2020-01-03"}

    async def test_concurrency_cap_respected(self, store: JsonChartStore) -> None:
        """Test no more than max_concurrency fetches run at once."""
        fetcher = RecordingFetcher(delay=0.01)
        service = BackfillService(fetcher, store, max_concurrency=5)

        entries = await service.backfill(date(2020, 1, 1), today=date(2020, 1, 30))

        assert len(entries) == 30
        assert fetcher.calls == 30
        assert fetcher.max_in_flight <= 5
        assert fetcher.max_in_flight > 1

    async def test_default_cap_is_one_hundred(self, store: JsonChartStore) -> None:
        """Test the default cap holds over a range longer than the cap."""
        fetcher = RecordingFetcher(delay=0.01)
        service = BackfillService(fetcher, store)

        entries = await service.backfill(date(2020, 1, 1), today=date(2020, 6, 30))

        assert service.max_concurrency == 100
        assert len(entries) == 182
        assert fetcher.max_in_flight == 100

    async def test_results_in_date_order(self, store: JsonChartStore) -> None:
        """Test entries come back ascending regardless of completion order."""
        service = BackfillService(RecordingFetcher(delay=0.001), store, max_concurrency=3)

        entries = await service.backfill(date(2020, 2, 27), today=date(2020, 3, 2))

        assert [entry.date for entry in entries] == [
            "2020-02-27",
            "2020-02-28",
            "2020-02-29",
            "2020-03-01",
            "2020-03-02",
        ]

    async def test_parse_error_saves_fetched_entries_then_raises(
        self, store: JsonChartStore, make_entry
    ) -> None:
        """Test a format change stops the run but keeps what was already fetched."""
        existing = make_entry(1990, 6, 15)
        store.save({existing.date: existing})
        fetcher = RecordingFetcher(parse_error_on=date(2020, 1, 3))
        cache = ChartCache({existing.date: existing})
        service = BackfillService(fetcher, store, cache=cache, max_concurrency=1)

        with pytest.raises(ParseError):
            await service.backfill(date(2020, 1, 1), today=date(2020, 1, 10))

        assert set(store.load()) == {"1990-06-15", "2020-01-01", "2020-01-02"}
        assert "2020-01-02" in cache
        # Nothing after the bad page was fetched
        assert fetcher.calls == 3

    async def test_parse_error_mid_run_keeps_good_dates(
        self, store: JsonChartStore, caplog
    ) -> None:
        """Test a bad page deep into a concurrent run loses only the unfinished dates."""
        fetcher = RecordingFetcher(parse_error_on=date(2020, 3, 1), delay=0.001)
        service = BackfillService(fetcher, store, max_concurrency=5)

        with pytest.raises(ParseError):
            await service.backfill(date(2020, 1, 1), today=date(2020, 6, 30))

        stored = store.load()
        assert "2020-03-01" not in stored
        assert {"2020-01-01", "2020-02-01", "2020-02-20"} <= set(stored)
        assert any(
            r.levelname == "ERROR" and "2020-03-01" in r.getMessage() for r in caplog.records
        )

    async def test_cache_replaced_after_commit(
        self, store: JsonChartStore, make_entry
    ) -> None:
        """Test the in-memory snapshot sees the merged store."""
        existing = make_entry(1990, 6, 15)
        store.save({existing.date: existing})
        cache = ChartCache({existing.date: existing})
        service = BackfillService(RecordingFetcher(), store, cache=cache)

        await service.backfill(date(2020, 1, 1), today=date(2020, 1, 2))

        assert len(cache) == 3
        assert cache.get("2020-01-02") is not None
        assert cache.get("1990-06-15") == existing

    async def test_string_start_date(self, store: JsonChartStore) -> None:
        """Test a YYYY-MM-DD start date is accepted."""
        service = BackfillService(RecordingFetcher(), store)

        entries = await service.backfill("2020-01-01", today=date(2020, 1, 2))

        assert len(entries) == 2

    async def test_invalid_string_start_date(self, store: JsonChartStore) -> None:
        """Test a malformed start date raises before anything is fetched."""
        fetcher = RecordingFetcher()
        service = BackfillService(fetcher, store)

        with pytest.raises(ParseError):
            await service.backfill("not-a-date", today=date(2020, 1, 2))
        assert fetcher.calls == 0

    async def test_start_after_today_is_noop(self, store: JsonChartStore) -> None:
        """Test an empty range fetches nothing and writes nothing."""
        fetcher = RecordingFetcher()
        service = BackfillService(fetcher, store)

        entries = await service.backfill(date(2020, 1, 5), today=date(2020, 1, 1))

        assert entries == []
        assert fetcher.calls == 0
        assert not store.path.exists()

    async def test_clock_used_when_today_omitted(self, store: JsonChartStore) -> None:
        """Test the injected clock ends the range."""
        service = BackfillService(
            RecordingFetcher(), store, clock=lambda: date(2020, 1, 3)
        )

        entries = await service.backfill(date(2020, 1, 1))

        assert [entry.day for entry in entries] == ["01", "02", "03"]
