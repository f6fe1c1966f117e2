"""Shared test fixtures."""

from collections.abc import Callable

import pytest

from numberones.domain.entities import ChartEntry


def build_entry(
    year: int = 1990,
    month: int = 6,
    day: int = 15,
    track: str = "Nessun Dorma",
    artist: str = "Luciano Pavarotti",
) -> ChartEntry:
    """ChartEntry with plausible chart-week values."""
    return ChartEntry.for_date(
        year,
        month,
        day,
        chart_week_start=f"{year}-{month}-{day}",
        chart_week_end=f"{year}-{month}-{day}",
        track=track,
        artist=artist,
        cover_url=None,
    )


@pytest.fixture
def make_entry() -> Callable[..., ChartEntry]:
    """Factory fixture for chart entries."""
    return build_entry
