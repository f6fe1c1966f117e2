"""Unit tests for the ChartEntry entity."""

import pytest

from numberones.domain.entities import ChartEntry
from numberones.domain.exceptions import ValidationError


class TestChartEntryConstruction:
    """Tests for building chart entries."""

    def test_for_date_pads_components(self) -> None:
        """Test month/day are zero padded and date matches them."""
        entry = ChartEntry.for_date(
            1990,
            6,
            5,
            chart_week_start="1990-6-3",
            chart_week_end="1990-6-9",
            track="Nessun Dorma",
            artist="Luciano Pavarotti",
        )
        assert entry.date == "1990-06-05"
        assert (entry.year, entry.month, entry.day) == ("1990", "06", "05")
        assert entry.cover_url is None

    def test_mismatched_date_rejected(self) -> None:
        """Test the date/components invariant is enforced."""
        with pytest.raises(ValidationError):
            ChartEntry(
                date="1990-06-05",
                chart_week_start="1990-6-3",
                chart_week_end="1990-6-9",
                track="",
                artist="",
                year="1990",
                month="06",
                day="06",
            )

    def test_as_playlist_pair(self, make_entry) -> None:
        """Test the (artist, track) ordering."""
        entry = make_entry(track="Vogue", artist="Madonna")
        assert entry.as_playlist_pair() == ("Madonna", "Vogue")


class TestChartEntrySerialization:
    """Tests for to_dict/from_dict."""

    def test_round_trip(self, make_entry) -> None:
        """Test the current shape reads back identically."""
        entry = make_entry()
        assert ChartEntry.from_dict(entry.to_dict()) == entry

    def test_legacy_camel_case_shape(self) -> None:
        """Test documents written by the old tool still load."""
        legacy = {
            "date": "2020-08-01",
            "actualChartStartDate": "2020-7-31",
            "actualChartEndDate": "2020-8-6",
            "track": "Rain On Me",
            "artist": "Lady Gaga & Ariana Grande",
            "cover": "https://example.com/cover.jpg",
            "year": 2020,
            "month": "08",
            "day": "01",
        }
        entry = ChartEntry.from_dict(legacy)
        assert entry.date == "2020-08-01"
        assert entry.year == "2020"
        assert entry.chart_week_start == "2020-7-31"
        assert entry.cover_url == "https://example.com/cover.jpg"

    def test_components_derived_from_date(self) -> None:
        """Test year/month/day fall back to the date field."""
        entry = ChartEntry.from_dict(
            {
                "date": "1985-07-13",
                "chart_week_start": "1985-7-7",
                "chart_week_end": "1985-7-13",
                "track": "Frankie",
                "artist": "Sister Sledge",
            }
        )
        assert (entry.year, entry.month, entry.day) == ("1985", "07", "13")

    def test_missing_week_raises(self) -> None:
        """Test a document without chart week fields is rejected."""
        with pytest.raises(ValidationError):
            ChartEntry.from_dict({"date": "1985-07-13", "track": "", "artist": ""})

    def test_inconsistent_date_raises(self) -> None:
        """Test date disagreeing with the components is rejected."""
        with pytest.raises(ValidationError):
            ChartEntry.from_dict(
                {
                    "date": "1985-07-14",
                    "chart_week_start": "1985-7-7",
                    "chart_week_end": "1985-7-13",
                    "track": "Frankie",
                    "artist": "Sister Sledge",
                    "year": "1985",
                    "month": "07",
                    "day": "13",
                }
            )
