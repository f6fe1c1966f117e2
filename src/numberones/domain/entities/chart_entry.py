"""Chart entry entity - the #1 single for one calendar date."""

from dataclasses import dataclass
from typing import Any

from numberones.domain.exceptions import ValidationError
from numberones.domain.value_objects.chart_dates import date_key, pad2


@dataclass(frozen=True)
class ChartEntry:
    """The chart-topping single for a queried date.

    Hey future me - `date` is the date that was ASKED for, while the chart week fields
    are what the provider says the chart covered. The provider publishes weekly, so seven
    consecutive dates share one track. year/month/day duplicate `date` for callers that
    want the parts; __post_init__ keeps them honest.
    """

    date: str
    chart_week_start: str
    chart_week_end: str
    track: str
    artist: str
    year: str
    month: str
    day: str
    cover_url: str | None = None

    def __post_init__(self) -> None:
        expected = f"{self.year}-{self.month}-{self.day}"
        if self.date != expected:
            raise ValidationError(
                f"Chart entry date {self.date!r} does not match {expected!r}"
            )

    @classmethod
    def for_date(
        cls,
        year: int | str,
        month: int | str,
        day: int | str,
        *,
        chart_week_start: str,
        chart_week_end: str,
        track: str,
        artist: str,
        cover_url: str | None = None,
    ) -> "ChartEntry":
        """Build an entry from raw query components, padding month and day."""
        return cls(
            date=date_key(year, month, day),
            chart_week_start=chart_week_start,
            chart_week_end=chart_week_end,
            track=track,
            artist=artist,
            year=f"{int(year):04d}",
            month=pad2(month),
            day=pad2(day),
            cover_url=cover_url,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the cache store's JSON shape."""
        return {
            "date": self.date,
            "chart_week_start": self.chart_week_start,
            "chart_week_end": self.chart_week_end,
            "track": self.track,
            "artist": self.artist,
            "cover_url": self.cover_url,
            "year": self.year,
            "month": self.month,
            "day": self.day,
        }

    # Listen up, the first generation of number-ones.json was written with camelCase keys
    # (actualChartStartDate, cover) and numeric years. We read both shapes so an existing
    # cache file keeps working without a migration step.
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartEntry":
        """Deserialize from either the current or the legacy cache shape.

        Raises:
            ValidationError: If required fields are missing or inconsistent
        """
        try:
            year = data.get("year")
            month = data.get("month")
            day = data.get("day")
            if year is None or month is None or day is None:
                year, month, day = str(data["date"]).split("-")

            entry = cls.for_date(
                year,
                month,
                day,
                chart_week_start=data.get("chart_week_start")
                or data["actualChartStartDate"],
                chart_week_end=data.get("chart_week_end") or data["actualChartEndDate"],
                track=data.get("track") or "",
                artist=data.get("artist") or "",
                cover_url=data.get("cover_url") or data.get("cover"),
            )
        except ValidationError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed chart entry {data!r}: {e}") from e

        if "date" in data and data["date"] != entry.date:
            raise ValidationError(
                f"Chart entry date {data['date']!r} does not match {entry.date!r}"
            )
        return entry

    def as_playlist_pair(self) -> tuple[str, str]:
        """Return the (artist, track) pair handed to playlist creation."""
        return (self.artist, self.track)
