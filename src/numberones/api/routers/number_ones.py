"""Number one lookup endpoints.

Endpoints:
- GET  /api/number-ones/{birthday}         -> #1 for that month/day in every year since
- GET  /api/number-ones/{birthday}/single  -> #1 for exactly that date
- POST /api/number-ones/backfill?start=... -> bulk-fill the durable cache (opt-in)
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from numberones.api.dependencies import (
    get_access_log,
    get_app_settings,
    get_backfill_service,
    get_lookup_service,
)
from numberones.application.services import (
    BackfillService,
    ChartLookupService,
    default_playlist_name,
    to_playlist_pairs,
)
from numberones.config import Settings
from numberones.domain.entities import ChartEntry
from numberones.domain.value_objects import parse_iso_date
from numberones.infrastructure.observability import AccessLog

router = APIRouter(prefix="/number-ones", tags=["number-ones"])


class ChartEntryResponse(BaseModel):
    """One chart-topping single."""

    date: str = Field(description="Queried date, YYYY-MM-DD")
    chart_week_start: str = Field(description="First day of the chart week")
    chart_week_end: str = Field(description="Last day of the chart week")
    track: str
    artist: str
    cover_url: str | None = None
    year: str
    month: str
    day: str

    @classmethod
    def from_entry(cls, entry: ChartEntry) -> "ChartEntryResponse":
        return cls(**entry.to_dict())


class PlaylistTrack(BaseModel):
    """One (artist, track) pair for playlist creation."""

    artist: str
    track: str


class BirthdayResponse(BaseModel):
    """Yearly number ones for a birthday."""

    birthday: str
    playlist_name: str
    count: int
    entries: list[ChartEntryResponse] = Field(default_factory=list)
    playlist_tracks: list[PlaylistTrack] = Field(default_factory=list)


class BackfillResponse(BaseModel):
    """Backfill run summary."""

    success: bool
    count: int


@router.post("/backfill", response_model=BackfillResponse)
async def run_backfill(
    start: str = Query(description="First date, YYYYMMDD or YYYY-MM-DD"),
    settings: Settings = Depends(get_app_settings),
    backfill: BackfillService = Depends(get_backfill_service),
) -> BackfillResponse:
    """Fetch every date from ``start`` to today into the durable cache.

    Disabled unless NUMBERONES_BACKFILL__API_ENABLED=true - a full run hammers the chart
    site for hours, it's not something to leave open on a public URL.
    """
    if not settings.backfill.api_enabled:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Backfill endpoint is disabled",
        )

    entries = await backfill.backfill(start)
    return BackfillResponse(success=True, count=len(entries))


@router.get("/{birthday}", response_model=BirthdayResponse)
async def get_birthday_number_ones(
    birthday: str,
    lookup: ChartLookupService = Depends(get_lookup_service),
    access_log: AccessLog = Depends(get_access_log),
) -> BirthdayResponse:
    """Number ones on this month/day for every year since the birthday."""
    access_log.record("Track Fetch", birthday)

    born = parse_iso_date(birthday)
    entries = await lookup.lookup_yearly(born.year, born.month, born.day)

    return BirthdayResponse(
        birthday=born.isoformat(),
        playlist_name=default_playlist_name(born.isoformat()),
        count=len(entries),
        entries=[ChartEntryResponse.from_entry(e) for e in entries],
        playlist_tracks=[
            PlaylistTrack(artist=artist, track=track)
            for artist, track in to_playlist_pairs(entries)
        ],
    )


@router.get("/{chart_date}/single", response_model=ChartEntryResponse)
async def get_single_number_one(
    chart_date: str,
    lookup: ChartLookupService = Depends(get_lookup_service),
) -> ChartEntryResponse:
    """Number one for exactly this date."""
    parsed = parse_iso_date(chart_date)
    entry = await lookup.lookup_one(parsed.year, parsed.month, parsed.day)
    return ChartEntryResponse.from_entry(entry)
