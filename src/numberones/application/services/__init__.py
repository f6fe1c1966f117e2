"""Application services."""

from numberones.application.services.backfill_service import BackfillService
from numberones.application.services.chart_lookup_service import (
    ChartLookupService,
    current_chart_year,
    eligible_years,
)
from numberones.application.services.playlist_tracks import (
    default_playlist_name,
    to_playlist_pairs,
)

__all__ = [
    "BackfillService",
    "ChartLookupService",
    "current_chart_year",
    "default_playlist_name",
    "eligible_years",
    "to_playlist_pairs",
]
