"""Hand-off helpers for the playlist-creation workflow."""

from collections.abc import Iterable

from numberones.domain.entities import ChartEntry

DEFAULT_PLAYLIST_NAME = "My Birthday Playlist - {birthday}"


def default_playlist_name(birthday: str) -> str:
    """Name used when the user didn't pick one."""
    return DEFAULT_PLAYLIST_NAME.format(birthday=birthday)


# Hey future me, entries whose names failed to normalize come through as "" - a catalog
# search for "artist: track:" matches garbage, so those are dropped here. Order is kept,
# the playlist should play oldest year first.
def to_playlist_pairs(entries: Iterable[ChartEntry]) -> list[tuple[str, str]]:
    """Ordered (artist, track) pairs for the playlist workflow."""
    return [
        entry.as_playlist_pair() for entry in entries if entry.artist and entry.track
    ]
