"""In-memory snapshot of the durable chart store.

Hey future me - lifecycle of this thing:
1. Built ONCE at startup from JsonChartStore.load() (or from a plain dict in tests)
2. Read by every lookup - point lookups only, no TTL, nothing expires
3. Replaced WHOLESALE after a backfill commits (replace()), never mutated entry by entry

Single lookups that miss the cache do NOT write back here. Only backfill grows the cache.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from numberones.domain.entities import ChartEntry
from numberones.domain.value_objects import date_key
from numberones.infrastructure.persistence import JsonChartStore

logger = logging.getLogger(__name__)


class ChartCache:
    """Read-mostly date -> ChartEntry snapshot."""

    def __init__(self, entries: Mapping[str, ChartEntry] | None = None) -> None:
        self._entries: Mapping[str, ChartEntry] = MappingProxyType(dict(entries or {}))

    @classmethod
    async def from_store(cls, store: JsonChartStore) -> "ChartCache":
        """Load the whole store into a new snapshot."""
        return cls(await store.load_async())

    def get(self, key: str) -> ChartEntry | None:
        """Point lookup by YYYY-MM-DD key."""
        return self._entries.get(key)

    def lookup(
        self, year: int | str, month: int | str, day: int | str
    ) -> ChartEntry | None:
        """Point lookup by date components (month/day padded for you)."""
        return self._entries.get(date_key(year, month, day))

    # Swapping the reference is atomic from the event loop's point of view: a lookup
    # sees either the old snapshot or the new one, never a half-merged dict.
    def replace(self, entries: Mapping[str, ChartEntry]) -> None:
        """Swap in a new snapshot (after a backfill commits)."""
        previous = len(self._entries)
        self._entries = MappingProxyType(dict(entries))
        logger.info("Chart cache replaced: %d -> %d entries", previous, len(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
