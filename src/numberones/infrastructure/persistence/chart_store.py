"""Durable chart cache store - one JSON document keyed by YYYY-MM-DD.

Hey future me - this is deliberately NOT a database. The whole mapping is read at
startup and the whole mapping is rewritten after a backfill. There is no per-entry
write path! Writes go to a temp file next to the target and are os.replace()d into
place, so a crash mid-write leaves the previous document intact.

Cross-process writers are NOT guarded. Run one backfill at a time.
"""

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path

from numberones.domain.entities import ChartEntry
from numberones.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class JsonChartStore:
    """Whole-document JSON store for chart entries."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, ChartEntry]:
        """Read the entire mapping. A missing file is an empty store.

        Raises:
            ValidationError: If the document is not an object or a key and its
                entry's date disagree
        """
        if not self.path.exists():
            logger.info("Chart store %s does not exist yet, starting empty", self.path)
            return {}

        with self.path.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        if not isinstance(raw, dict):
            raise ValidationError(f"Chart store {self.path} must contain a JSON object")

        entries: dict[str, ChartEntry] = {}
        for key, value in raw.items():
            entry = ChartEntry.from_dict(value)
            if entry.date != key:
                raise ValidationError(
                    f"Chart store key {key!r} holds an entry for {entry.date!r}"
                )
            entries[key] = entry

        logger.info("Loaded %d chart entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: Mapping[str, ChartEntry]) -> None:
        """Atomically replace the entire mapping on disk."""
        for key, entry in entries.items():
            if entry.date != key:
                raise ValidationError(
                    f"Refusing to store {entry.date!r} under key {key!r}"
                )

        document = {key: entries[key].to_dict() for key in sorted(entries)}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Wrote %d chart entries to %s", len(document), self.path)

    def merge_and_save(self, new_entries: Iterable[ChartEntry]) -> dict[str, ChartEntry]:
        """Read the full store, overlay ``new_entries`` by date, write it back.

        Later entries for the same date win.

        Returns:
            The merged mapping that was written
        """
        merged = self.load()
        for entry in new_entries:
            merged[entry.date] = entry
        self.save(merged)
        return merged

    # Async wrappers - file I/O runs in a worker thread so the event loop keeps serving
    # lookups while a multi-megabyte document is parsed or written.
    async def load_async(self) -> dict[str, ChartEntry]:
        return await asyncio.to_thread(self.load)

    async def merge(self, new_entries: Iterable[ChartEntry]) -> dict[str, ChartEntry]:
        """Async read-modify-write of the whole store."""
        return await asyncio.to_thread(self.merge_and_save, list(new_entries))
