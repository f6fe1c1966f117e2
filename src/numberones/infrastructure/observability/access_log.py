"""Append-only access log used in place of analytics.

Hey future me - this is a best-effort side channel! record() schedules the file append
and returns immediately; the caller never waits for it and never sees its errors. A full
disk or a read-only mount gets a WARNING in the normal log and that's it. Lookup results
must never depend on this.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class AccessLog:
    """Fire-and-forget line appender.

    Lines look like "2024-04-02 13:37:00: Track Fetch: 1990-06-15".
    """

    def __init__(self, path: Path | str | None) -> None:
        self.path = Path(path) if path else None
        # Strong refs so pending writes aren't garbage collected mid-flight
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        return self.path is not None

    def _append(self, line: str) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"\n{line}")

    async def _write(self, line: str) -> None:
        try:
            await asyncio.to_thread(self._append, line)
        except OSError as e:
            logger.warning("Could not write access log %s: %s", self.path, e)

    def record(self, event: str, detail: str, now: datetime | None = None) -> None:
        """Schedule one access log line. Must be called from a running event loop."""
        if self.path is None:
            return
        stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        task = asyncio.get_running_loop().create_task(
            self._write(f"{stamp}: {event}: {detail}")
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for pending writes (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
