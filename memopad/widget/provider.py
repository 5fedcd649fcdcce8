"""TimelineProvider — the widget's read-only view of the shared store.

Nothing in here raises.  A store that cannot be read, or a shared location
that could not be resolved, turns into an empty timeline that refreshes on
the periodic fallback.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from memopad.errors import ConfigurationFailure, ReadFailure
from memopad.memos.models import utcnow
from memopad.memos.store import MemoStore
from memopad.timeline.models import MemoSummary, Thresholds, TimelineEntry, TimelineSnapshot
from memopad.timeline.projection import build_timeline, degraded_timeline, project

if TYPE_CHECKING:
    from datetime import datetime

    from memopad.config import Settings
    from memopad.timeline.models import Timeline

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


class TimelineProvider:
    """Builds widget timelines from the shared store.

    Args:
        store: Store to read, or None when the shared location is unavailable.
        limit: How many recent memos to fetch.
        thresholds: Tier boundaries and fallback interval.
    """

    def __init__(
        self,
        store: MemoStore | None,
        limit: int = DEFAULT_LIMIT,
        thresholds: Thresholds | None = None,
    ) -> None:
        self._store = store
        self._limit = limit
        self._thresholds = thresholds or Thresholds()

    @classmethod
    def from_settings(cls, settings: Settings) -> TimelineProvider:
        """Open the shared store, or run storeless if it cannot be located."""
        try:
            store = MemoStore(settings.store_path(), busy_timeout_ms=settings.busy_timeout_ms)
        except ConfigurationFailure:
            logger.exception("Widget could not resolve the shared store; rendering empty")
            store = None
        return cls(
            store=store,
            limit=settings.recent_limit,
            thresholds=Thresholds.from_settings(settings),
        )

    @property
    def store(self) -> MemoStore | None:
        return self._store

    @property
    def thresholds(self) -> Thresholds:
        return self._thresholds

    # -- Host callbacks --------------------------------------------------------

    def placeholder(self, now: datetime | None = None) -> TimelineEntry:
        """Entry shown before the first read. Does not touch the store."""
        now = now or utcnow()
        snapshot = TimelineSnapshot(
            generated_at=now,
            recent_memos=(
                MemoSummary(title="Loading...", content="Memos will appear here", timestamp=now),
            ),
        )
        return TimelineEntry(date=now, view=project(snapshot, now, self._thresholds))

    async def get_snapshot(self, now: datetime | None = None) -> TimelineEntry:
        """The current entry only."""
        timeline = await self.get_timeline(now)
        return timeline.entries[0]

    async def get_timeline(self, now: datetime | None = None) -> Timeline:
        """Read the store and build the full timeline with its refresh policy."""
        now = now or utcnow()
        snapshot = await self._read(now)
        if snapshot is None:
            return degraded_timeline(now, self._thresholds)
        timeline = build_timeline(snapshot, now, self._thresholds)
        for entry in timeline.entries[1:]:
            logger.debug("Scheduled widget update at %s", entry.date.isoformat())
        return timeline

    # -- Internal --------------------------------------------------------------

    async def _read(self, now: datetime) -> TimelineSnapshot | None:
        if self._store is None:
            return None

        path = self._store.path
        try:
            logger.debug("Widget reading from %s (exists=%s)", path, path.exists())
            snapshot = await self._store.read_snapshot(self._limit, now)
        except (ReadFailure, OSError):
            logger.warning("Widget fetch failed; rendering empty timeline")
            return None

        logger.debug(
            "Fetched %d of %d memo(s) for display",
            len(snapshot.recent_memos),
            snapshot.total_count,
        )
        return snapshot
