"""WidgetHost — APScheduler-driven refresh loop for the widget process.

Plays the part of the OS widget host: asks the provider for a timeline,
renders the current entry, renders each later entry when its date arrives,
and asks for a new timeline at the refresh policy's reload time.  A skipped
or late refresh is harmless because every refresh re-reads the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

from memopad.memos.models import utcnow
from memopad.timeline.projection import degraded_timeline

if TYPE_CHECKING:
    from collections.abc import Callable

    from memopad.timeline.models import Timeline, TimelineEntry
    from memopad.widget.provider import TimelineProvider

logger = logging.getLogger(__name__)

RELOAD_JOB_ID = "widget-reload"


class WidgetHost:
    """Schedules widget renders and reloads.

    Args:
        provider: Source of timelines.
        on_render: Called with each entry as it becomes current.
        timezone: Timezone for the scheduler (entry dates are UTC-aware).
    """

    def __init__(
        self,
        provider: TimelineProvider,
        on_render: Callable[[TimelineEntry], None] | None = None,
        timezone: str = "UTC",
    ) -> None:
        self._provider = provider
        self._on_render = on_render
        self._timezone = timezone
        self._scheduler = AsyncIOScheduler(timezone=timezone)
        self._running = False
        self._timeline: Timeline | None = None
        self._current: TimelineEntry | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def timeline(self) -> Timeline | None:
        return self._timeline

    @property
    def current(self) -> TimelineEntry | None:
        return self._current

    # -- Lifecycle -------------------------------------------------------------

    async def start(self) -> None:
        """Render the placeholder, start the scheduler, and load the first timeline."""
        await self._render(self._provider.placeholder())
        self._scheduler.start()
        self._running = True
        await self.refresh()
        logger.info("Widget host started")

    async def stop(self) -> None:
        """Shut down the scheduler."""
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Widget host stopped")

    # -- Refresh ---------------------------------------------------------------

    async def refresh(self) -> Timeline:
        """Fetch a new timeline and replace every pending job.

        A provider failure renders the empty timeline. The reload job is
        always rescheduled.
        """
        try:
            timeline = await self._provider.get_timeline()
        except Exception:
            logger.exception("Widget timeline failed; rendering empty")
            timeline = degraded_timeline(utcnow(), self._provider.thresholds)
        self._timeline = timeline
        self._scheduler.remove_all_jobs()

        await self._render(timeline.entries[0])
        for index, entry in enumerate(timeline.entries[1:], start=1):
            self._scheduler.add_job(
                self._render,
                trigger=DateTrigger(run_date=entry.date, timezone=self._timezone),
                id=f"widget-render-{index}",
                args=[entry],
                misfire_grace_time=None,
                replace_existing=True,
            )
        self._scheduler.add_job(
            self.refresh,
            trigger=DateTrigger(run_date=timeline.policy.reload_at, timezone=self._timezone),
            id=RELOAD_JOB_ID,
            misfire_grace_time=None,
            replace_existing=True,
        )
        logger.info(
            "Widget refreshed: %d entr%s, reload %s at %s",
            len(timeline.entries),
            "y" if len(timeline.entries) == 1 else "ies",
            timeline.policy.kind,
            timeline.policy.reload_at.isoformat(),
        )
        return timeline

    # -- Internal --------------------------------------------------------------

    async def _render(self, entry: TimelineEntry) -> None:
        """Runs on the event loop, including when fired by a render job."""
        self._current = entry
        if self._on_render is not None:
            self._on_render(entry)
