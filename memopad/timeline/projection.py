"""Timeline projection — turns a store snapshot into what the widget shows.

Everything here is pure: the same snapshot and ``now`` always give the same
view.  The thresholds are measured against the single most recent memo (the
first of the newest-first snapshot), not against the oldest one displayed.

Scheduling: a view is recomputed when the most recent memo crosses the
warning boundary and again when it crosses the alarm boundary.  Once both
have passed (or the store is empty) the host falls back to reloading every
``fallback_refresh``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from memopad.timeline.models import (
    ProjectedView,
    RefreshPolicy,
    StatusTier,
    Thresholds,
    Timeline,
    TimelineEntry,
    TimelineSnapshot,
)

if TYPE_CHECKING:
    from datetime import datetime

DEFAULT_THRESHOLDS = Thresholds()


def status_for_age(age: timedelta, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> StatusTier:
    """Classify a memo age. Boundaries belong to the higher tier."""
    if age >= thresholds.alarm:
        return StatusTier.ALARM
    if age >= thresholds.warning:
        return StatusTier.WARNING
    return StatusTier.NORMAL


def format_elapsed(age: timedelta) -> str:
    """``"2h 5m ago"`` or ``"42m ago"``. Negative ages read as ``"0m ago"``."""
    total = max(int(age.total_seconds()), 0)
    hours, remainder = divmod(total, 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes}m ago"
    return f"{minutes}m ago"


def plan_updates(
    timestamp: datetime, now: datetime, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> tuple[datetime, ...]:
    """Future boundary crossings for a memo written at *timestamp*."""
    age = now - timestamp
    return tuple(
        timestamp + boundary
        for boundary in (thresholds.warning, thresholds.alarm)
        if age < boundary
    )


def refresh_policy(
    updates: tuple[datetime, ...], now: datetime, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> RefreshPolicy:
    if updates:
        return RefreshPolicy(kind="at_end", reload_at=updates[-1])
    return RefreshPolicy(kind="after", reload_at=now + thresholds.fallback_refresh)


def project(
    snapshot: TimelineSnapshot, now: datetime, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> ProjectedView:
    """Compute the widget view of *snapshot* as seen at *now*."""
    memos = snapshot.recent_memos
    if not memos:
        return ProjectedView(
            display_count=0,
            total_count=snapshot.total_count,
            refresh_policy=refresh_policy((), now, thresholds),
        )

    newest = memos[0]
    age = now - newest.timestamp
    updates = plan_updates(newest.timestamp, now, thresholds)
    return ProjectedView(
        display_count=len(memos),
        total_count=snapshot.total_count,
        most_recent=newest,
        most_recent_age=age,
        status_tier=status_for_age(max(age, timedelta(0)), thresholds),
        elapsed_label=format_elapsed(age),
        scheduled_updates=updates,
        refresh_policy=refresh_policy(updates, now, thresholds),
    )


def degraded_view(now: datetime, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> ProjectedView:
    """Empty view used when the store could not be read."""
    view = project(TimelineSnapshot(generated_at=now), now, thresholds)
    return view.model_copy(update={"degraded": True})


def build_timeline(
    snapshot: TimelineSnapshot, now: datetime, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> Timeline:
    """Current entry plus one entry per scheduled update.

    Each entry is projected at its own date, so the entry at the warning
    boundary already carries the warning tier.
    """
    current = project(snapshot, now, thresholds)
    entries = [TimelineEntry(date=now, view=current)]
    entries.extend(
        TimelineEntry(date=at, view=project(snapshot, at, thresholds))
        for at in current.scheduled_updates
    )
    return Timeline(entries=tuple(entries), policy=current.refresh_policy)


def degraded_timeline(now: datetime, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Timeline:
    view = degraded_view(now, thresholds)
    return Timeline(entries=(TimelineEntry(date=now, view=view),), policy=view.refresh_policy)
