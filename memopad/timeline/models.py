"""Data models for the widget timeline."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, model_validator

if TYPE_CHECKING:
    from memopad.config import Settings
    from memopad.memos.models import Memo


class StatusTier(StrEnum):
    """Staleness of the most recent memo."""

    NORMAL = "normal"
    WARNING = "warning"
    ALARM = "alarm"

    @property
    def icon_name(self) -> str:
        return _ICONS[self]


_ICONS = {
    StatusTier.NORMAL: "clock",
    StatusTier.WARNING: "exclamationmark.triangle",
    StatusTier.ALARM: "bell.badge",
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Thresholds(_Frozen):
    """Tier boundaries and the periodic fallback interval."""

    warning: timedelta = timedelta(hours=3)
    alarm: timedelta = timedelta(hours=5)
    fallback_refresh: timedelta = timedelta(hours=1)

    @model_validator(mode="after")
    def _check_order(self) -> Thresholds:
        if not timedelta(0) < self.warning < self.alarm:
            msg = f"Expected 0 < warning < alarm, got {self.warning} / {self.alarm}"
            raise ValueError(msg)
        if self.fallback_refresh <= timedelta(0):
            msg = "fallback_refresh must be positive"
            raise ValueError(msg)
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> Thresholds:
        return cls(
            warning=timedelta(hours=settings.warning_hours),
            alarm=timedelta(hours=settings.alarm_hours),
            fallback_refresh=timedelta(minutes=settings.fallback_refresh_minutes),
        )


class MemoSummary(_Frozen):
    """The slice of a memo the widget shows."""

    title: str
    content: str
    timestamp: datetime

    @classmethod
    def from_memo(cls, memo: Memo) -> MemoSummary:
        return cls(title=memo.title, content=memo.content, timestamp=memo.timestamp)


class TimelineSnapshot(_Frozen):
    """One read of the store: the newest memos plus the overall count."""

    generated_at: datetime
    recent_memos: tuple[MemoSummary, ...] = ()
    total_count: int = 0


class RefreshPolicy(_Frozen):
    """When the host should ask for a new timeline.

    ``at_end`` means after the last scheduled update; ``after`` is the
    periodic fallback.  Either way the host reloads at ``reload_at``.
    """

    kind: Literal["at_end", "after"]
    reload_at: datetime


class ProjectedView(_Frozen):
    """Display-ready summary of a snapshot at a given time."""

    display_count: int
    total_count: int
    most_recent: MemoSummary | None = None
    most_recent_age: timedelta | None = None
    status_tier: StatusTier | None = None
    elapsed_label: str | None = None
    scheduled_updates: tuple[datetime, ...] = ()
    refresh_policy: RefreshPolicy
    degraded: bool = False

    @property
    def next_update_at(self) -> datetime:
        """Earliest time this view goes stale."""
        if self.scheduled_updates:
            return self.scheduled_updates[0]
        return self.refresh_policy.reload_at


class TimelineEntry(_Frozen):
    date: datetime
    view: ProjectedView


class Timeline(_Frozen):
    entries: tuple[TimelineEntry, ...]
    policy: RefreshPolicy
