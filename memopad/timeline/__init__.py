"""Widget timeline — snapshot models and the pure projection."""

from memopad.timeline.models import (
    MemoSummary,
    ProjectedView,
    RefreshPolicy,
    StatusTier,
    Thresholds,
    Timeline,
    TimelineEntry,
    TimelineSnapshot,
)
from memopad.timeline.projection import build_timeline, degraded_view, project

__all__ = [
    "MemoSummary",
    "ProjectedView",
    "RefreshPolicy",
    "StatusTier",
    "Thresholds",
    "Timeline",
    "TimelineEntry",
    "TimelineSnapshot",
    "build_timeline",
    "degraded_view",
    "project",
]
