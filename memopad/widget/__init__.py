"""Home-screen widget — timeline provider and refresh host."""

from memopad.widget.host import WidgetHost
from memopad.widget.provider import TimelineProvider

__all__ = [
    "TimelineProvider",
    "WidgetHost",
]
