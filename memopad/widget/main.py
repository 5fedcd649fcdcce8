"""Widget process entry point."""

import asyncio
import logging

from memopad.config import settings
from memopad.timeline.models import TimelineEntry
from memopad.widget.host import WidgetHost
from memopad.widget.provider import TimelineProvider

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level),
)
logger = logging.getLogger(__name__)


def log_entry(entry: TimelineEntry) -> None:
    """Stand-in renderer: write the entry's headline fields to the log."""
    view = entry.view
    logger.info(
        "%d memo%s (db total %d) | %s | %s",
        view.display_count,
        "" if view.display_count == 1 else "s",
        view.total_count,
        view.status_tier or "-",
        view.elapsed_label or "no memos",
    )


async def run_widget() -> None:
    """Run the widget host until cancelled."""
    provider = TimelineProvider.from_settings(settings)
    host = WidgetHost(provider, on_render=log_entry)
    await host.start()
    try:
        await asyncio.Event().wait()
    finally:
        await host.stop()


def main() -> None:
    logger.info("Starting memo pad widget (group %s)...", settings.app_group_id)
    asyncio.run(run_widget())


if __name__ == "__main__":
    main()
