"""Tests for TimelineProvider — the widget's read path."""

from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from memopad.config import Settings
from memopad.memos.store import MemoStore
from memopad.timeline.models import StatusTier, Thresholds
from memopad.widget.provider import TimelineProvider

H = timedelta(hours=1)
M = timedelta(minutes=1)


@pytest.fixture
def provider(store: MemoStore) -> TimelineProvider:
    return TimelineProvider(store=store, limit=5)


# -- get_timeline --------------------------------------------------------------


async def test_timeline_from_store(
    provider: TimelineProvider, store: MemoStore, now: datetime
) -> None:
    await store.insert("Fresh\nbody", timestamp=now - 10 * M)
    await store.insert("Older", timestamp=now - (4 * H + 20 * M))
    await store.insert("Oldest", timestamp=now - 7 * H)

    timeline = await provider.get_timeline(now)
    view = timeline.entries[0].view
    assert view.display_count == 3
    assert view.total_count == 3
    assert view.most_recent_age == 10 * M
    assert view.status_tier is StatusTier.NORMAL
    assert view.elapsed_label == "10m ago"
    assert view.next_update_at == now + 3 * H - 10 * M
    assert view.degraded is False
    assert timeline.policy.kind == "at_end"


async def test_limit_caps_display_count(
    provider: TimelineProvider, store: MemoStore, now: datetime
) -> None:
    for i in range(12):
        await store.insert(f"memo {i}", timestamp=now - i * M)

    entry = await provider.get_snapshot(now)
    assert entry.view.display_count == 5
    assert entry.view.total_count == 12


async def test_empty_store(provider: TimelineProvider, now: datetime) -> None:
    timeline = await provider.get_timeline(now)
    assert len(timeline.entries) == 1
    assert timeline.entries[0].view.display_count == 0
    assert timeline.entries[0].view.degraded is False
    assert timeline.policy.kind == "after"
    assert timeline.policy.reload_at == now + H


async def test_custom_thresholds(store: MemoStore, now: datetime) -> None:
    provider = TimelineProvider(store=store, thresholds=Thresholds(warning=H, alarm=2 * H))
    await store.insert("memo", timestamp=now - 90 * M)

    entry = await provider.get_snapshot(now)
    assert entry.view.status_tier is StatusTier.WARNING


async def test_get_snapshot_is_first_entry(
    provider: TimelineProvider, store: MemoStore, now: datetime
) -> None:
    await store.insert("memo", timestamp=now - H)
    entry = await provider.get_snapshot(now)
    assert entry.date == now
    assert entry.view.status_tier is StatusTier.NORMAL


async def test_sees_writes_from_another_store(db_path: Path, now: datetime) -> None:
    app_store = MemoStore(db_path)
    provider = TimelineProvider(store=MemoStore(db_path))

    assert (await provider.get_snapshot(now)).view.display_count == 0
    memo = await app_store.insert("from the app", timestamp=now - 2 * H)
    assert (await provider.get_snapshot(now)).view.display_count == 1

    await app_store.delete({memo.id})
    assert (await provider.get_snapshot(now)).view.display_count == 0


# -- Degraded reads ------------------------------------------------------------


async def test_read_failure_degrades(corrupt_db: Path, now: datetime) -> None:
    provider = TimelineProvider(store=MemoStore(corrupt_db))

    timeline = await provider.get_timeline(now)
    view = timeline.entries[0].view
    assert view.degraded is True
    assert view.display_count == 0
    assert view.total_count == 0
    assert timeline.policy.kind == "after"
    assert timeline.policy.reload_at == now + H


async def test_no_store_degrades(now: datetime) -> None:
    provider = TimelineProvider(store=None)
    entry = await provider.get_snapshot(now)
    assert entry.view.degraded is True


async def test_inaccessible_container_degrades(provider: TimelineProvider, now: datetime) -> None:
    with patch.object(Path, "exists", side_effect=PermissionError("denied")):
        timeline = await provider.get_timeline(now)

    assert timeline.entries[0].view.degraded is True
    assert timeline.policy.reload_at == now + H


# -- from_settings -------------------------------------------------------------


def test_from_settings(tmp_path: Path) -> None:
    settings = Settings(
        shared_container_root=tmp_path, recent_limit=3, warning_hours=1, alarm_hours=2
    )
    provider = TimelineProvider.from_settings(settings)
    assert provider.store is not None
    assert provider.store.path == settings.store_path()


async def test_from_settings_unresolvable_location(tmp_path: Path, now: datetime) -> None:
    provider = TimelineProvider.from_settings(
        Settings(shared_container_root=tmp_path, app_group_id="")
    )
    assert provider.store is None

    timeline = await provider.get_timeline(now)
    assert timeline.entries[0].view.degraded is True


# -- placeholder ---------------------------------------------------------------


def test_placeholder_does_not_touch_store(
    provider: TimelineProvider, db_path: Path, now: datetime
) -> None:
    entry = provider.placeholder(now)
    assert entry.date == now
    assert entry.view.display_count == 1
    assert entry.view.total_count == 0
    assert entry.view.status_tier is StatusTier.NORMAL
    assert not db_path.exists()
