"""MemoPad — controller behind the editing surface.

The editing surface lists, opens, creates, edits, and deletes memos.  Every
call returns after the change is committed to the shared file, so dismissing
an edit screen is safe and the widget sees the change on its next read.
``WriteFailure`` is left to propagate: the caller keeps its in-memory edit and
offers a retry.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from memopad.config import settings
from memopad.memos.models import utcnow
from memopad.memos.store import MemoStore

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from memopad.config import Settings
    from memopad.memos.models import Memo

logger = logging.getLogger(__name__)


class MemoPad:
    """Memo operations for the primary app.

    Args:
        store: The shared-file store this app writes to.
    """

    def __init__(self, store: MemoStore) -> None:
        self._store = store

    @property
    def store(self) -> MemoStore:
        return self._store

    # -- Read ------------------------------------------------------------------

    async def list_memos(self) -> list[Memo]:
        """All memos, newest first."""
        return await self._store.list_all()

    async def open_memo(self, memo_id: str) -> Memo | None:
        return await self._store.get(memo_id)

    # -- Write -----------------------------------------------------------------

    async def create(self, content: str) -> Memo:
        """Save a new memo.

        Raises ``ValueError`` if the content is blank once trimmed.  The
        content itself is stored as typed.
        """
        if not content.strip():
            msg = "Cannot save a blank memo"
            raise ValueError(msg)
        return await self._store.insert(content)

    async def edit(self, memo_id: str, content: str) -> Memo:
        """Replace a memo's content. Its timestamp moves to now."""
        return await self._store.update(memo_id, content)

    async def delete(self, memo_ids: Iterable[str]) -> int:
        return await self._store.delete(memo_ids)


def open_memo_pad(config: Settings | None = None) -> MemoPad:
    """Open the app against the shared-group store.

    ``ConfigurationFailure`` propagates: without the shared location the app
    cannot run.
    """
    config = config or settings
    path = config.store_path()
    logger.info("Opening memo pad store at %s", path)
    return MemoPad(MemoStore(path, busy_timeout_ms=config.busy_timeout_ms))


async def load_preview_data(store: MemoStore, now: datetime | None = None) -> list[Memo]:
    """Seed three sample memos, one hour apart, newest first."""
    now = now or utcnow()
    memos = []
    for i in range(3):
        memo = await store.insert(
            f"Sample memo {i + 1}\nThis is sample content for preview.",
            timestamp=now - timedelta(hours=i),
        )
        memos.append(memo)
    return memos
