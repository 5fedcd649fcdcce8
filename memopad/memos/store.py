"""MemoStore — aiosqlite CRUD for memos in the shared-group file."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import TYPE_CHECKING

import aiosqlite

from memopad.db import connect
from memopad.errors import MemoNotFound, ReadFailure, WriteFailure
from memopad.memos.models import Memo, make_memo_id, parse_timestamp, utcnow
from memopad.timeline.models import MemoSummary, TimelineSnapshot

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable
    from datetime import datetime
    from pathlib import Path

logger = logging.getLogger(__name__)

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS memos (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL DEFAULT '',
    timestamp TEXT NOT NULL
)
"""

_CREATE_INDEX = "CREATE INDEX IF NOT EXISTS idx_memos_timestamp ON memos (timestamp)"

_SELECT_RECENT = """
SELECT id, content, timestamp FROM memos
ORDER BY timestamp DESC, rowid DESC
LIMIT ?
"""

# Errors raised by the driver, the filesystem, or a malformed stored timestamp.
_STORE_ERRORS = (aiosqlite.Error, OSError, ValueError)


def _next_timestamp(previous: datetime) -> datetime:
    """Current time, nudged forward so an edit always moves the timestamp."""
    now = utcnow()
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


class MemoStore:
    """Persists memos in the SQLite file shared by the app and the widget.

    Construct one per process with the shared file path and hand it to
    whatever needs it.  The schema is created on first use.  No connection is
    held between calls, so every read sees what other processes committed.
    """

    def __init__(self, db_path: Path, busy_timeout_ms: int | None = None) -> None:
        self._db_path = db_path
        self._busy_timeout_ms = busy_timeout_ms
        self._initialised = False

    @property
    def path(self) -> Path:
        return self._db_path

    # -- Internal helpers ------------------------------------------------------

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[aiosqlite.Connection]:
        async with connect(self._db_path, self._busy_timeout_ms) as db:
            if not self._initialised:
                await db.execute(_CREATE_TABLE)
                await db.execute(_CREATE_INDEX)
                self._initialised = True
            yield db

    @asynccontextmanager
    async def _reading(self, action: str) -> AsyncIterator[aiosqlite.Connection]:
        try:
            async with self._session() as db:
                yield db
        except _STORE_ERRORS as exc:
            logger.exception("Memo store read failed: %s", action)
            msg = f"Could not {action}: {exc}"
            raise ReadFailure(msg) from exc

    @asynccontextmanager
    async def _writing(self, action: str) -> AsyncIterator[aiosqlite.Connection]:
        try:
            async with self._session() as db:
                yield db
        except _STORE_ERRORS as exc:
            logger.exception("Memo store write failed: %s", action)
            msg = f"Could not {action}: {exc}"
            raise WriteFailure(msg) from exc

    @staticmethod
    async def _fetch_recent(db: aiosqlite.Connection, limit: int) -> list[Memo]:
        cursor = await db.execute(_SELECT_RECENT, (limit,))
        rows = await cursor.fetchall()
        return [Memo.from_row(row) for row in rows]

    @staticmethod
    async def _count(db: aiosqlite.Connection) -> int:
        cursor = await db.execute("SELECT COUNT(*) FROM memos")
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    # -- Read ------------------------------------------------------------------

    async def fetch_recent(self, limit: int) -> list[Memo]:
        """Return up to *limit* memos, newest first."""
        if limit < 0:
            msg = f"limit must be >= 0, got {limit}"
            raise ValueError(msg)
        async with self._reading("fetch recent memos") as db:
            return await self._fetch_recent(db, limit)

    async def count(self) -> int:
        """Total number of memos, regardless of any fetch limit."""
        async with self._reading("count memos") as db:
            return await self._count(db)

    async def get(self, memo_id: str) -> Memo | None:
        """Fetch a memo by ID, or None if not found."""
        async with self._reading("fetch memo") as db:
            cursor = await db.execute(
                "SELECT id, content, timestamp FROM memos WHERE id = ?", (memo_id,)
            )
            row = await cursor.fetchone()
            return Memo.from_row(row) if row else None

    async def list_all(self) -> list[Memo]:
        """Return every memo, newest first."""
        async with self._reading("list memos") as db:
            cursor = await db.execute(
                "SELECT id, content, timestamp FROM memos ORDER BY timestamp DESC, rowid DESC"
            )
            rows = await cursor.fetchall()
            return [Memo.from_row(row) for row in rows]

    async def read_snapshot(self, limit: int, now: datetime | None = None) -> TimelineSnapshot:
        """Read the recent memos and the total count in one transaction."""
        if limit < 0:
            msg = f"limit must be >= 0, got {limit}"
            raise ValueError(msg)
        async with self._reading("read timeline snapshot") as db:
            memos = await self._fetch_recent(db, limit)
            total = await self._count(db)
        return TimelineSnapshot(
            generated_at=now or utcnow(),
            recent_memos=tuple(MemoSummary.from_memo(m) for m in memos),
            total_count=total,
        )

    # -- Write -----------------------------------------------------------------

    async def insert(self, content: str, timestamp: datetime | None = None) -> Memo:
        """Create a memo. The timestamp defaults to now."""
        memo = Memo(id=make_memo_id(), content=content, timestamp=timestamp)
        async with self._writing("insert memo") as db:
            await db.execute(
                "INSERT INTO memos (id, content, timestamp) VALUES (?, ?, ?)",
                memo.to_row(),
            )
        logger.info("Added memo: %s", memo.id)
        return memo

    async def update(self, memo_id: str, content: str) -> Memo:
        """Replace a memo's content and move its timestamp to now.

        Raises ``MemoNotFound`` if the memo does not exist.
        """
        async with self._writing("update memo") as db:
            cursor = await db.execute("SELECT timestamp FROM memos WHERE id = ?", (memo_id,))
            row = await cursor.fetchone()
            if row is None:
                msg = f"Memo not found: {memo_id}"
                raise MemoNotFound(msg)
            previous = parse_timestamp(row[0])
            memo = Memo(id=memo_id, content=content, timestamp=_next_timestamp(previous))
            await db.execute(
                "UPDATE memos SET content = ?, timestamp = ? WHERE id = ?",
                (memo.content, memo.to_row()[2], memo.id),
            )
        logger.info("Updated memo: %s", memo_id)
        return memo

    async def delete(self, ids: Iterable[str]) -> int:
        """Delete memos by ID. Unknown IDs are ignored. Returns rows removed."""
        wanted = sorted(set(ids))
        if not wanted:
            return 0
        placeholders = ", ".join("?" for _ in wanted)
        async with self._writing("delete memos") as db:
            cursor = await db.execute(
                f"DELETE FROM memos WHERE id IN ({placeholders})",  # noqa: S608
                tuple(wanted),
            )
            removed = cursor.rowcount
        if removed:
            logger.info("Deleted %d memo(s)", removed)
        return removed
