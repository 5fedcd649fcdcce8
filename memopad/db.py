"""Scoped aiosqlite connections to the shared memo file.

Every store operation opens the file, works inside one transaction and
closes it again.  Nothing stays open between calls, so each read sees what
the other process has committed.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import aiosqlite

from memopad.config import settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

logger = logging.getLogger(__name__)


async def _open(path: Path, busy_timeout_ms: int) -> aiosqlite.Connection:
    """Open a connection with WAL mode and busy timeout."""
    path.parent.mkdir(parents=True, exist_ok=True)
    db = await aiosqlite.connect(str(path))
    try:
        await db.execute("PRAGMA journal_mode=WAL")
        await db.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
    except Exception:
        await db.close()
        raise
    return db


@asynccontextmanager
async def connect(
    path: Path, busy_timeout_ms: int | None = None
) -> AsyncIterator[aiosqlite.Connection]:
    """Yield a connection that commits on success and rolls back on error.

    The connection is closed in both cases.
    """
    timeout = settings.busy_timeout_ms if busy_timeout_ms is None else busy_timeout_ms
    db = await _open(path, timeout)
    try:
        yield db
        await db.commit()
    except Exception:
        logger.debug("Rolling back transaction on %s", path)
        await db.rollback()
        raise
    finally:
        await db.close()
