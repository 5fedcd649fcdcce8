"""Shared test fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from memopad.memos.store import MemoStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of the shared memo file inside a temp group container."""
    return tmp_path / "group.test.memopad" / "DigitalMemoPad.sqlite"


@pytest.fixture
def store(db_path: Path) -> MemoStore:
    """Create a MemoStore backed by a temp database."""
    return MemoStore(db_path)


@pytest.fixture
def now() -> datetime:
    """A fixed, timezone-aware reference time."""
    return datetime(2025, 10, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def corrupt_db(db_path: Path) -> Path:
    """A file at the store location that is not a SQLite database."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path.write_bytes(b"definitely not a sqlite database\n" * 64)
    return db_path
