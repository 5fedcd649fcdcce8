"""Memo data model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

UNTITLED = "Untitled Memo"
NO_PREVIEW = "No additional content"


def utcnow() -> datetime:
    return datetime.now(UTC)


def format_timestamp(ts: datetime) -> str:
    """Serialize to fixed-width ISO 8601 UTC so text order matches time order."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat(timespec="microseconds")


def parse_timestamp(raw: str) -> datetime:
    """Parse a stored timestamp. Naive values are taken as UTC."""
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _lines(content: str) -> list[str]:
    """Split on line breaks, keeping a trailing empty line."""
    lines = content.splitlines()
    if not lines or content.splitlines(keepends=True)[-1] != lines[-1]:
        lines.append("")
    return lines


@dataclass
class Memo:
    """A persisted memo.

    Attributes:
        id: Unique identifier (UUID hex), never reused.
        content: Free text. The first line doubles as the title.
        timestamp: Creation time, overwritten on every edit.
    """

    id: str
    content: str = ""
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        if self.content is None:
            self.content = ""
        if self.timestamp is None:
            self.timestamp = utcnow()
        elif self.timestamp.tzinfo is None:
            self.timestamp = self.timestamp.replace(tzinfo=UTC)

    # -- Convenience properties ------------------------------------------------

    @property
    def title(self) -> str:
        """First line of the content, or ``"Untitled Memo"`` when blank."""
        return _lines(self.content)[0] or UNTITLED

    @property
    def preview(self) -> str:
        """Everything after the title on one line."""
        lines = _lines(self.content)
        if len(lines) > 1:
            return " ".join(lines[1:]).strip()
        return NO_PREVIEW

    # -- Serialization ---------------------------------------------------------

    def to_row(self) -> tuple:
        """Serialize to a tuple matching the ``memos`` column order."""
        return (self.id, self.content, format_timestamp(self.timestamp))

    @classmethod
    def from_row(cls, row: tuple) -> Memo:
        """Deserialize from a SQLite row tuple."""
        return cls(id=row[0], content=row[1] or "", timestamp=parse_timestamp(row[2]))


def make_memo_id() -> str:
    """Generate a new memo ID."""
    return uuid.uuid4().hex
