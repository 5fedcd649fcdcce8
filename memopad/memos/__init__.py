"""Memo persistence — model and shared-file store."""

from memopad.memos.models import Memo, make_memo_id
from memopad.memos.store import MemoStore

__all__ = [
    "Memo",
    "MemoStore",
    "make_memo_id",
]
