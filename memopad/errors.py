"""Failure types shared by the editing surface and the widget."""


class MemoPadError(Exception):
    """Base class for memo pad failures."""


class ReadFailure(MemoPadError):
    """Raised when the store is unreachable or a query fails.

    The widget absorbs it and renders an empty projection.
    """


class WriteFailure(MemoPadError):
    """Raised when a mutation could not be committed.

    Surfaced to the editing surface so the user can retry.
    """


class MemoNotFound(WriteFailure):
    """Raised when editing a memo that no longer exists."""


class ConfigurationFailure(MemoPadError):
    """Raised when the shared storage location cannot be resolved."""
