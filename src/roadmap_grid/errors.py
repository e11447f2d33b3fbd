"""Exception types raised by roadmap-grid."""

from __future__ import annotations


class RoadmapError(Exception):
    """Base class for all roadmap-grid errors."""


class ValidationError(RoadmapError):
    """An edit was rejected before anything was mutated."""


class RecordDecodeError(RoadmapError, ValueError):
    """A store row could not be decoded into a typed record."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(f"{table}: {message}")
        self.table = table


class StoreError(RoadmapError):
    """The record store failed (unreachable, constraint violation, ...)."""


class PersistenceError(RoadmapError):
    """An edit could not be persisted and local state was rolled back.

    The underlying StoreError is available as ``__cause__``; the failed edit
    is kept on ``edit`` so callers can offer a retry.
    """

    def __init__(self, message: str, edit=None) -> None:
        super().__init__(message)
        self.edit = edit


class DragStateError(RoadmapError):
    """A drag event arrived in a state that does not accept it."""
