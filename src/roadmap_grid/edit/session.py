"""Optimistic edit session: apply locally, persist, roll back on failure."""

from __future__ import annotations

import logging

from roadmap_grid.edit.commands import GridEdit
from roadmap_grid.errors import PersistenceError, StoreError
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.store.base import RecordStore

logger = logging.getLogger(__name__)


class EditSession:
    """Runs GridEdits against a board and the store that backs it.

    ``execute`` applies the edit's forward patch to the board immediately
    so callers can render the result, then awaits the store writes. If the
    store fails, the inverse patch restores the board to its pre-edit state
    and PersistenceError is raised. There is no automatic retry: callers
    may execute the same edit again (``PersistenceError.edit``) or reload
    the board from the store.
    """

    def __init__(self, board: RoadmapBoard, store: RecordStore) -> None:
        self.board = board
        self.store = store

    async def execute(self, edit: GridEdit | None) -> GridEdit | None:
        """Apply and persist ``edit``. None or an empty edit is a no-op."""
        if not edit:
            return None

        edit.apply(self.board)

        written = 0
        try:
            for change in edit.changes:
                await change.persist(self.store)
                written += 1
        except StoreError as exc:
            edit.inverse().apply(self.board)
            logger.warning(
                "%s failed after %d of %d writes, local state rolled back: %s",
                edit.label,
                written,
                len(edit),
                exc,
            )
            raise PersistenceError(f"could not save {edit.label}: {exc}", edit=edit) from exc

        logger.debug("%s saved (%d writes)", edit.label, written)
        return edit
