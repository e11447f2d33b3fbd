"""Kanban notepad: free-form notes grouped into columns.

The notepad has a fixed "Notepad" column (notes with no lane) followed by
one column per roadmap lane. Within a column, notes are ordered by
``order_index``, which is kept dense (0, 1, 2, ...) after every move.
"""

from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass
from typing import Iterable, Sequence

from roadmap_grid.edit.commands import Delete, GridEdit, Insert, Update
from roadmap_grid.errors import ValidationError
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import Note

NOTEPAD_COLUMN_ID = "notepad"
NOTEPAD_COLOR = "#6b7280"


@dataclass(frozen=True)
class NotepadColumn:
    """One kanban column: the Notepad itself or a roadmap lane."""

    id: str
    name: str
    color: str

    @property
    def lane_id(self) -> str | None:
        return None if self.id == NOTEPAD_COLUMN_ID else self.id


def notepad_columns(board: RoadmapBoard) -> list[NotepadColumn]:
    columns = [NotepadColumn(NOTEPAD_COLUMN_ID, "Notepad", NOTEPAD_COLOR)]
    columns.extend(NotepadColumn(lane.id, lane.name, lane.color) for lane in board.lanes)
    return columns


def _lane_id_for_column(board: RoadmapBoard, column_id: str) -> str | None:
    if column_id == NOTEPAD_COLUMN_ID:
        return None
    if board.lane_index(column_id) == -1:
        raise ValidationError(f"unknown notepad column {column_id!r}")
    return column_id


def notes_in_column(notes: Iterable[Note], lane_id: str | None) -> list[Note]:
    return sorted(
        (n for n in notes if n.lane_id == lane_id), key=lambda n: n.order_index
    )


def normalize_order(notes: Sequence[Note]) -> list[Note]:
    """Renumber ``order_index`` per lane, in list order, starting at 0.

    Notes whose index is already right are returned as-is; the others are
    replaced by updated copies.
    """
    counters: dict[str | None, int] = {}
    result = []
    for note in notes:
        next_order = counters.get(note.lane_id, 0)
        counters[note.lane_id] = next_order + 1
        if note.order_index != next_order:
            note = dataclasses.replace(note, order_index=next_order)
        result.append(note)
    return result


def move_note(
    notes: Sequence[Note],
    note_id: str,
    target_lane_id: str | None,
    before_note_id: str | None = None,
) -> list[Note]:
    """Return the note list with ``note_id`` moved into ``target_lane_id``.

    The note lands before ``before_note_id`` when given and present,
    otherwise after the last note already in the target lane, otherwise at
    the end. An unknown ``note_id`` returns the list unchanged.
    """
    dragged = next((n for n in notes if n.id == note_id), None)
    if dragged is None:
        return list(notes)

    remaining = [n for n in notes if n.id != note_id]
    moved = dataclasses.replace(dragged, lane_id=target_lane_id)

    if before_note_id:
        for i, note in enumerate(remaining):
            if note.id == before_note_id:
                remaining.insert(i, moved)
                return normalize_order(remaining)

    last_in_lane = -1
    for i, note in enumerate(remaining):
        if note.lane_id == target_lane_id:
            last_in_lane = i
    if last_in_lane >= 0:
        remaining.insert(last_in_lane + 1, moved)
    else:
        remaining.append(moved)
    return normalize_order(remaining)


def diff_notes(before: Sequence[Note], after: Sequence[Note]) -> list[Update]:
    """Updates for notes whose lane or order changed between two lists."""
    previous = {n.id: n for n in before}
    updates = []
    for note in after:
        old = previous.get(note.id)
        if old is None:
            continue
        changed = {}
        if old.lane_id != note.lane_id:
            changed["lane_id"] = note.lane_id
        if old.order_index != note.order_index:
            changed["order_index"] = note.order_index
        if changed:
            updates.append(Update.of(old, **changed))
    return updates


def move_note_edit(
    board: RoadmapBoard,
    note_id: str,
    column_id: str,
    before_note_id: str | None = None,
) -> GridEdit | None:
    """Edit moving a note to a notepad column; None when nothing changes."""
    if before_note_id == note_id:
        return None
    if not any(n.id == note_id for n in board.notes):
        raise ValidationError(f"unknown note {note_id!r}")
    lane_id = _lane_id_for_column(board, column_id)
    moved = move_note(board.notes, note_id, lane_id, before_note_id)
    updates = diff_notes(board.notes, moved)
    if not updates:
        return None
    return GridEdit(f"move note {note_id}", list(updates))


def add_note_edit(
    board: RoadmapBoard,
    column_id: str,
    title: str = "",
    description: str | None = None,
    note_id: str | None = None,
) -> GridEdit:
    """Edit appending a new note to the end of a notepad column."""
    lane_id = _lane_id_for_column(board, column_id)
    note = Note(
        id=note_id or str(uuid.uuid4()),
        roadmap_id=board.id,
        lane_id=lane_id,
        order_index=len(notes_in_column(board.notes, lane_id)),
        title=title,
        description=description,
    )
    return GridEdit(f"add note {note.id}", [Insert(note)])


def update_note_edit(
    board: RoadmapBoard,
    note_id: str,
    title: str | None = None,
    description: str | None = None,
) -> GridEdit | None:
    note = next((n for n in board.notes if n.id == note_id), None)
    if note is None:
        raise ValidationError(f"unknown note {note_id!r}")
    changed = {}
    if title is not None and title != note.title:
        changed["title"] = title
    if description is not None and description != note.description:
        changed["description"] = description
    if not changed:
        return None
    return GridEdit(f"update note {note_id}", [Update.of(note, **changed)])


def delete_note_edit(board: RoadmapBoard, note_id: str) -> GridEdit:
    """Edit deleting a note and closing the gap it leaves in its column."""
    note = next((n for n in board.notes if n.id == note_id), None)
    if note is None:
        raise ValidationError(f"unknown note {note_id!r}")
    remaining = [n for n in board.notes if n.id != note_id]
    edit = GridEdit(f"delete note {note_id}", [Delete(note)])
    for update in diff_notes(remaining, normalize_order(remaining)):
        edit.add(update)
    return edit
