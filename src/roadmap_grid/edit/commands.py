"""Edits as forward patches with computable inverses.

A GridEdit is an ordered list of changes (Insert, Update, Delete) against
the board's tables. Applying the edit mutates the in-memory board;
``inverse()`` returns the patch that undoes it, and each change can
``persist()`` itself to a record store.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import Record

if TYPE_CHECKING:
    from roadmap_grid.store.base import RecordStore


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class Insert:
    """Add a record. ``index`` pins the position in an ordered table."""

    record: Record
    index: int | None = None

    @property
    def table(self) -> str:
        return self.record.TABLE

    def apply(self, board: RoadmapBoard) -> None:
        board.add_record(dataclasses.replace(self.record), index=self.index)

    def inverse(self) -> Delete:
        return Delete(self.record, index=self.index)

    async def persist(self, store: RecordStore) -> None:
        await store.insert(self.table, self.record.to_record())


@dataclass
class Delete:
    """Remove a record, remembering it (and its position) for the inverse."""

    record: Record
    index: int | None = None

    @property
    def table(self) -> str:
        return self.record.TABLE

    def apply(self, board: RoadmapBoard) -> None:
        board.remove_record(self.table, self.record.id)

    def inverse(self) -> Insert:
        return Insert(self.record, index=self.index)

    async def persist(self, store: RecordStore) -> None:
        await store.delete(self.table, self.record.id)


@dataclass
class Update:
    """Change some fields of one record from ``before`` to ``after``."""

    table: str
    record_id: str
    before: dict[str, Any]
    after: dict[str, Any]

    @classmethod
    def of(cls, record: Record, **after: Any) -> Update:
        before = {name: getattr(record, name) for name in after}
        return cls(record.TABLE, record.id, before, after)

    def apply(self, board: RoadmapBoard) -> None:
        record = board.get_record(self.table, self.record_id)
        if record is None:
            return
        for name, value in self.after.items():
            setattr(record, name, value)
        if "order_index" in self.after or "lane_id" in self.after:
            board.resort(self.table)

    def inverse(self) -> Update:
        return Update(self.table, self.record_id, self.after, self.before)

    async def persist(self, store: RecordStore) -> None:
        fields = {name: _plain(value) for name, value in self.after.items()}
        await store.update(self.table, self.record_id, fields)


Change = Union[Insert, Update, Delete]


@dataclass
class GridEdit:
    """A labelled, ordered patch against a RoadmapBoard."""

    label: str
    changes: list[Change] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def add(self, change: Change) -> None:
        self.changes.append(change)

    def apply(self, board: RoadmapBoard) -> None:
        for change in self.changes:
            change.apply(board)

    def inverse(self) -> GridEdit:
        return GridEdit(
            label=f"revert {self.label}",
            changes=[change.inverse() for change in reversed(self.changes)],
        )

    def updates_for(self, table: str) -> list[Update]:
        return [c for c in self.changes if isinstance(c, Update) and c.table == table]
