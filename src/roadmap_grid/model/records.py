"""Typed records for roadmaps, lanes, columns, nodes, dependencies and notes.

Records are decoded from plain store rows with ``from_record`` and written
back with ``to_record``. Decoding fails with RecordDecodeError when a
required field is missing; optional fields fall back to their defaults.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Mapping, TypeVar

from roadmap_grid.errors import RecordDecodeError

ROADMAPS = "roadmaps"
NODES = "roadmap_nodes"
LANES = "roadmap_lanes"
COLUMNS = "roadmap_columns"
DEPENDENCIES = "node_dependencies"
NOTES = "notes"

R = TypeVar("R", bound="Record")


class NodeStatus(str, Enum):
    """Progress status of a roadmap node."""

    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class Record:
    """Mixin for dataclass records stored in a table."""

    TABLE: ClassVar[str] = ""
    REQUIRED: ClassVar[tuple[str, ...]] = ("id",)

    id: str

    @classmethod
    def from_record(cls: type[R], row: Mapping[str, Any]) -> R:
        """Build a record from a store row, ignoring unknown columns."""
        missing = [name for name in cls.REQUIRED if row.get(name) is None]
        if missing:
            raise RecordDecodeError(
                cls.TABLE,
                f"missing required field(s) {', '.join(missing)} "
                f"in record {row.get('id', '?')!r}",
            )
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in row.items() if k in known}
        try:
            values = cls._coerce(values)
        except RecordDecodeError:
            raise
        except (TypeError, ValueError) as exc:
            raise RecordDecodeError(
                cls.TABLE, f"bad value in record {row.get('id')!r}: {exc}"
            ) from exc
        return cls(**values)

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        return values

    def to_record(self) -> dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return data


@dataclass
class Roadmap(Record):
    """A roadmap; the parent of every other record."""

    TABLE: ClassVar[str] = ROADMAPS
    REQUIRED: ClassVar[tuple[str, ...]] = ("id", "title")

    id: str
    title: str
    description: str | None = None
    pinned_column_id: str | None = None


@dataclass
class Lane(Record):
    """A workstream: one logical row of the grid."""

    TABLE: ClassVar[str] = LANES
    REQUIRED: ClassVar[tuple[str, ...]] = ("id", "roadmap_id", "name", "color")

    id: str
    roadmap_id: str
    name: str
    color: str
    order_index: int = 0
    expanded: bool = False
    description: str | None = None

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        values["order_index"] = int(values.get("order_index") or 0)
        values["expanded"] = bool(values.get("expanded") or False)
        return values


@dataclass
class Column(Record):
    """A time period: one logical column of the grid. ``name`` may be empty."""

    TABLE: ClassVar[str] = COLUMNS
    REQUIRED: ClassVar[tuple[str, ...]] = ("id", "roadmap_id")

    id: str
    roadmap_id: str
    name: str = ""
    order_index: int = 0

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        values["name"] = values.get("name") or ""
        values["order_index"] = int(values.get("order_index") or 0)
        return values


@dataclass
class Node(Record):
    """A planning item placed in one grid cell.

    ``position_x``/``position_y`` are stored with base geometry; decode them
    with ``roadmap_grid.layout.coords.decode`` to get the logical cell.
    """

    TABLE: ClassVar[str] = NODES
    REQUIRED: ClassVar[tuple[str, ...]] = (
        "id",
        "roadmap_id",
        "title",
        "position_x",
        "position_y",
    )

    id: str
    roadmap_id: str
    title: str
    position_x: float
    position_y: float
    status: NodeStatus = NodeStatus.PLANNED
    description: str | None = None

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        status = values.get("status") or NodeStatus.PLANNED.value
        try:
            values["status"] = NodeStatus(status)
        except ValueError:
            raise RecordDecodeError(
                cls.TABLE, f"unknown status {status!r} in record {values['id']!r}"
            ) from None
        values["position_x"] = float(values["position_x"])
        values["position_y"] = float(values["position_y"])
        return values


@dataclass
class Dependency(Record):
    """A must-complete-before edge.

    ``depends_on_node_id`` must be completed before ``node_id``; arrows are
    drawn from the former (source) to the latter (target).
    """

    TABLE: ClassVar[str] = DEPENDENCIES
    REQUIRED: ClassVar[tuple[str, ...]] = ("id", "node_id", "depends_on_node_id")

    id: str
    node_id: str
    depends_on_node_id: str

    @property
    def source(self) -> str:
        return self.depends_on_node_id

    @property
    def target(self) -> str:
        return self.node_id


@dataclass
class Note(Record):
    """A kanban notepad card. ``lane_id`` None means the Notepad column."""

    TABLE: ClassVar[str] = NOTES
    REQUIRED: ClassVar[tuple[str, ...]] = ("id", "roadmap_id")

    id: str
    roadmap_id: str
    lane_id: str | None = None
    order_index: int = 0
    title: str = ""
    description: str | None = None

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        values["title"] = values.get("title") or ""
        values["order_index"] = int(values.get("order_index") or 0)
        return values


RECORD_TYPES: dict[str, type[Record]] = {
    cls.TABLE: cls for cls in (Roadmap, Lane, Column, Node, Dependency, Note)
}
