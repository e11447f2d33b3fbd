"""In-memory state of one roadmap."""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx

from roadmap_grid.layout.constants import GRID, GridConfig
from roadmap_grid.layout.coords import GridCell, decode
from roadmap_grid.model.records import (
    COLUMNS,
    DEPENDENCIES,
    LANES,
    NODES,
    NOTES,
    ROADMAPS,
    Column,
    Dependency,
    Lane,
    Node,
    Note,
    Record,
    Roadmap,
)


@dataclass
class RoadmapBoard:
    """Lanes, columns, nodes, dependencies and notes of one roadmap.

    Lanes, columns and notes are kept in display order; ``order_index`` on
    each record mirrors its position. ``compact`` is view state and is never
    persisted.
    """

    roadmap: Roadmap
    lanes: list[Lane] = field(default_factory=list)
    columns: list[Column] = field(default_factory=list)
    nodes: dict[str, Node] = field(default_factory=dict)
    dependencies: list[Dependency] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    compact: bool = False
    grid: GridConfig = GRID

    @property
    def id(self) -> str:
        return self.roadmap.id

    def lane_index(self, lane_id: str) -> int:
        """Return the display index of a lane, or -1."""
        for i, lane in enumerate(self.lanes):
            if lane.id == lane_id:
                return i
        return -1

    def column_index(self, column_id: str) -> int:
        """Return the display index of a column, or -1."""
        for i, column in enumerate(self.columns):
            if column.id == column_id:
                return i
        return -1

    def node_cell(self, node: Node | str) -> GridCell:
        """Logical cell of a node, decoded from its stored position."""
        if isinstance(node, str):
            node = self.nodes[node]
        return decode(node.position_x, node.position_y, self.grid)

    def nodes_in_cell(self, row: int, col: int) -> list[Node]:
        return [n for n in self.nodes.values() if self.node_cell(n) == (row, col)]

    def lane_for_node(self, node: Node | str) -> Lane | None:
        """Lane a node is drawn in; rows past the last lane use the last lane."""
        if not self.lanes:
            return None
        row = self.node_cell(node).row
        return self.lanes[min(row, len(self.lanes) - 1)]

    def find_dependency(self, source_id: str, target_id: str) -> Dependency | None:
        """Return the edge between two nodes in either direction, if any."""
        for dep in self.dependencies:
            if {dep.source, dep.target} == {source_id, target_id}:
                return dep
        return None

    def dependency_graph(self) -> nx.DiGraph:
        """Directed graph from depended-upon node to dependent node.

        Edges that reference nodes missing from the board are left out.
        """
        G = nx.DiGraph()
        G.add_nodes_from(self.nodes)
        for dep in self.dependencies:
            if dep.source in self.nodes and dep.target in self.nodes:
                G.add_edge(dep.source, dep.target)
        return G

    # Record access used by GridEdit.apply

    def get_record(self, table: str, record_id: str) -> Record | None:
        if table == ROADMAPS:
            return self.roadmap if self.roadmap.id == record_id else None
        if table == NODES:
            return self.nodes.get(record_id)
        for record in self._table(table):
            if record.id == record_id:
                return record
        return None

    def add_record(self, record: Record, index: int | None = None) -> None:
        """Add a record; ``index`` restores its position in insertion order."""
        table = record.TABLE
        if table == NODES:
            if index is None or index >= len(self.nodes):
                self.nodes[record.id] = record
            else:
                items = list(self.nodes.items())
                items.insert(index, (record.id, record))
                self.nodes = dict(items)
        elif table in (LANES, COLUMNS, NOTES):
            self._table(table).append(record)
            self.resort(table)
        elif table == DEPENDENCIES:
            if index is None:
                self.dependencies.append(record)
            else:
                self.dependencies.insert(index, record)
        else:
            raise ValueError(f"cannot add records to {table!r}")

    def remove_record(self, table: str, record_id: str) -> Record | None:
        if table == NODES:
            return self.nodes.pop(record_id, None)
        items = self._table(table)
        for i, record in enumerate(items):
            if record.id == record_id:
                return items.pop(i)
        return None

    def resort(self, table: str) -> None:
        """Restore display order of an ordered table after order_index edits."""
        if table in (LANES, COLUMNS):
            self._table(table).sort(key=lambda r: r.order_index)
        elif table == NOTES:
            self.notes.sort(key=lambda n: (n.lane_id or "", n.order_index))

    def _table(self, table: str) -> list:
        if table == LANES:
            return self.lanes
        if table == COLUMNS:
            return self.columns
        if table == DEPENDENCIES:
            return self.dependencies
        if table == NOTES:
            return self.notes
        raise ValueError(f"unknown table {table!r}")
