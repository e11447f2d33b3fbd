"""Shared fixtures: a small three-lane board and a store holding it."""

import pytest

from roadmap_grid.layout.coords import encode
from roadmap_grid.model import (
    Column,
    Dependency,
    Lane,
    Node,
    NodeStatus,
    Note,
    Roadmap,
    RoadmapBoard,
)
from roadmap_grid.model.records import RECORD_TYPES
from roadmap_grid.store import MemoryRecordStore

LANE_COLORS = ["#3b82f6", "#10b981", "#f59e0b"]


def _node(node_id, row, col, status=NodeStatus.PLANNED):
    x, y = encode(row, col)
    return Node(
        id=node_id,
        roadmap_id="rm",
        title=f"Node {node_id}",
        position_x=x,
        position_y=y,
        status=status,
    )


@pytest.fixture
def board():
    """Lanes lane0..lane2, columns col0..col3 and nodes a..d.

    a(0,0) -> b(0,1) -> c(1,2); d(2,3) stands alone.
    """
    lanes = [
        Lane(id=f"lane{i}", roadmap_id="rm", name=f"Lane {i}", color=color, order_index=i)
        for i, color in enumerate(LANE_COLORS)
    ]
    columns = [
        Column(id=f"col{i}", roadmap_id="rm", name=f"C{i}", order_index=i)
        for i in range(4)
    ]
    nodes = [
        _node("a", 0, 0, NodeStatus.COMPLETED),
        _node("b", 0, 1, NodeStatus.IN_PROGRESS),
        _node("c", 1, 2),
        _node("d", 2, 3, NodeStatus.BLOCKED),
    ]
    dependencies = [
        Dependency(id="ab", node_id="b", depends_on_node_id="a"),
        Dependency(id="bc", node_id="c", depends_on_node_id="b"),
    ]
    notes = [
        Note(id="n1", roadmap_id="rm", lane_id=None, order_index=0, title="one"),
        Note(id="n2", roadmap_id="rm", lane_id=None, order_index=1, title="two"),
        Note(id="n3", roadmap_id="rm", lane_id="lane0", order_index=0, title="three"),
    ]
    return RoadmapBoard(
        roadmap=Roadmap(id="rm", title="Test roadmap"),
        lanes=lanes,
        columns=columns,
        nodes={n.id: n for n in nodes},
        dependencies=dependencies,
        notes=notes,
    )


@pytest.fixture
def tables(board):
    """The fixture board as plain store rows."""
    rows = {name: [] for name in RECORD_TYPES}
    rows["roadmaps"].append(board.roadmap.to_record())
    for record in [
        *board.lanes,
        *board.columns,
        *board.nodes.values(),
        *board.dependencies,
        *board.notes,
    ]:
        rows[record.TABLE].append(record.to_record())
    return rows


@pytest.fixture
def store(tables):
    return MemoryRecordStore(tables)
