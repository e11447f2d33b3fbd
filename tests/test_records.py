"""Tests for typed record decoding and the in-memory board."""

import pytest

from roadmap_grid.errors import RecordDecodeError
from roadmap_grid.model import Dependency, Lane, Node, NodeStatus, Note


def test_node_from_record_coerces_values():
    node = Node.from_record({
        "id": "n",
        "roadmap_id": "rm",
        "title": "Title",
        "position_x": 254,
        "position_y": "76",
        "status": "in-progress",
        "created_at": "2025-01-01",
    })
    assert node.position_x == 254.0
    assert node.position_y == 76.0
    assert node.status is NodeStatus.IN_PROGRESS


def test_node_defaults_to_planned():
    node = Node.from_record({
        "id": "n", "roadmap_id": "rm", "title": "t", "position_x": 0, "position_y": 0,
    })
    assert node.status is NodeStatus.PLANNED


def test_missing_field_raises():
    with pytest.raises(RecordDecodeError, match="position_x"):
        Node.from_record({"id": "n", "roadmap_id": "rm", "title": "t", "position_y": 0})


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        Lane.from_record({"id": "l"})


def test_unknown_status_raises():
    with pytest.raises(RecordDecodeError, match="unknown status"):
        Node.from_record({
            "id": "n", "roadmap_id": "rm", "title": "t",
            "position_x": 0, "position_y": 0, "status": "done",
        })


def test_bad_number_raises():
    with pytest.raises(RecordDecodeError) as excinfo:
        Node.from_record({
            "id": "n", "roadmap_id": "rm", "title": "t",
            "position_x": "left", "position_y": 0,
        })
    assert excinfo.value.table == "roadmap_nodes"


def test_to_record_writes_enum_values():
    node = Node(id="n", roadmap_id="rm", title="t", position_x=1, position_y=2,
                status=NodeStatus.BLOCKED)
    assert node.to_record()["status"] == "blocked"


def test_note_defaults():
    note = Note.from_record({"id": "x", "roadmap_id": "rm", "title": None})
    assert note.lane_id is None
    assert note.order_index == 0
    assert note.title == ""


def test_dependency_direction():
    dep = Dependency(id="d", node_id="later", depends_on_node_id="first")
    assert dep.source == "first"
    assert dep.target == "later"


def test_board_lookups(board):
    assert board.lane_index("lane2") == 2
    assert board.column_index("missing") == -1
    assert board.node_cell("c") == (1, 2)
    assert [n.id for n in board.nodes_in_cell(0, 1)] == ["b"]
    assert board.lane_for_node("d").id == "lane2"


def test_find_dependency_either_direction(board):
    assert board.find_dependency("a", "b").id == "ab"
    assert board.find_dependency("b", "a").id == "ab"
    assert board.find_dependency("a", "c") is None


def test_dependency_graph_skips_dangling_edges(board):
    board.dependencies.append(Dependency(id="x", node_id="ghost", depends_on_node_id="a"))
    graph = board.dependency_graph()
    assert set(graph.edges) == {("a", "b"), ("b", "c")}
    assert "ghost" not in graph
