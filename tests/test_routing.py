"""Tests for dependency arrow routing."""

from roadmap_grid.layout import LaneGeometry, encode
from roadmap_grid.layout.routing import (
    assign_channels,
    compute_channel,
    compute_path,
    route_dependencies,
)
from roadmap_grid.model import Dependency, Node


def _dep(dep_id, source, target):
    return Dependency(id=dep_id, node_id=target, depends_on_node_id=source)


def _node(node_id, row, col):
    x, y = encode(row, col)
    return Node(id=node_id, roadmap_id="rm", title=node_id, position_x=x, position_y=y)


def test_single_edge_uses_channel_zero():
    edges = [_dep("e1", "a", "b")]
    assert compute_channel(edges[0], edges) == 0


def test_three_converging_edges_spread_around_center():
    edges = [_dep("e1", "s1", "t"), _dep("e2", "s2", "t"), _dep("e3", "s3", "t")]
    assert [compute_channel(e, edges) for e in edges] == [-1, 0, 1]


def test_two_converging_edges():
    edges = [_dep("e1", "s1", "t"), _dep("e2", "s2", "t")]
    assert [compute_channel(e, edges) for e in edges] == [-1, 0]


def test_channels_only_count_edges_to_same_target():
    edges = [_dep("e1", "s1", "t"), _dep("e2", "s1", "u"), _dep("e3", "s2", "t")]
    assert compute_channel(edges[1], edges) == 0
    assert compute_channel(edges[2], edges) == 0


def test_assign_channels_matches_compute_channel():
    edges = [
        _dep("e1", "s1", "t"),
        _dep("e2", "s2", "t"),
        _dep("e3", "s1", "u"),
        _dep("e4", "s3", "t"),
    ]
    channels = assign_channels(edges)
    assert channels == {e.id: compute_channel(e, edges) for e in edges}


def test_path_has_six_orthogonal_points(board):
    geometry = LaneGeometry(board.lanes)
    edges = board.dependencies
    path = compute_path(board.nodes["a"], board.nodes["b"], edges, 0, geometry)
    assert path.points == [
        (506, 232),
        (546, 232),
        (546, 232),
        (574, 232),
        (574, 232),
        (614, 232),
    ]
    for (x1, y1), (x2, y2) in zip(path.points, path.points[1:]):
        assert x1 == x2 or y1 == y2


def test_path_between_lanes(board):
    """Route y is the midpoint of both ends plus the channel offset."""
    nodes = [_node("a", 0, 0), _node("b", 1, 2), _node("c", 0, 1)]
    edges = [_dep("e1", "a", "b"), _dep("e2", "c", "b")]
    geometry = LaneGeometry(board.lanes)
    path = compute_path(nodes[0], nodes[1], edges, 0, geometry)
    start_y, end_y = 232, 592
    assert path.channel == -1
    assert path.start == (506, start_y)
    assert path.end == (974, end_y)
    assert path.points[2] == (546, 382)
    assert path.points[4] == (934, end_y)


def test_missing_endpoint_returns_none(board):
    geometry = LaneGeometry(board.lanes)
    edges = [_dep("e1", "a", "ghost")]
    assert compute_path(board.nodes["a"], None, edges, 0, geometry) is None


def test_route_dependencies_skips_dangling_edges(board):
    board.dependencies.append(_dep("dangling", "a", "ghost"))
    routes = route_dependencies(board)
    assert [r.edge.id for r in routes] == ["ab", "bc"]


def test_svg_path(board):
    routes = route_dependencies(board)
    assert routes[0].svg_path() == (
        "M 506 232 L 546 232 L 546 232 L 574 232 L 574 232 L 614 232"
    )


def test_route_below_expanded_lane(board):
    """Stored positions decode on base geometry but render in the taller lane."""
    board.lanes[0].expanded = True
    stored = (board.nodes["c"].position_x, board.nodes["c"].position_y)
    routes = {r.edge.id: r for r in route_dependencies(board)}

    ab = routes["ab"]
    assert ab.start == (506, 76 + 672 / 2)
    assert ab.end == (614, 412)

    bc = routes["bc"]
    end_y = 52 + 720 + 24 + 312 / 2
    assert bc.start == (866, 412)
    assert bc.end == (974, end_y)
    assert bc.points[2] == (906, (412 + end_y) / 2)
    assert (board.nodes["c"].position_x, board.nodes["c"].position_y) == stored


def test_route_in_compact_mode(board):
    board.lanes[0].expanded = True
    board.compact = True
    bc = {r.edge.id: r for r in route_dependencies(board)}["bc"]
    start_y = 52 + 24 + 152 / 2
    end_y = 52 + 200 + 24 + 152 / 2
    assert bc.start == (866, start_y)
    assert bc.end == (974, end_y)
    assert bc.points[2] == (906, (start_y + end_y) / 2)
    assert bc.points[4] == (934, end_y)


def test_explicit_geometry_overrides_board_mode(board):
    geometry = LaneGeometry(board.lanes, compact=True)
    ab = route_dependencies(board, geometry)[0]
    assert ab.start == (506, 152)
