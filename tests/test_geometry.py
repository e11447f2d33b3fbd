"""Tests for view-mode aware lane geometry."""

import dataclasses

from roadmap_grid.layout import LaneGeometry, Rect
from roadmap_grid.layout.constants import GridConfig


def test_base_lane_offsets(board):
    geometry = LaneGeometry(board.lanes)
    assert [geometry.lane_y_offset(i) for i in range(4)] == [52, 412, 772, 1132]


def test_expanded_lane_doubles_height(board):
    lanes = list(board.lanes)
    lanes[0] = dataclasses.replace(lanes[0], expanded=True)
    geometry = LaneGeometry(lanes)
    assert geometry.lane_height(lanes[0]) == 720
    assert geometry.lane_y_offset(1) == 52 + 720
    assert geometry.render_position(1, 0) == (254, 52 + 720 + 24)


def test_compact_mode_ignores_expansion(board):
    lanes = [dataclasses.replace(lane, expanded=True) for lane in board.lanes]
    geometry = LaneGeometry(lanes, compact=True)
    assert geometry.lane_y_offset(1) == 252
    assert geometry.node_rect(1, 0) == Rect(254, 276, 252, 152)


def test_node_rect_normal_mode(board):
    geometry = LaneGeometry(board.lanes)
    rect = geometry.node_rect(0, 1)
    assert rect == Rect(614, 76, 252, 312)
    assert rect.right == 866
    assert rect.mid_y == 232


def test_rows_past_last_lane_clamp(board):
    geometry = LaneGeometry(board.lanes)
    assert geometry.node_rect(9, 0) == geometry.node_rect(2, 0)


def test_no_lanes_clamps_to_row_zero():
    geometry = LaneGeometry([])
    assert geometry.node_rect(3, 0).y == 76
    assert geometry.lane_at(0) is None


def test_canvas_size(board):
    geometry = LaneGeometry(board.lanes)
    assert geometry.canvas_size(4) == (200 + 4 * 360 + 48, 52 + 3 * 360 + 48)


def test_pinned_scroll(board):
    geometry = LaneGeometry(board.lanes)
    assert geometry.pinned_scroll_x(0) == 0
    assert geometry.pinned_scroll_x(3) == 1080


def test_card_height_follows_lane_height(board):
    grid = GridConfig(node_padding=10, compact_lane_height=100)
    expanded = dataclasses.replace(board.lanes[0], expanded=True)
    assert LaneGeometry([expanded], grid=grid).node_height(expanded) == 700
    assert LaneGeometry([expanded], compact=True, grid=grid).node_height(expanded) == 80
