"""SVG generation for roadmap boards using drawsvg."""

from __future__ import annotations

import textwrap

import drawsvg as draw

from roadmap_grid.layout.constants import DEFAULT_LANE_COLOR
from roadmap_grid.layout.geometry import LaneGeometry
from roadmap_grid.layout.routing import RoutedPath, route_dependencies
from roadmap_grid.layout.routing.core import node_screen_rect
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import Node, NodeStatus
from roadmap_grid.render.constants import (
    ARROW_MARKER_SCALE,
    BORDER_WIDTH,
    BORDER_WIDTH_IN_PROGRESS,
    DASH_PATTERN,
    GRID_STROKE_WIDTH,
    HEADER_TEXT_INSET,
    LANE_BAND_OPACITY,
    LANE_STRIPE_WIDTH,
    LINE_HEIGHT_RATIO,
    NODE_CORNER_RADIUS,
    NODE_TEXT_INSET,
    NODE_TINT,
    NODE_TITLE_CHARS,
    NODE_TITLE_MAX_LINES,
)
from roadmap_grid.render.style import Theme


def _rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def blend(color: str, base: str = "#ffffff", amount: float = NODE_TINT) -> str:
    """Mix ``amount`` of ``color`` into ``base``; both are #rgb or #rrggbb."""
    fg = _rgb(color)
    bg = _rgb(base)
    mixed = (round(b + (f - b) * amount) for f, b in zip(fg, bg))
    return "#" + "".join(f"{c:02x}" for c in mixed)


def render_svg(
    board: RoadmapBoard,
    theme: Theme,
    geometry: LaneGeometry | None = None,
) -> str:
    """Render a roadmap board to an SVG string."""
    if geometry is None:
        geometry = LaneGeometry(board.lanes, compact=board.compact, grid=board.grid)

    width, height = geometry.canvas_size(len(board.columns))
    d = draw.Drawing(width, height)

    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    _render_lanes(d, board, geometry, theme)
    _render_column_headers(d, board, geometry, theme)

    # Arrows behind the node cards
    routes = route_dependencies(board, geometry)
    _render_arrows(d, routes, theme)

    for node in board.nodes.values():
        _render_node(d, board, node, geometry, theme)

    return d.as_svg()


def _render_column_headers(
    d: draw.Drawing,
    board: RoadmapBoard,
    geometry: LaneGeometry,
    theme: Theme,
) -> None:
    grid = geometry.grid
    pinned = board.roadmap.pinned_column_id
    for i, column in enumerate(board.columns):
        x = grid.lane_header_width + i * grid.cell_width
        fill = theme.header_fill
        if column.id == pinned:
            fill = theme.pinned_header_fill or theme.header_fill
        d.append(draw.Rectangle(
            x, 0,
            grid.cell_width, grid.column_header_height,
            fill=fill,
            stroke=theme.grid_stroke,
            stroke_width=GRID_STROKE_WIDTH,
            data_column_id=column.id,
        ))
        if column.name:
            d.append(draw.Text(
                column.name,
                theme.header_font_size,
                x + HEADER_TEXT_INSET, grid.column_header_height / 2,
                fill=theme.header_text_color,
                font_family=theme.font_family,
                font_weight="bold" if column.id == pinned else "normal",
                dominant_baseline="central",
            ))


def _render_lanes(
    d: draw.Drawing,
    board: RoadmapBoard,
    geometry: LaneGeometry,
    theme: Theme,
) -> None:
    """Lane headers, the lane colour band and the cell borders of each lane."""
    grid = geometry.grid
    columns = len(board.columns)
    for row, lane in enumerate(board.lanes):
        y = geometry.lane_y_offset(row)
        h = geometry.lane_height(lane)

        d.append(draw.Rectangle(
            0, y,
            grid.lane_header_width, h,
            fill=theme.header_fill,
            stroke=theme.grid_stroke,
            stroke_width=GRID_STROKE_WIDTH,
            data_lane_id=lane.id,
        ))
        d.append(draw.Rectangle(0, y, LANE_STRIPE_WIDTH, h, fill=lane.color))
        d.append(draw.Text(
            lane.name,
            theme.lane_font_size,
            LANE_STRIPE_WIDTH + HEADER_TEXT_INSET, y + HEADER_TEXT_INSET * 2,
            fill=theme.lane_header_text_color,
            font_family=theme.font_family,
            font_weight="bold",
        ))

        if columns:
            d.append(draw.Rectangle(
                grid.lane_header_width, y,
                columns * grid.cell_width, h,
                fill=lane.color,
                fill_opacity=LANE_BAND_OPACITY,
            ))
        for col in range(columns):
            d.append(draw.Rectangle(
                grid.lane_header_width + col * grid.cell_width, y,
                grid.cell_width, h,
                fill="none",
                stroke=theme.grid_stroke,
                stroke_width=GRID_STROKE_WIDTH,
            ))


def _border_style(status: NodeStatus, lane_color: str, theme: Theme) -> dict:
    if status is NodeStatus.IN_PROGRESS:
        return {"stroke": lane_color, "stroke_width": BORDER_WIDTH_IN_PROGRESS}
    if status is NodeStatus.COMPLETED:
        return {"stroke": theme.completed_stroke, "stroke_width": BORDER_WIDTH}
    if status is NodeStatus.BLOCKED:
        return {
            "stroke": theme.blocked_stroke,
            "stroke_width": BORDER_WIDTH,
            "stroke_dasharray": DASH_PATTERN,
        }
    return {
        "stroke": lane_color,
        "stroke_width": BORDER_WIDTH,
        "stroke_dasharray": DASH_PATTERN,
    }


def _title_lines(title: str) -> list[str]:
    lines = textwrap.wrap(title, NODE_TITLE_CHARS) or [""]
    if len(lines) > NODE_TITLE_MAX_LINES:
        lines = lines[:NODE_TITLE_MAX_LINES]
        lines[-1] = lines[-1][: NODE_TITLE_CHARS - 1].rstrip() + "…"
    return lines


def _render_node(
    d: draw.Drawing,
    board: RoadmapBoard,
    node: Node,
    geometry: LaneGeometry,
    theme: Theme,
) -> None:
    rect = node_screen_rect(node, geometry)
    lane = board.lane_for_node(node)
    lane_color = lane.color if lane is not None else DEFAULT_LANE_COLOR

    d.append(draw.Rectangle(
        rect.x, rect.y,
        rect.width, rect.height,
        rx=NODE_CORNER_RADIUS, ry=NODE_CORNER_RADIUS,
        fill=blend(lane_color, theme.node_tint_base),
        data_node_id=node.id,
        data_status=node.status.value,
        **_border_style(node.status, lane_color, theme),
    ))

    line_height = theme.node_font_size * LINE_HEIGHT_RATIO
    y = rect.y + NODE_TEXT_INSET + theme.node_font_size
    for line in _title_lines(node.title):
        d.append(draw.Text(
            line,
            theme.node_font_size,
            rect.x + NODE_TEXT_INSET, y,
            fill=theme.node_text_color,
            font_family=theme.font_family,
            font_weight="bold",
        ))
        y += line_height


def _render_arrows(
    d: draw.Drawing,
    routes: list[RoutedPath],
    theme: Theme,
) -> None:
    if not routes:
        return

    arrow = draw.Marker(-0.1, -0.5, 0.9, 0.5, scale=ARROW_MARKER_SCALE, orient="auto")
    arrow.append(draw.Lines(-0.1, 0.5, -0.1, -0.5, 0.9, 0, fill=theme.arrow_color, close=True))

    for route in routes:
        d.append(draw.Path(
            d=route.svg_path(),
            fill="none",
            stroke=theme.arrow_color,
            stroke_width=theme.arrow_width,
            stroke_linejoin="round",
            marker_end=arrow,
            data_dependency_id=route.edge.id,
        ))
