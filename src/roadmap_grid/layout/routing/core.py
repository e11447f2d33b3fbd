"""Orthogonal routing of dependency arrows between grid nodes.

Each arrow leaves the source node's right edge horizontally, turns vertical
to its channel's routing Y, runs horizontally to just before the target,
turns vertical to the target's mid height and enters the target's left
edge: six waypoints, five segments.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from roadmap_grid.layout.constants import (
    CHANNEL_SPACING,
    ENTRY_DISTANCE,
    EXIT_DISTANCE,
)
from roadmap_grid.layout.coords import decode
from roadmap_grid.layout.geometry import LaneGeometry, Rect
from roadmap_grid.layout.routing.channels import assign_channels, compute_channel
from roadmap_grid.layout.routing.common import RoutedPath
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import Dependency, Node

logger = logging.getLogger(__name__)


def node_screen_rect(node: Node, geometry: LaneGeometry) -> Rect:
    """Screen rectangle of a node in the geometry's view mode."""
    cell = decode(node.position_x, node.position_y, geometry.grid)
    return geometry.node_rect(cell.row, cell.col)


def compute_path(
    source: Node | None,
    target: Node | None,
    all_edges: Sequence[Dependency],
    edge_index: int,
    geometry: LaneGeometry,
    channel: int | None = None,
    channel_spacing: float = CHANNEL_SPACING,
) -> RoutedPath | None:
    """Route the dependency ``all_edges[edge_index]`` from source to target.

    Returns None when either endpoint is missing (the edge outlived one of
    its nodes); such edges are simply not drawn. ``channel`` may be passed
    when channels were pre-computed with ``assign_channels``.
    """
    edge = all_edges[edge_index]
    if source is None or target is None:
        logger.debug(
            "skipping dependency %s: %s -> %s has a missing endpoint",
            edge.id,
            edge.source,
            edge.target,
        )
        return None

    src_rect = node_screen_rect(source, geometry)
    tgt_rect = node_screen_rect(target, geometry)

    start_x, start_y = src_rect.right, src_rect.mid_y
    end_x, end_y = tgt_rect.x, tgt_rect.mid_y

    if channel is None:
        channel = compute_channel(edge, all_edges)

    exit_x = start_x + EXIT_DISTANCE
    entry_x = end_x - ENTRY_DISTANCE
    route_y = (start_y + end_y) / 2 + channel * channel_spacing

    points = [
        (start_x, start_y),
        (exit_x, start_y),
        (exit_x, route_y),
        (entry_x, route_y),
        (entry_x, end_y),
        (end_x, end_y),
    ]
    return RoutedPath(edge=edge, points=points, channel=channel)


def route_dependencies(
    board: RoadmapBoard,
    geometry: LaneGeometry | None = None,
    nodes: Mapping[str, Node] | None = None,
) -> list[RoutedPath]:
    """Route every dependency of a board whose endpoints both exist.

    ``nodes`` overrides the board's node set (e.g. a transient preview).
    """
    if geometry is None:
        geometry = LaneGeometry(board.lanes, compact=board.compact, grid=board.grid)
    if nodes is None:
        nodes = board.nodes

    edges = board.dependencies
    channels = assign_channels(edges)
    routes: list[RoutedPath] = []
    for i, edge in enumerate(edges):
        path = compute_path(
            nodes.get(edge.source),
            nodes.get(edge.target),
            edges,
            i,
            geometry,
            channel=channels[edge.id],
        )
        if path is not None:
            routes.append(path)
    return routes
