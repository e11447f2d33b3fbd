"""Conversion between stored pixel positions and logical grid cells.

Stored node positions are always interpreted with base geometry: the
collapsed, non-compact cell height. Lane expansion and compact mode only
change where a node is drawn (see ``geometry``), never which cell a stored
position belongs to, so a node keeps its logical row whatever view mode was
active when it was saved or read.
"""

from __future__ import annotations

__all__ = ["GridCell", "decode", "encode", "round_half_up", "snap_to_grid"]

import math
from typing import NamedTuple

from roadmap_grid.layout.constants import GRID, GridConfig


class GridCell(NamedTuple):
    """A logical (row, col) grid cell. Row is the lane index."""

    row: int
    col: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    Python's ``round`` rounds halves to even, which would send a position
    exactly between two cells to alternating neighbours.
    """
    return math.floor(value + 0.5)


def decode(x: float, y: float, grid: GridConfig = GRID) -> GridCell:
    """Return the grid cell a stored pixel position belongs to.

    Negative and out of range input clamps to row/col 0.
    """
    col = round_half_up(
        (x - grid.lane_header_width - grid.centering_offset) / grid.cell_width
    )
    row = round_half_up(
        (y - grid.column_header_height - grid.node_padding) / grid.cell_height
    )
    return GridCell(row=max(0, row), col=max(0, col))


def encode(row: int, col: int, grid: GridConfig = GRID) -> tuple[float, float]:
    """Return the stored pixel position of a node placed at (row, col)."""
    x = grid.lane_header_width + col * grid.cell_width + grid.centering_offset
    y = grid.column_header_height + row * grid.cell_height + grid.node_padding
    return (x, y)


def snap_to_grid(x: float, y: float, grid: GridConfig = GRID) -> tuple[float, float]:
    """Snap an arbitrary pixel position to the canonical position of its cell."""
    cell = decode(x, y, grid)
    return encode(cell.row, cell.col, grid)
