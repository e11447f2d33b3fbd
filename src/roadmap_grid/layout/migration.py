"""Migration of node positions saved with the legacy border-offset formula.

Older boards stored x with one extra border pixel per column
(``x = 255 + col * 361``). Rows were already on base geometry. Migrated
positions use the current ``encode`` formula.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from roadmap_grid.layout.constants import (
    GRID,
    LEGACY_CELL_WIDTH,
    LEGACY_X_ORIGIN,
    GridConfig,
)
from roadmap_grid.layout.coords import GridCell, decode, encode, round_half_up
from roadmap_grid.model.records import Node


@dataclass
class PositionMigration:
    """Planned position rewrite for one node."""

    node_id: str
    title: str
    old: tuple[float, float]
    new: tuple[float, float]

    @property
    def changed(self) -> bool:
        return self.old != self.new


def decode_legacy(x: float, y: float, grid: GridConfig = GRID) -> GridCell:
    """Grid cell of a position stored with the legacy formula."""
    col = round_half_up((x - LEGACY_X_ORIGIN) / LEGACY_CELL_WIDTH)
    row = round_half_up(
        (y - grid.column_header_height - grid.node_padding) / grid.cell_height
    )
    return GridCell(row=max(0, row), col=max(0, col))


def plan_migration(
    nodes: Iterable[Node], grid: GridConfig = GRID
) -> list[PositionMigration]:
    """Compute the new position of every node; unchanged nodes are included.

    A position that already round-trips through ``decode``/``encode`` is
    current and kept. A legacy x (``255 + col * 361``) lands on the current
    grid only at legacy column 359 and every 360 columns after it; such
    nodes are read as current.
    """
    plans = []
    for node in nodes:
        old = (node.position_x, node.position_y)
        current = decode(*old, grid)
        if encode(current.row, current.col, grid) == old:
            cell = current
        else:
            cell = decode_legacy(*old, grid)
        plans.append(PositionMigration(
            node_id=node.id,
            title=node.title,
            old=old,
            new=encode(cell.row, cell.col, grid),
        ))
    return plans
