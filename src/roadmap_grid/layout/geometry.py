"""Lane geometry for rendering (view-mode aware Y positioning).

Rows are rendered with context-dependent heights: compact mode shrinks every
lane, and in normal mode an expanded lane is twice as tall. These heights
only affect display positions; stored positions are always decoded with
base geometry by ``coords``.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from typing import TYPE_CHECKING, Sequence

from roadmap_grid.layout.constants import CANVAS_MARGIN, GRID, GridConfig

if TYPE_CHECKING:
    from roadmap_grid.model.records import Lane


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in screen pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2


class LaneGeometry:
    """Cumulative lane heights and offsets for one render pass.

    Built from the ordered lane list and the global compact flag; the
    prefix sums are computed once, so rebuild the geometry whenever a lane
    is added, removed, reordered, expanded or collapsed.
    """

    def __init__(
        self,
        lanes: Sequence[Lane],
        compact: bool = False,
        grid: GridConfig = GRID,
    ) -> None:
        self.lanes = list(lanes)
        self.compact = compact
        self.grid = grid
        heights = [self.lane_height(lane) for lane in self.lanes]
        self._offsets = [0.0, *accumulate(heights)]

    def lane_height(self, lane: Lane | None) -> float:
        """Rendered height of a lane in the current view mode."""
        if self.compact:
            return self.grid.compact_lane_height
        if lane is not None and lane.expanded:
            return self.grid.cell_height * 2
        return self.grid.cell_height

    def lane_y_offset(self, row: int) -> float:
        """Top edge of lane ``row``.

        ``row`` must be within ``0..len(lanes)``; use ``clamp_row`` first
        for rows decoded from stored positions.
        """
        return self.grid.column_header_height + self._offsets[row]

    def clamp_row(self, row: int) -> int:
        """Clamp a decoded row to the last valid lane index."""
        return max(0, min(row, len(self.lanes) - 1))

    def lane_at(self, row: int) -> Lane | None:
        if 0 <= row < len(self.lanes):
            return self.lanes[row]
        return None

    def node_height(self, lane: Lane | None) -> float:
        """Height of a node card drawn in ``lane``."""
        return self.lane_height(lane) - self.grid.node_padding * 2

    def render_position(self, row: int, col: int) -> tuple[float, float]:
        """Screen position of a node at (row, col) in the current view mode."""
        x = (
            self.grid.lane_header_width
            + col * self.grid.cell_width
            + self.grid.centering_offset
        )
        y = self.lane_y_offset(row) + self.grid.node_padding
        return (x, y)

    def node_rect(self, row: int, col: int) -> Rect:
        """Screen rectangle of a node at (row, col); ``row`` is clamped."""
        row = self.clamp_row(row)
        x, y = self.render_position(row, col)
        return Rect(x, y, self.grid.node_width, self.node_height(self.lane_at(row)))

    def canvas_size(self, column_count: int) -> tuple[float, float]:
        """Total (width, height) of the rendered grid."""
        width = (
            self.grid.lane_header_width
            + column_count * self.grid.cell_width
            + CANVAS_MARGIN
        )
        height = self.lane_y_offset(len(self.lanes)) + CANVAS_MARGIN
        return (width, height)

    def pinned_scroll_x(self, column_index: int) -> float:
        """Horizontal scroll offset showing ``column_index`` as the first column."""
        return column_index * self.grid.cell_width
