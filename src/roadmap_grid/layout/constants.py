"""Layout constants used across layout, edit and store modules.

Grid dimensions live on a frozen GridConfig so alternative grids can be
passed explicitly; ``GRID`` is the process-wide default and is never
mutated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GridConfig:
    """Pixel dimensions of the roadmap grid (base geometry).

    Node cards have no fixed height: a card fills its lane minus
    ``node_padding`` above and below (see ``LaneGeometry.node_height``).
    """

    cell_width: float = 360.0
    cell_height: float = 360.0
    node_width: float = 252.0
    lane_header_width: float = 200.0
    column_header_height: float = 52.0
    node_padding: float = 24.0
    compact_lane_height: float = 200.0

    @property
    def centering_offset(self) -> float:
        """Horizontal inset that centres a node card in its cell."""
        return (self.cell_width - self.node_width) / 2


GRID = GridConfig()
"""Default grid used for every stored position."""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_MARGIN: float = 48.0
"""Trailing margin added right of the last column and below the last lane."""

# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------
EXIT_DISTANCE: float = 40.0
"""Horizontal run out of the source node before the first turn."""

ENTRY_DISTANCE: float = 40.0
"""Horizontal run into the target node after the last turn."""

CHANNEL_SPACING: float = 30.0
"""Vertical distance between adjacent routing channels."""

# ---------------------------------------------------------------------------
# Legacy positions (border-offset formula used before border-collapse)
# ---------------------------------------------------------------------------
LEGACY_X_ORIGIN: float = 255.0
"""x of column 0 under the legacy formula (200 + 54 + 1 border pixel)."""

LEGACY_CELL_WIDTH: float = 361.0
"""Effective legacy cell width (cell plus one border pixel)."""

# ---------------------------------------------------------------------------
# Seeds
# ---------------------------------------------------------------------------
LANE_COLORS: tuple[str, ...] = (
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#84cc16",
)
"""Palette cycled through when lanes are added."""

DEFAULT_LANES: tuple[tuple[str, str], ...] = (
    ("Core Features", "#3b82f6"),
    ("Infrastructure", "#10b981"),
    ("User Experience", "#f59e0b"),
)
"""(name, color) of the lanes seeded into an empty roadmap."""

DEFAULT_COLUMNS: tuple[str, ...] = (
    "Q1 2025",
    "",
    "",
    "Q2 2025",
    "",
    "",
    "Q3 2025",
    "",
)
"""Column labels seeded into an empty roadmap; most are unlabelled."""

DEFAULT_LANE_COLOR: str = "#64748b"
"""Colour used for nodes whose row has no lane."""
