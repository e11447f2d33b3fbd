"""Grid layout: coordinates, lane geometry and dependency routing."""

from roadmap_grid.layout.constants import GRID, GridConfig
from roadmap_grid.layout.coords import GridCell, decode, encode, snap_to_grid
from roadmap_grid.layout.geometry import LaneGeometry, Rect

__all__ = [
    "GRID",
    "GridCell",
    "GridConfig",
    "LaneGeometry",
    "Rect",
    "decode",
    "encode",
    "snap_to_grid",
]
