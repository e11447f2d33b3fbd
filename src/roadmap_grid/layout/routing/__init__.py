"""Dependency arrow routing.

Public API:
- compute_path: Route one dependency edge
- route_dependencies: Route every renderable edge of a board
- compute_channel / assign_channels: Channel allocation for converging arrows
- RoutedPath: Routed path dataclass
"""

from roadmap_grid.layout.routing.channels import assign_channels, compute_channel
from roadmap_grid.layout.routing.common import RoutedPath
from roadmap_grid.layout.routing.core import compute_path, route_dependencies

__all__ = [
    "RoutedPath",
    "assign_channels",
    "compute_channel",
    "compute_path",
    "route_dependencies",
]
