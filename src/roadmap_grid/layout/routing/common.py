"""Shared types for dependency routing."""

from __future__ import annotations

from dataclasses import dataclass

from roadmap_grid.model.records import Dependency


@dataclass
class RoutedPath:
    """A routed dependency arrow, consisting of (x, y) waypoints.

    Points run from the source node's right edge to the target node's left
    edge; every segment is horizontal or vertical.
    """

    edge: Dependency
    points: list[tuple[float, float]]
    channel: int = 0

    @property
    def start(self) -> tuple[float, float]:
        return self.points[0]

    @property
    def end(self) -> tuple[float, float]:
        return self.points[-1]

    def svg_path(self) -> str:
        """SVG path data (``M x y L x y ...``) for the polyline."""
        head, *rest = self.points
        parts = [f"M {_fmt(head[0])} {_fmt(head[1])}"]
        parts.extend(f"L {_fmt(x)} {_fmt(y)}" for x, y in rest)
        return " ".join(parts)


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
