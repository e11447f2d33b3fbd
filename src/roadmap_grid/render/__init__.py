"""SVG rendering of roadmap boards."""

from roadmap_grid.render.style import Theme
from roadmap_grid.render.svg import blend, render_svg

__all__ = ["Theme", "blend", "render_svg"]
