"""Theme definitions for roadmap rendering."""

from roadmap_grid.themes.dark import DARK_THEME
from roadmap_grid.themes.light import LIGHT_THEME

THEMES = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "LIGHT_THEME", "DARK_THEME"]
