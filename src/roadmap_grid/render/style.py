"""Theme definition for roadmap rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a roadmap grid."""

    name: str
    background_color: str
    header_fill: str
    header_text_color: str
    grid_stroke: str
    lane_header_text_color: str
    node_text_color: str
    node_tint_base: str
    font_family: str
    header_font_size: float
    lane_font_size: float
    node_font_size: float
    arrow_color: str
    arrow_width: float = 2.0
    pinned_header_fill: str = ""  # empty = inherit header_fill
    completed_stroke: str = "#64748b"
    blocked_stroke: str = "#000000"
