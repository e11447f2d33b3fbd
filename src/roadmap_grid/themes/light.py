"""Light theme."""

from roadmap_grid.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="#ffffff",
    header_fill="#f8fafc",
    header_text_color="#334155",
    grid_stroke="#e2e8f0",
    lane_header_text_color="#0f172a",
    node_text_color="#0f172a",
    node_tint_base="#ffffff",
    font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    header_font_size=14.0,
    lane_font_size=15.0,
    node_font_size=14.0,
    arrow_color="#475569",
    pinned_header_fill="#e0e7ff",
)
