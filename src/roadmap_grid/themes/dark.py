"""Dark slate theme."""

from roadmap_grid.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#0f172a",
    header_fill="#1e293b",
    header_text_color="#cbd5e1",
    grid_stroke="#334155",
    lane_header_text_color="#f1f5f9",
    node_text_color="#f8fafc",
    node_tint_base="#1e293b",
    font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    header_font_size=14.0,
    lane_font_size=15.0,
    node_font_size=14.0,
    arrow_color="#94a3b8",
    pinned_header_fill="#312e81",
    completed_stroke="#94a3b8",
    blocked_stroke="#f8fafc",
)
