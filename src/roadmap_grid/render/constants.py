"""Render constants used by the SVG renderer.

Theme-dependent values live in style.py.
"""

# ---------------------------------------------------------------------------
# Node cards
# ---------------------------------------------------------------------------
NODE_CORNER_RADIUS: float = 10.0
"""Corner radius of node cards."""

NODE_TINT: float = 0.12
"""Share of the lane colour in a node's fill; the rest is the tint base."""

NODE_TEXT_INSET: float = 16.0
"""Inset of the title text from the card's top-left corner."""

NODE_TITLE_CHARS: int = 24
"""Characters per wrapped title line."""

NODE_TITLE_MAX_LINES: int = 4
"""Title lines drawn before truncating with an ellipsis."""

LINE_HEIGHT_RATIO: float = 1.3
"""Line height as a multiple of font size."""

# ---------------------------------------------------------------------------
# Status borders
# ---------------------------------------------------------------------------
BORDER_WIDTH: float = 1.5
"""Default node border width."""

BORDER_WIDTH_IN_PROGRESS: float = 3.0
"""Border width of in-progress nodes."""

DASH_PATTERN: str = "6 4"
"""stroke-dasharray for planned and blocked nodes."""

# ---------------------------------------------------------------------------
# Headers and lanes
# ---------------------------------------------------------------------------
HEADER_TEXT_INSET: float = 12.0
"""Left inset of column and lane header labels."""

LANE_STRIPE_WIDTH: float = 6.0
"""Width of the coloured stripe at the left edge of each lane header."""

LANE_BAND_OPACITY: float = 0.04
"""Opacity of the lane colour band drawn behind a lane's cells."""

GRID_STROKE_WIDTH: float = 1.0
"""Stroke width of cell borders."""

# ---------------------------------------------------------------------------
# Arrows
# ---------------------------------------------------------------------------
ARROW_MARKER_SCALE: float = 4.0
"""Scale of the arrowhead marker relative to the stroke."""
