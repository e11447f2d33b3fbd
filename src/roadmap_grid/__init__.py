"""roadmap-grid: grid layout, dependency routing and edits for visual roadmaps."""

__version__ = "0.1.0"
