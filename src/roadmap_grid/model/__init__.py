"""Typed records and the in-memory roadmap board."""

from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import (
    Column,
    Dependency,
    Lane,
    Node,
    NodeStatus,
    Note,
    Record,
    Roadmap,
)

__all__ = [
    "Column",
    "Dependency",
    "Lane",
    "Node",
    "NodeStatus",
    "Note",
    "Record",
    "Roadmap",
    "RoadmapBoard",
]
