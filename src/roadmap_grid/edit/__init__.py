"""Grid edits: commands, mutation operations, sessions and drag handling."""

from roadmap_grid.edit.commands import Delete, GridEdit, Insert, Update
from roadmap_grid.edit.session import EditSession

__all__ = ["Delete", "EditSession", "GridEdit", "Insert", "Update"]
