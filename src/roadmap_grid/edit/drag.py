"""Pointer drag interactions as an explicit state machine.

Only one drag can be active at a time. Pressing on a node card starts a
node drag, pressing on a node's dependency handle starts drawing an arrow,
and pressing on the empty canvas pans. Drops on a valid target produce a
GridEdit; releasing anywhere else returns to idle without changing
anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from roadmap_grid.edit import grid
from roadmap_grid.edit.commands import GridEdit
from roadmap_grid.errors import DragStateError
from roadmap_grid.model.board import RoadmapBoard

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING_NODE = "dragging-node"
    PANNING = "panning"
    DRAWING_DEPENDENCY = "drawing-dependency"


class DragEvent(Enum):
    PRESS_NODE = "press-node"
    PRESS_HANDLE = "press-handle"
    PRESS_BACKGROUND = "press-background"
    MOVE = "move"
    DROP = "drop"
    RELEASE = "release"


TRANSITIONS: dict[tuple[DragState, DragEvent], DragState] = {
    (DragState.IDLE, DragEvent.PRESS_NODE): DragState.DRAGGING_NODE,
    (DragState.IDLE, DragEvent.PRESS_HANDLE): DragState.DRAWING_DEPENDENCY,
    (DragState.IDLE, DragEvent.PRESS_BACKGROUND): DragState.PANNING,
    (DragState.IDLE, DragEvent.MOVE): DragState.IDLE,
    (DragState.IDLE, DragEvent.DROP): DragState.IDLE,
    (DragState.IDLE, DragEvent.RELEASE): DragState.IDLE,
    (DragState.DRAGGING_NODE, DragEvent.MOVE): DragState.DRAGGING_NODE,
    (DragState.DRAGGING_NODE, DragEvent.DROP): DragState.IDLE,
    (DragState.DRAGGING_NODE, DragEvent.RELEASE): DragState.IDLE,
    (DragState.PANNING, DragEvent.MOVE): DragState.PANNING,
    (DragState.PANNING, DragEvent.DROP): DragState.IDLE,
    (DragState.PANNING, DragEvent.RELEASE): DragState.IDLE,
    (DragState.DRAWING_DEPENDENCY, DragEvent.MOVE): DragState.DRAWING_DEPENDENCY,
    (DragState.DRAWING_DEPENDENCY, DragEvent.DROP): DragState.IDLE,
    (DragState.DRAWING_DEPENDENCY, DragEvent.RELEASE): DragState.IDLE,
}


@dataclass
class DragContext:
    """Transient data of the active drag."""

    node_id: str | None = None
    start: tuple[float, float] = (0.0, 0.0)
    pointer: tuple[float, float] = (0.0, 0.0)

    @property
    def offset(self) -> tuple[float, float]:
        return (self.pointer[0] - self.start[0], self.pointer[1] - self.start[1])


class DragController:
    """Tracks the active drag for one board and turns drops into edits."""

    def __init__(self, board: RoadmapBoard) -> None:
        self.board = board
        self.state = DragState.IDLE
        self.context = DragContext()

    def _fire(self, event: DragEvent) -> tuple[DragState, DragContext]:
        """Apply the transition for ``event``; return the state and context left."""
        previous, context = self.state, self.context
        try:
            self.state = TRANSITIONS[(previous, event)]
        except KeyError:
            raise DragStateError(
                f"cannot handle {event.value} while {previous.value}"
            ) from None
        if self.state is DragState.IDLE and previous is not DragState.IDLE:
            self.context = DragContext()
        return previous, context

    @property
    def active(self) -> bool:
        return self.state is not DragState.IDLE

    def press_node(self, node_id: str, x: float, y: float) -> None:
        self._fire(DragEvent.PRESS_NODE)
        self.context = DragContext(node_id=node_id, start=(x, y), pointer=(x, y))

    def press_handle(self, node_id: str, x: float, y: float) -> None:
        self._fire(DragEvent.PRESS_HANDLE)
        self.context = DragContext(node_id=node_id, start=(x, y), pointer=(x, y))

    def press_background(self, x: float, y: float) -> None:
        self._fire(DragEvent.PRESS_BACKGROUND)
        self.context = DragContext(start=(x, y), pointer=(x, y))

    def move(self, x: float, y: float) -> tuple[float, float]:
        """Update the pointer; returns the offset from the press point."""
        self._fire(DragEvent.MOVE)
        if self.state is DragState.IDLE:
            return (0.0, 0.0)
        self.context.pointer = (x, y)
        return self.context.offset

    def release(self) -> None:
        """Release outside any drop target: cancel the drag, change nothing."""
        self._fire(DragEvent.RELEASE)

    def drop_on_cell(self, row: int, col: int) -> GridEdit | None:
        """Drop over a grid cell. Only node drags accept cells."""
        left = self._fire(DragEvent.DROP)
        node_id = self._dropped_node(left, DragState.DRAGGING_NODE)
        if node_id is None:
            return None
        return grid.move_node_to_cell(self.board, node_id, row, col)

    def drop_at(self, x: float, y: float) -> GridEdit | None:
        """Drop a node at a free pixel position; it snaps to that cell."""
        left = self._fire(DragEvent.DROP)
        node_id = self._dropped_node(left, DragState.DRAGGING_NODE)
        if node_id is None:
            return None
        return grid.move_node(self.board, node_id, x, y)

    def drop_on_node(self, target_id: str) -> GridEdit | None:
        """Drop an arrow onto a node, making it depend on the source node.

        Dropping onto the source node itself is a release. Duplicate edges
        raise ValidationError (the drag is already over by then).
        """
        left = self._fire(DragEvent.DROP)
        source_id = self._dropped_node(left, DragState.DRAWING_DEPENDENCY)
        if source_id is None or source_id == target_id:
            return None
        return grid.add_dependency(self.board, source_id, target_id)

    def _dropped_node(
        self, left: tuple[DragState, DragContext], expected: DragState
    ) -> str | None:
        previous, context = left
        if previous is not expected:
            logger.debug("drop during %s is not a valid target", previous.value)
            return None
        return context.node_id
