"""Structural and item edits on the roadmap grid.

Every function here reads the current board and returns a GridEdit (or
None when the request changes nothing) without mutating anything; invalid
requests raise ValidationError first. Node positions are rewritten so each
node keeps its logical placement:

- lane reorder moves the nodes of both swapped lanes by one row,
- column insert/delete shifts every node right of the edit by one column,
- node moves snap the drop point to its cell's canonical position.

All row arithmetic on stored positions uses base geometry: a lane is
always ``cell_height`` tall in stored space, however it is rendered.
"""

from __future__ import annotations

import dataclasses
import uuid
from typing import Any

from roadmap_grid.edit.commands import Delete, GridEdit, Insert, Update
from roadmap_grid.errors import ValidationError
from roadmap_grid.layout.constants import LANE_COLORS
from roadmap_grid.layout.coords import encode, snap_to_grid
from roadmap_grid.layout.migration import plan_migration
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import Column, Dependency, Lane, Node, NodeStatus
from roadmap_grid.notepad import diff_notes, normalize_order

NODE_FIELDS = ("title", "description", "status")


def _new_id() -> str:
    return str(uuid.uuid4())


def _lane(board: RoadmapBoard, lane_id: str) -> tuple[int, Lane]:
    index = board.lane_index(lane_id)
    if index == -1:
        raise ValidationError(f"unknown lane {lane_id!r}")
    return index, board.lanes[index]


def _column(board: RoadmapBoard, column_id: str) -> tuple[int, Column]:
    index = board.column_index(column_id)
    if index == -1:
        raise ValidationError(f"unknown column {column_id!r}")
    return index, board.columns[index]


def _node(board: RoadmapBoard, node_id: str) -> Node:
    node = board.nodes.get(node_id)
    if node is None:
        raise ValidationError(f"unknown node {node_id!r}")
    return node


def _delete_dependencies(
    board: RoadmapBoard, edit: GridEdit, deps: list[Dependency]
) -> None:
    # Highest index first so every recorded index is valid when the
    # inverse re-inserts them in ascending order.
    positions = {id(dep): i for i, dep in enumerate(board.dependencies)}
    for dep in sorted(deps, key=lambda d: positions[id(d)], reverse=True):
        edit.add(Delete(dep, index=positions[id(dep)]))


def _delete_node_changes(board: RoadmapBoard, edit: GridEdit, node: Node) -> None:
    attached = [
        d for d in board.dependencies if node.id in (d.source, d.target)
    ]
    _delete_dependencies(board, edit, attached)
    edit.add(Delete(node, index=list(board.nodes).index(node.id)))


# ---------------------------------------------------------------------------
# Lanes
# ---------------------------------------------------------------------------


def reorder_lane(board: RoadmapBoard, lane_id: str, direction: str) -> GridEdit | None:
    """Swap a lane with its neighbour above ("up") or below ("down").

    Returns None when the lane is already first/last.
    """
    if direction not in ("up", "down"):
        raise ValidationError(f"direction must be 'up' or 'down', not {direction!r}")
    index, lane = _lane(board, lane_id)
    other_index = index - 1 if direction == "up" else index + 1
    if other_index < 0 or other_index >= len(board.lanes):
        return None
    other = board.lanes[other_index]

    edit = GridEdit(f"move lane {lane.name} {direction}")
    step = board.grid.cell_height
    for node in board.nodes.values():
        row = board.node_cell(node).row
        if row == index:
            dy = (other_index - index) * step
        elif row == other_index:
            dy = (index - other_index) * step
        else:
            continue
        edit.add(Update.of(node, position_y=node.position_y + dy))

    edit.add(Update.of(lane, order_index=other_index))
    edit.add(Update.of(other, order_index=index))
    return edit


def add_lane(
    board: RoadmapBoard,
    name: str | None = None,
    color: str | None = None,
    lane_id: str | None = None,
) -> GridEdit:
    """Append a lane after the current last lane."""
    count = len(board.lanes)
    order = max((lane.order_index for lane in board.lanes), default=-1) + 1
    lane = Lane(
        id=lane_id or _new_id(),
        roadmap_id=board.id,
        name=(name or "").strip() or f"Lane {count + 1}",
        color=color or LANE_COLORS[count % len(LANE_COLORS)],
        order_index=order,
    )
    return GridEdit(f"add lane {lane.name}", [Insert(lane)])


def rename_lane(board: RoadmapBoard, lane_id: str, name: str) -> GridEdit | None:
    _, lane = _lane(board, lane_id)
    name = name.strip()
    if not name:
        raise ValidationError("lane name cannot be empty")
    if name == lane.name:
        return None
    return GridEdit(f"rename lane {lane.name}", [Update.of(lane, name=name)])


def update_lane(board: RoadmapBoard, lane_id: str, **fields: Any) -> GridEdit | None:
    """Change a lane's color or description."""
    _, lane = _lane(board, lane_id)
    unknown = set(fields) - {"color", "description"}
    if unknown:
        raise ValidationError(f"cannot update lane field(s) {', '.join(sorted(unknown))}")
    changed = {k: v for k, v in fields.items() if getattr(lane, k) != v}
    if not changed:
        return None
    return GridEdit(f"update lane {lane.name}", [Update.of(lane, **changed)])


def set_lane_expanded(
    board: RoadmapBoard, lane_id: str, expanded: bool
) -> GridEdit | None:
    """Expand or collapse a lane. Stored node positions are untouched."""
    _, lane = _lane(board, lane_id)
    if lane.expanded == expanded:
        return None
    verb = "expand" if expanded else "collapse"
    return GridEdit(f"{verb} lane {lane.name}", [Update.of(lane, expanded=expanded)])


def delete_lane(board: RoadmapBoard, lane_id: str) -> GridEdit:
    """Delete a lane with its nodes; lanes below move up one row.

    Notes filed under the lane go back to the end of the Notepad column.
    """
    index, lane = _lane(board, lane_id)
    edit = GridEdit(f"delete lane {lane.name}")
    step = board.grid.cell_height

    doomed = [n for n in board.nodes.values() if board.node_cell(n).row == index]
    doomed_ids = {n.id for n in doomed}
    attached = [
        d for d in board.dependencies
        if d.source in doomed_ids or d.target in doomed_ids
    ]
    _delete_dependencies(board, edit, attached)
    node_order = list(board.nodes)
    for node in sorted(doomed, key=lambda n: node_order.index(n.id), reverse=True):
        edit.add(Delete(node, index=node_order.index(node.id)))

    for node in board.nodes.values():
        if board.node_cell(node).row > index:
            edit.add(Update.of(node, position_y=node.position_y - step))

    lane_notes = [n for n in board.notes if n.lane_id == lane_id]
    if lane_notes:
        kept = [n for n in board.notes if n.lane_id != lane_id]
        reassigned = normalize_order(
            kept + [dataclasses.replace(n, lane_id=None) for n in lane_notes]
        )
        for update in diff_notes(board.notes, reassigned):
            edit.add(update)

    for i, later in enumerate(board.lanes[index + 1:], start=index):
        edit.add(Update.of(later, order_index=i))
    edit.add(Delete(lane))
    return edit


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


def insert_column(
    board: RoadmapBoard,
    at: int | None = None,
    name: str = "",
    column_id: str | None = None,
) -> GridEdit:
    """Insert a column at display index ``at`` (default: append)."""
    count = len(board.columns)
    if at is None:
        at = count
    if not 0 <= at <= count:
        raise ValidationError(f"column index {at} out of range 0..{count}")

    edit = GridEdit(f"insert column at {at}")
    step = board.grid.cell_width
    for node in board.nodes.values():
        if board.node_cell(node).col >= at:
            edit.add(Update.of(node, position_x=node.position_x + step))

    for i, column in enumerate(board.columns[at:], start=at + 1):
        edit.add(Update.of(column, order_index=i))

    column = Column(
        id=column_id or _new_id(),
        roadmap_id=board.id,
        name=name.strip(),
        order_index=at,
    )
    edit.add(Insert(column))
    return edit


def delete_column(board: RoadmapBoard, column_id: str) -> GridEdit:
    """Delete a column; nodes right of it move one column left.

    Nodes sitting in the deleted column fall through to the column that
    followed it. When the last column is deleted they move to the one
    before it instead, so they stay on the grid.
    """
    index, column = _column(board, column_id)
    last = index == len(board.columns) - 1
    edit = GridEdit(f"delete column {column.name or index}")
    step = board.grid.cell_width

    for node in board.nodes.values():
        col = board.node_cell(node).col
        if col > index or (col == index and last and index > 0):
            edit.add(Update.of(node, position_x=node.position_x - step))

    for i, later in enumerate(board.columns[index + 1:], start=index):
        edit.add(Update.of(later, order_index=i))

    if board.roadmap.pinned_column_id == column_id:
        edit.add(Update.of(board.roadmap, pinned_column_id=None))
    edit.add(Delete(column))
    return edit


def rename_column(board: RoadmapBoard, column_id: str, name: str) -> GridEdit | None:
    """Set or clear (empty name) a column's label."""
    _, column = _column(board, column_id)
    name = name.strip()
    if name == column.name:
        return None
    return GridEdit(f"rename column {column.name}", [Update.of(column, name=name)])


def pin_column(board: RoadmapBoard, column_id: str) -> GridEdit | None:
    _column(board, column_id)
    if board.roadmap.pinned_column_id == column_id:
        return None
    return GridEdit(
        f"pin column {column_id}",
        [Update.of(board.roadmap, pinned_column_id=column_id)],
    )


def unpin_column(board: RoadmapBoard) -> GridEdit | None:
    if board.roadmap.pinned_column_id is None:
        return None
    return GridEdit("unpin column", [Update.of(board.roadmap, pinned_column_id=None)])


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def move_node(board: RoadmapBoard, node_id: str, x: float, y: float) -> GridEdit | None:
    """Move a node to the cell containing the drop point (x, y).

    The drop point is snapped to the cell's canonical position, which is
    what gets stored. Returns None when the node is already there.
    """
    node = _node(board, node_id)
    new_x, new_y = snap_to_grid(x, y, board.grid)
    if (new_x, new_y) == (node.position_x, node.position_y):
        return None
    return GridEdit(
        f"move node {node.title}",
        [Update.of(node, position_x=new_x, position_y=new_y)],
    )


def move_node_to_cell(
    board: RoadmapBoard, node_id: str, row: int, col: int
) -> GridEdit | None:
    """Move a node into a grid cell; negative indices clamp to 0."""
    x, y = encode(max(0, row), max(0, col), board.grid)
    return move_node(board, node_id, x, y)


def migrate_positions(board: RoadmapBoard) -> GridEdit | None:
    """Rewrite positions stored with the legacy formula; None if all are current."""
    edit = GridEdit("migrate node positions")
    for plan in plan_migration(board.nodes.values(), board.grid):
        if plan.changed:
            node = board.nodes[plan.node_id]
            edit.add(Update.of(node, position_x=plan.new[0], position_y=plan.new[1]))
    return edit or None


def add_node(
    board: RoadmapBoard,
    row: int,
    col: int,
    title: str,
    description: str | None = None,
    status: NodeStatus | str = NodeStatus.PLANNED,
    node_id: str | None = None,
) -> GridEdit:
    """Create a node in an empty cell."""
    title = title.strip()
    if not title:
        raise ValidationError("node title cannot be empty")
    if row < 0 or col < 0:
        raise ValidationError(f"cell ({row}, {col}) is outside the grid")
    if board.lanes and row >= len(board.lanes):
        raise ValidationError(f"row {row} has no lane")
    if board.columns and col >= len(board.columns):
        raise ValidationError(f"column {col} does not exist")
    if board.nodes_in_cell(row, col):
        raise ValidationError(f"cell ({row}, {col}) already has a node")

    x, y = encode(row, col, board.grid)
    node = Node(
        id=node_id or _new_id(),
        roadmap_id=board.id,
        title=title,
        position_x=x,
        position_y=y,
        status=_status(status),
        description=description,
    )
    return GridEdit(f"add node {title}", [Insert(node)])


def _status(value: NodeStatus | str) -> NodeStatus:
    try:
        return NodeStatus(value)
    except ValueError:
        raise ValidationError(f"unknown status {value!r}") from None


def update_node(board: RoadmapBoard, node_id: str, **fields: Any) -> GridEdit | None:
    """Change a node's title, description or status (not its position)."""
    node = _node(board, node_id)
    unknown = set(fields) - set(NODE_FIELDS)
    if unknown:
        raise ValidationError(f"cannot update node field(s) {', '.join(sorted(unknown))}")
    if "status" in fields:
        fields["status"] = _status(fields["status"])
    if "title" in fields:
        fields["title"] = fields["title"].strip()
        if not fields["title"]:
            raise ValidationError("node title cannot be empty")
    changed = {k: v for k, v in fields.items() if getattr(node, k) != v}
    if not changed:
        return None
    return GridEdit(f"update node {node.title}", [Update.of(node, **changed)])


def delete_node(board: RoadmapBoard, node_id: str) -> GridEdit:
    """Delete a node and every dependency that references it."""
    node = _node(board, node_id)
    edit = GridEdit(f"delete node {node.title}")
    _delete_node_changes(board, edit, node)
    return edit


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def add_dependency(
    board: RoadmapBoard,
    source_id: str,
    target_id: str,
    dependency_id: str | None = None,
) -> GridEdit:
    """Make ``target_id`` depend on ``source_id`` (arrow source -> target)."""
    if source_id == target_id:
        raise ValidationError("a node cannot depend on itself")
    _node(board, source_id)
    _node(board, target_id)
    if board.find_dependency(source_id, target_id) is not None:
        raise ValidationError(
            f"a dependency between {source_id!r} and {target_id!r} already exists"
        )
    dep = Dependency(
        id=dependency_id or _new_id(),
        node_id=target_id,
        depends_on_node_id=source_id,
    )
    return GridEdit(f"link {source_id} -> {target_id}", [Insert(dep)])


def delete_dependency(board: RoadmapBoard, dependency_id: str) -> GridEdit:
    for i, dep in enumerate(board.dependencies):
        if dep.id == dependency_id:
            return GridEdit(f"unlink {dep.source} -> {dep.target}", [Delete(dep, index=i)])
    raise ValidationError(f"unknown dependency {dependency_id!r}")
