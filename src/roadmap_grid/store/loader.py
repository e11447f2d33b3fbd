"""Load a RoadmapBoard from a record store."""

from __future__ import annotations

import logging
import uuid

from roadmap_grid.errors import StoreError
from roadmap_grid.layout.constants import DEFAULT_COLUMNS, DEFAULT_LANES, GRID, GridConfig
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import (
    COLUMNS,
    DEPENDENCIES,
    LANES,
    NODES,
    NOTES,
    ROADMAPS,
    Column,
    Dependency,
    Lane,
    Node,
    Note,
    Roadmap,
)
from roadmap_grid.store.base import RecordStore

logger = logging.getLogger(__name__)


async def first_roadmap_id(store: RecordStore) -> str:
    """Id of the first roadmap in the store."""
    rows = await store.select(ROADMAPS)
    if not rows:
        raise StoreError("the store has no roadmaps")
    return Roadmap.from_record(rows[0]).id


async def _seed_lanes(store: RecordStore, roadmap_id: str) -> list[Lane]:
    lanes = [
        Lane(
            id=str(uuid.uuid4()),
            roadmap_id=roadmap_id,
            name=name,
            color=color,
            order_index=i,
        )
        for i, (name, color) in enumerate(DEFAULT_LANES)
    ]
    for lane in lanes:
        await store.insert(LANES, lane.to_record())
    logger.info("seeded %d default lanes for roadmap %s", len(lanes), roadmap_id)
    return lanes


async def _seed_columns(store: RecordStore, roadmap_id: str) -> list[Column]:
    columns = [
        Column(id=str(uuid.uuid4()), roadmap_id=roadmap_id, name=name, order_index=i)
        for i, name in enumerate(DEFAULT_COLUMNS)
    ]
    for column in columns:
        await store.insert(COLUMNS, column.to_record())
    logger.info("seeded %d default columns for roadmap %s", len(columns), roadmap_id)
    return columns


async def load_board(
    store: RecordStore,
    roadmap_id: str | None = None,
    grid: GridConfig = GRID,
    seed_defaults: bool = True,
) -> RoadmapBoard:
    """Read one roadmap and everything that belongs to it.

    Rows are decoded into typed records (RecordDecodeError on bad rows).
    Lanes and columns are ordered by ``order_index``. An empty roadmap gets
    the default lanes and columns written to the store unless
    ``seed_defaults`` is False.
    """
    if roadmap_id is None:
        roadmap_id = await first_roadmap_id(store)

    rows = await store.select(ROADMAPS, id=roadmap_id)
    if not rows:
        raise StoreError(f"roadmap {roadmap_id!r} not found")
    roadmap = Roadmap.from_record(rows[0])

    nodes = [Node.from_record(r) for r in await store.select(NODES, roadmap_id=roadmap_id)]
    lanes = [Lane.from_record(r) for r in await store.select(LANES, roadmap_id=roadmap_id)]
    columns = [
        Column.from_record(r) for r in await store.select(COLUMNS, roadmap_id=roadmap_id)
    ]
    notes = [Note.from_record(r) for r in await store.select(NOTES, roadmap_id=roadmap_id)]

    dependencies: list[Dependency] = []
    if nodes:
        node_ids = [n.id for n in nodes]
        dependencies = [
            Dependency.from_record(r)
            for r in await store.select(DEPENDENCIES, node_id=node_ids)
        ]

    if seed_defaults and not lanes:
        lanes = await _seed_lanes(store, roadmap_id)
    if seed_defaults and not columns:
        columns = await _seed_columns(store, roadmap_id)

    lanes.sort(key=lambda lane: lane.order_index)
    columns.sort(key=lambda column: column.order_index)
    notes.sort(key=lambda note: (note.lane_id or "", note.order_index))

    logger.debug(
        "loaded roadmap %s: %d nodes, %d lanes, %d columns, %d dependencies",
        roadmap_id,
        len(nodes),
        len(lanes),
        len(columns),
        len(dependencies),
    )
    return RoadmapBoard(
        roadmap=roadmap,
        lanes=lanes,
        columns=columns,
        nodes={n.id: n for n in nodes},
        dependencies=dependencies,
        notes=notes,
        grid=grid,
    )
