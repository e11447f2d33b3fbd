"""Tests for optimistic edit sessions and rollback."""

import pytest

from roadmap_grid.edit import EditSession, GridEdit
from roadmap_grid.edit import grid
from roadmap_grid.errors import PersistenceError, StoreError
from roadmap_grid.store import MemoryRecordStore


class FlakyStore(MemoryRecordStore):
    """Memory store that fails every write after the first ``allowed``."""

    def __init__(self, tables, allowed=0):
        super().__init__(tables)
        self.allowed = allowed
        self.writes = 0

    async def _changed(self):
        self.writes += 1
        if self.writes > self.allowed:
            raise StoreError("connection lost")


@pytest.mark.asyncio
async def test_execute_persists_move(board, store):
    async with store:
        session = EditSession(board, store)
        edit = await session.execute(grid.move_node(board, "b", 600, 500))
        assert isinstance(edit, GridEdit)
        rows = await store.select("roadmap_nodes", id="b")
    assert (rows[0]["position_x"], rows[0]["position_y"]) == (614, 436)
    assert (board.nodes["b"].position_x, board.nodes["b"].position_y) == (614, 436)


@pytest.mark.asyncio
async def test_execute_none_is_noop(board, store):
    async with store:
        assert await EditSession(board, store).execute(None) is None
        assert await EditSession(board, store).execute(GridEdit("empty")) is None


@pytest.mark.asyncio
async def test_failed_write_rolls_back_board(board, tables):
    store = FlakyStore(tables, allowed=1)
    before = {n.id: (n.position_x, n.position_y) for n in board.nodes.values()}
    edit = grid.insert_column(board, at=0, column_id="new")

    async with store:
        with pytest.raises(PersistenceError) as excinfo:
            await EditSession(board, store).execute(edit)

    assert isinstance(excinfo.value.__cause__, StoreError)
    assert excinfo.value.edit is edit
    assert {n.id: (n.position_x, n.position_y) for n in board.nodes.values()} == before
    assert [c.id for c in board.columns] == ["col0", "col1", "col2", "col3"]


@pytest.mark.asyncio
async def test_failed_delete_restores_dependencies(board, tables):
    store = FlakyStore(tables)
    edit = grid.delete_node(board, "b")

    async with store:
        with pytest.raises(PersistenceError):
            await EditSession(board, store).execute(edit)

    assert list(board.nodes) == ["a", "b", "c", "d"]
    assert [d.id for d in board.dependencies] == ["ab", "bc"]


@pytest.mark.asyncio
async def test_execute_before_open_fails(board, store):
    with pytest.raises(PersistenceError):
        await EditSession(board, store).execute(grid.move_node(board, "a", 600, 500))
    assert board.node_cell("a") == (0, 0)


@pytest.mark.asyncio
async def test_delete_lane_persists_all_tables(board, store):
    async with store:
        await EditSession(board, store).execute(grid.delete_lane(board, "lane0"))
        lanes = await store.select("roadmap_lanes")
        nodes = await store.select("roadmap_nodes")
        deps = await store.select("node_dependencies")
        notes = await store.select("notes", id="n3")
    assert sorted(lane["id"] for lane in lanes) == ["lane1", "lane2"]
    assert sorted(n["id"] for n in nodes) == ["c", "d"]
    assert deps == []
    assert notes[0]["lane_id"] is None
