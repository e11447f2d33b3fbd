"""CLI for roadmap-grid."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import click

from roadmap_grid import __version__
from roadmap_grid.checks import (
    board_problems,
    critical_path,
    decode_errors,
    orphaned_dependencies,
)
from roadmap_grid.edit import EditSession, GridEdit
from roadmap_grid.edit import grid
from roadmap_grid.errors import RoadmapError
from roadmap_grid.layout.coords import decode
from roadmap_grid.layout.migration import plan_migration
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import NODES, RECORD_TYPES
from roadmap_grid.render import render_svg
from roadmap_grid.store import JsonFileRecordStore, load_board
from roadmap_grid.themes import THEMES

T = TypeVar("T")


def _run(coro: Awaitable[T]) -> T:
    """Run a coroutine, turning roadmap errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except RoadmapError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


async def _read_board(path: Path, roadmap_id: str | None) -> RoadmapBoard:
    async with JsonFileRecordStore(path) as store:
        return await load_board(store, roadmap_id, seed_defaults=False)


async def _apply(
    path: Path,
    roadmap_id: str | None,
    build: Callable[[RoadmapBoard], GridEdit | None],
) -> tuple[RoadmapBoard, GridEdit | None]:
    """Load the board, build an edit from it, and save the edit to ``path``."""
    async with JsonFileRecordStore(path) as store:
        board = await load_board(store, roadmap_id)
        edit = build(board)
        await EditSession(board, store).execute(edit)
        return board, edit


def _existing_file():
    return click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))


@click.group()
@click.version_option(version=__version__)
@click.option("-r", "--roadmap", "roadmap_id", default=None,
              help="Roadmap id (default: the first roadmap in the file)")
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug output)")
@click.pass_context
def cli(ctx: click.Context, roadmap_id: str | None, verbose: int) -> None:
    """roadmap-grid: plan work on a lane x column grid and render it to SVG."""
    if verbose:
        logging.basicConfig(
            format="%(asctime)s %(levelname)s %(message)s",
            stream=sys.stderr,
            level=logging.DEBUG if verbose > 1 else logging.INFO,
        )
    ctx.obj = {"roadmap_id": roadmap_id}


@cli.command()
@_existing_file()
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--compact", is_flag=True, help="Render every lane at compact height")
@click.option("--expand", "expand", multiple=True, metavar="LANE_ID",
              help="Render a lane at double height (repeatable)")
@click.pass_context
def render(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    theme: str,
    compact: bool,
    expand: tuple[str, ...],
) -> None:
    """Render a roadmap to SVG."""
    board = _run(_read_board(input_file, ctx.obj["roadmap_id"]))
    board.compact = compact
    for lane in board.lanes:
        if lane.id in expand:
            lane.expanded = True

    svg = render_svg(board, THEMES[theme])

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg + "\n")
    click.echo(f"Rendered {len(board.nodes)} nodes, "
               f"{len(board.dependencies)} dependencies, "
               f"{len(board.lanes)} lanes -> {output}")


@cli.command()
@_existing_file()
@click.pass_context
def info(ctx: click.Context, input_file: Path) -> None:
    """Show information about a roadmap."""
    board = _run(_read_board(input_file, ctx.obj["roadmap_id"]))

    click.echo(f"Roadmap: {board.roadmap.title} ({board.id})")
    click.echo(f"Lanes: {len(board.lanes)}")
    for lane in board.lanes:
        count = sum(1 for n in board.nodes.values() if board.lane_for_node(n) is lane)
        flag = " [expanded]" if lane.expanded else ""
        click.echo(f"  {lane.name} ({lane.color}): {count} nodes{flag}")
    click.echo(f"Columns: {len(board.columns)}")
    pinned = board.roadmap.pinned_column_id
    for i, column in enumerate(board.columns):
        flag = " [pinned]" if column.id == pinned else ""
        click.echo(f"  {i}: {column.name or '-'}{flag}")
    click.echo(f"Nodes: {len(board.nodes)}")
    click.echo(f"Dependencies: {len(board.dependencies)}")
    click.echo(f"Notes: {len(board.notes)}")

    path = critical_path(board)
    if path is None:
        click.echo("Critical path: n/a (dependency cycle)")
    else:
        titles = [board.nodes[n].title for n in path]
        click.echo(f"Critical path: {len(path)} nodes")
        if len(path) > 1:
            click.echo(f"  {' -> '.join(titles)}")


async def _validate(path: Path, roadmap_id: str | None) -> tuple[list[str], RoadmapBoard | None]:
    async with JsonFileRecordStore(path) as store:
        tables = {name: await store.select(name) for name in RECORD_TYPES}
        errors = decode_errors(tables) + orphaned_dependencies(tables)
        if errors:
            return errors, None
        board = await load_board(store, roadmap_id, seed_defaults=False)
        return board_problems(board), board


@cli.command()
@_existing_file()
@click.pass_context
def validate(ctx: click.Context, input_file: Path) -> None:
    """Check a roadmap file for bad records and inconsistent placement."""
    errors, board = _run(_validate(input_file, ctx.obj["roadmap_id"]))

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(board.nodes)} nodes, "
               f"{len(board.dependencies)} dependencies, "
               f"{len(board.lanes)} lanes, "
               f"{len(board.columns)} columns")


@cli.command()
@_existing_file()
@click.argument("node_id")
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.pass_context
def move(ctx: click.Context, input_file: Path, node_id: str, x: float, y: float) -> None:
    """Move a node to the cell containing the point (X, Y)."""
    board, edit = _run(_apply(
        input_file, ctx.obj["roadmap_id"],
        lambda b: grid.move_node(b, node_id, x, y),
    ))
    node = board.nodes[node_id]
    if edit is None:
        click.echo(f"{node.title} is already at ({node.position_x:g}, {node.position_y:g})")
        return
    cell = decode(node.position_x, node.position_y, board.grid)
    click.echo(f"Moved {node.title} to row {cell.row}, column {cell.col} "
               f"({node.position_x:g}, {node.position_y:g})")


@cli.command("add-column")
@_existing_file()
@click.option("--at", "at", type=int, default=None,
              help="Insert before this column index (default: append)")
@click.option("--name", default="", help="Column label")
@click.pass_context
def add_column(ctx: click.Context, input_file: Path, at: int | None, name: str) -> None:
    """Insert a column, shifting later nodes one column right."""
    board, edit = _run(_apply(
        input_file, ctx.obj["roadmap_id"],
        lambda b: grid.insert_column(b, at=at, name=name),
    ))
    moved = len(edit.updates_for(NODES))
    click.echo(f"Added column {name or '(unnamed)'}; {len(board.columns)} columns, "
               f"{moved} nodes shifted")


@cli.command("delete-column")
@_existing_file()
@click.argument("column_id")
@click.pass_context
def delete_column(ctx: click.Context, input_file: Path, column_id: str) -> None:
    """Delete a column, shifting later nodes one column left."""
    board, edit = _run(_apply(
        input_file, ctx.obj["roadmap_id"],
        lambda b: grid.delete_column(b, column_id),
    ))
    moved = len(edit.updates_for(NODES))
    click.echo(f"Deleted column {column_id}; {len(board.columns)} columns, "
               f"{moved} nodes shifted")


@cli.command("reorder-lane")
@_existing_file()
@click.argument("lane_id")
@click.argument("direction", type=click.Choice(["up", "down"]))
@click.pass_context
def reorder_lane(ctx: click.Context, input_file: Path, lane_id: str, direction: str) -> None:
    """Swap a lane with its neighbour, moving the nodes of both lanes."""
    board, edit = _run(_apply(
        input_file, ctx.obj["roadmap_id"],
        lambda b: grid.reorder_lane(b, lane_id, direction),
    ))
    if edit is None:
        click.echo(f"Lane {lane_id} cannot move {direction}")
        return
    order = ", ".join(lane.name for lane in board.lanes)
    click.echo(f"Lane order: {order}")


@cli.command()
@_existing_file()
@click.argument("source_id")
@click.argument("target_id")
@click.pass_context
def link(ctx: click.Context, input_file: Path, source_id: str, target_id: str) -> None:
    """Make TARGET_ID depend on SOURCE_ID."""
    board, _ = _run(_apply(
        input_file, ctx.obj["roadmap_id"],
        lambda b: grid.add_dependency(b, source_id, target_id),
    ))
    click.echo(f"Linked {board.nodes[source_id].title} -> {board.nodes[target_id].title}")


@cli.command()
@_existing_file()
@click.option("--dry-run", is_flag=True, help="Show the rewrites without saving")
@click.pass_context
def migrate(ctx: click.Context, input_file: Path, dry_run: bool) -> None:
    """Rewrite node positions saved with the legacy border-offset formula."""
    roadmap_id = ctx.obj["roadmap_id"]
    if dry_run:
        board = _run(_read_board(input_file, roadmap_id))
        plans = [p for p in plan_migration(board.nodes.values(), board.grid) if p.changed]
        for plan in plans:
            click.echo(f"  {plan.title}: ({plan.old[0]:g}, {plan.old[1]:g}) -> "
                       f"({plan.new[0]:g}, {plan.new[1]:g})")
        click.echo(f"{len(plans)} of {len(board.nodes)} nodes would move (dry run)")
        return

    board, edit = _run(_apply(input_file, roadmap_id, grid.migrate_positions))
    moved = len(edit) if edit else 0
    click.echo(f"Migrated {moved} of {len(board.nodes)} nodes")
