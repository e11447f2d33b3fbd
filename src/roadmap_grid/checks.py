"""Consistency checks over stored roadmap data, used by ``validate``."""

from __future__ import annotations

from collections import Counter
from typing import Any, Mapping, Sequence

import networkx as nx

from roadmap_grid.errors import RecordDecodeError
from roadmap_grid.layout.coords import decode, encode
from roadmap_grid.model.board import RoadmapBoard
from roadmap_grid.model.records import DEPENDENCIES, NODES, RECORD_TYPES


def decode_errors(tables: Mapping[str, Sequence[Mapping[str, Any]]]) -> list[str]:
    """Decode every row of every known table; return one message per bad row."""
    errors = []
    for table, record_type in RECORD_TYPES.items():
        for i, row in enumerate(tables.get(table, ())):
            try:
                record_type.from_record(row)
            except RecordDecodeError as exc:
                errors.append(f"{table}[{i}]: {exc}")
    return errors


def board_problems(board: RoadmapBoard) -> list[str]:
    """Placement and dependency problems of a loaded board."""
    problems = []
    grid = board.grid

    occupied: dict[tuple[int, int], str] = {}
    for node in board.nodes.values():
        cell = decode(node.position_x, node.position_y, grid)
        canonical = encode(cell.row, cell.col, grid)
        if (node.position_x, node.position_y) != canonical:
            problems.append(
                f"node {node.id!r} at ({node.position_x:g}, {node.position_y:g}) "
                f"is off-grid; nearest cell ({cell.row}, {cell.col}) is at "
                f"({canonical[0]:g}, {canonical[1]:g})"
            )
        if board.lanes and cell.row >= len(board.lanes):
            problems.append(f"node {node.id!r} is in row {cell.row}, past the last lane")
        if board.columns and cell.col >= len(board.columns):
            problems.append(
                f"node {node.id!r} is in column {cell.col}, past the last column"
            )
        other = occupied.setdefault(cell, node.id)
        if other != node.id:
            problems.append(
                f"nodes {other!r} and {node.id!r} share cell ({cell.row}, {cell.col})"
            )

    pairs: Counter[frozenset[str]] = Counter()
    for dep in board.dependencies:
        if dep.source == dep.target:
            problems.append(f"dependency {dep.id!r} links node {dep.source!r} to itself")
        for end in (dep.source, dep.target):
            if end not in board.nodes:
                problems.append(f"dependency {dep.id!r} references unknown node {end!r}")
        pairs[frozenset((dep.source, dep.target))] += 1
    for pair, count in pairs.items():
        if count > 1:
            names = sorted(pair)
            a, b = names[0], names[-1]
            problems.append(f"{count} dependencies link {a!r} and {b!r}")

    graph = board.dependency_graph()
    graph.remove_edges_from(list(nx.selfloop_edges(graph)))
    for cycle in nx.simple_cycles(graph):
        problems.append("dependency cycle: " + " -> ".join(cycle + cycle[:1]))

    return problems


def critical_path(board: RoadmapBoard) -> list[str] | None:
    """Longest chain of dependent nodes, or None when dependencies form a cycle."""
    graph = board.dependency_graph()
    if not nx.is_directed_acyclic_graph(graph):
        return None
    return nx.dag_longest_path(graph)


def orphaned_dependencies(
    tables: Mapping[str, Sequence[Mapping[str, Any]]],
) -> list[str]:
    """Dependency rows whose dependent node is not in any roadmap."""
    node_ids = {row.get("id") for row in tables.get(NODES, ())}
    return [
        f"{DEPENDENCIES}: dependency {row.get('id')!r} belongs to unknown node "
        f"{row.get('node_id')!r}"
        for row in tables.get(DEPENDENCIES, ())
        if row.get("node_id") not in node_ids
    ]
