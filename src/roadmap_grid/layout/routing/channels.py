"""Channel allocation for arrows converging on the same target."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from roadmap_grid.model.records import Dependency


def compute_channel(edge: Dependency, all_edges: Sequence[Dependency]) -> int:
    """Return the signed routing channel of ``edge``.

    Edges sharing the target are taken in edge-list order; the edge's
    position among them is shifted by ``N // 2`` so channels spread evenly
    around the direct path (N=3 gives -1, 0, +1). A lone edge uses
    channel 0.
    """
    sources = [e.source for e in all_edges if e.target == edge.target]
    if len(sources) <= 1:
        return 0
    return sources.index(edge.source) - len(sources) // 2


def assign_channels(all_edges: Sequence[Dependency]) -> dict[str, int]:
    """Compute channels for every edge in one pass.

    Returns dict mapping dependency id -> channel. Equivalent to calling
    ``compute_channel`` for each edge.
    """
    by_target: dict[str, list[Dependency]] = defaultdict(list)
    for edge in all_edges:
        by_target[edge.target].append(edge)

    channels: dict[str, int] = {}
    for group in by_target.values():
        n = len(group)
        if n == 1:
            channels[group[0].id] = 0
            continue
        first_seen: dict[str, int] = {}
        for i, edge in enumerate(group):
            first_seen.setdefault(edge.source, i)
        for edge in group:
            channels[edge.id] = first_seen[edge.source] - n // 2
    return channels
