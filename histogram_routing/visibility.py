"""
Rectilinear visibility graph between polygon vertices.

Quadratic in the vertex count with a vectorized per-pair test; histograms
are small (tens of vertices), and the whole graph is rebuilt whenever the
polygon changes.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Sequence, Set, Tuple

from .geometry import HistogramGeometry
from .models import Vertex, VertexId


def build_visibility_graph(
    vertices: Sequence[Vertex],
    geometry: HistogramGeometry,
    debug: bool = False,
) -> Tuple[FrozenSet[VertexId], ...]:
    """
    Return, for every vertex, the set of vertices r-visible from it.

    The relation is symmetric and irreflexive; each unordered pair is tested
    once.
    """
    n = len(vertices)
    adjacency: Dict[VertexId, Set[VertexId]] = {v.id: set() for v in vertices}
    checks = 0

    for i in range(n):
        for j in range(i + 1, n):
            checks += 1
            if geometry.r_visible(vertices[i].point, vertices[j].point):
                adjacency[i].add(j)
                adjacency[j].add(i)

    if debug:
        pairs = sum(len(s) for s in adjacency.values()) // 2
        print(f"  Visibility: {checks} pair checks, {pairs} visible pairs")

    return tuple(frozenset(adjacency[i]) for i in range(n))


def visibility_edges(neighbors: Sequence[FrozenSet[VertexId]]) -> List[Tuple[VertexId, VertexId]]:
    """Unordered visible pairs (i < j), for renderers."""
    return [
        (i, j)
        for i, group in enumerate(neighbors)
        for j in sorted(group)
        if i < j
    ]
