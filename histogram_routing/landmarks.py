"""
Per-vertex routing tables derived from the visibility graph.

For every vertex v:
- left/right landmark: the minimum/maximum-index r-visible vertex
- escape bit: True when the left landmark is higher (smaller y) than the
  right one, i.e. the left landmark leads out of the pocket
- breakpoint: the nearest tooth endpoint below v on the side v faces, used
  to split a dominated interval during routing
"""

from __future__ import annotations

from typing import FrozenSet, List, Optional, Sequence, Tuple

from . import config
from .models import ConfigurationError, HorizontalEdge, Vertex, VertexId


def derive_landmarks(
    vertices: Sequence[Vertex],
    neighbors: Sequence[FrozenSet[VertexId]],
) -> Tuple[Tuple[VertexId, ...], Tuple[VertexId, ...], Tuple[bool, ...]]:
    """
    Returns (left_landmarks, right_landmarks, escape_bits).

    Raises ConfigurationError if any vertex sees nothing: every vertex of a
    valid histogram sees at least its two boundary neighbors.
    """
    left: List[VertexId] = []
    right: List[VertexId] = []
    escape: List[bool] = []
    for v in vertices:
        group = neighbors[v.id]
        if not group:
            raise ConfigurationError(f"Vertex {v.id} at {v.point} has no visible neighbors")
        lo = min(group)
        hi = max(group)
        left.append(lo)
        right.append(hi)
        escape.append(vertices[lo].y < vertices[hi].y)
    return tuple(left), tuple(right), tuple(escape)


def _needs_right_search(v: Vertex, base: HorizontalEdge) -> bool:
    return (v.is_reflex and v.is_right_endpoint) or v.id == base.left


def _needs_left_search(v: Vertex, base: HorizontalEdge) -> bool:
    return (v.is_reflex and v.is_left_endpoint) or v.id == base.right


def _search(
    v: Vertex,
    vertices: Sequence[Vertex],
    edges: Sequence[HorizontalEdge],
    visible: FrozenSet[VertexId],
    direction: str,
    eps: float,
) -> Optional[VertexId]:
    """
    Nearest tooth below v whose facing endpoint is visible from v.

    direction 'right' looks at left endpoints with x >= v.x; 'left' at right
    endpoints with x <= v.x. Equal vertical gaps go to the horizontally
    closer endpoint.
    """
    best: Optional[Tuple[float, float, VertexId]] = None
    for edge in edges:
        if edge.is_base or edge.y <= v.y + eps:
            continue
        if direction == 'right':
            endpoint = edge.left
            if vertices[endpoint].x < v.x - eps:
                continue
        else:
            endpoint = edge.right
            if vertices[endpoint].x > v.x + eps:
                continue
        if endpoint not in visible:
            continue
        key = (edge.y - v.y, abs(vertices[endpoint].x - v.x), endpoint)
        if best is None or key < best:
            best = key
    return best[2] if best is not None else None


def derive_breakpoints(
    vertices: Sequence[Vertex],
    edges: Sequence[HorizontalEdge],
    base: HorizontalEdge,
    neighbors: Sequence[FrozenSet[VertexId]],
    eps: Optional[float] = None,
    debug: bool = False,
) -> Tuple[Optional[VertexId], ...]:
    """Breakpoint per vertex; None where no search applies or none qualifies."""
    eps = config.EPSILON if eps is None else eps
    result: List[Optional[VertexId]] = []
    for v in vertices:
        found: Optional[VertexId] = None
        if _needs_right_search(v, base):
            found = _search(v, vertices, edges, neighbors[v.id], 'right', eps)
        if found is None and _needs_left_search(v, base):
            found = _search(v, vertices, edges, neighbors[v.id], 'left', eps)
        result.append(found)
        if debug and found is not None:
            print(f"    br({v.id}) = {found}")
    return tuple(result)
