"""
Boundary classification for histogram polygons.

Single pass over the cyclic vertex sequence:
1. Validate the boundary (vertex count, axis-aligned edges, no flat
   vertices, no self-intersections)
2. Record every horizontal edge and link its endpoints
3. Tag each vertex convex or reflex from its boundary turn
4. Find the base: the one horizontal edge at minimum y spanning all x

Reflex/convex is read relative to the polygon's signed area, so the same
boundary classifies identically in either traversal direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from . import config
from .geometry import axis_segments_touch, signed_area, turn_cross
from .models import ConfigurationError, HorizontalEdge, Point, Vertex


@dataclass(frozen=True)
class BoundaryClassification:
    """Classifier output consumed by the visibility and landmark stages."""
    vertices: Tuple[Vertex, ...]
    horizontal_edges: Tuple[HorizontalEdge, ...]
    base: HorizontalEdge
    area: float

    @property
    def points(self) -> List[Point]:
        return [v.point for v in self.vertices]


def normalize_polygon(polygon: Sequence[Any]) -> List[Point]:
    """Coerce an input vertex list to a list of float (x, y) tuples."""
    if polygon is None:
        raise ConfigurationError("Polygon is missing")
    points: List[Point] = []
    for i, item in enumerate(polygon):
        if isinstance(item, dict):
            item = (item.get("x"), item.get("y"))
        try:
            x, y = item
            points.append((float(x), float(y)))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Vertex {i} is not an (x, y) pair: {item!r}")
    return points


def _validate_edges(points: List[Point], eps: float) -> None:
    n = len(points)
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        dx = abs(b[0] - a[0])
        dy = abs(b[1] - a[1])
        if dx <= eps and dy <= eps:
            raise ConfigurationError(f"Edge {i}->{(i + 1) % n} has zero length at {a}")
        if dx > eps and dy > eps:
            raise ConfigurationError(
                f"Edge {i}->{(i + 1) % n} is not axis-aligned: {a} -> {b}"
            )


def _validate_simple(points: List[Point], eps: float) -> None:
    """Non-adjacent edges must not touch."""
    n = len(points)
    for i in range(n):
        a1, a2 = points[i], points[(i + 1) % n]
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue  # adjacent through the closing edge
            b1, b2 = points[j], points[(j + 1) % n]
            if axis_segments_touch(a1, a2, b1, b2, eps):
                raise ConfigurationError(
                    f"Boundary self-intersects: edge {i}->{(i + 1) % n} "
                    f"touches edge {j}->{(j + 1) % n}"
                )


def _find_base(
    points: List[Point],
    edges: List[HorizontalEdge],
    eps: float,
) -> HorizontalEdge:
    min_y = min(p[1] for p in points)
    candidates = [e for e in edges if abs(e.y - min_y) <= eps]
    if len(candidates) != 1:
        raise ConfigurationError(
            f"No horizontal base edge: {len(candidates)} horizontal edges at top y={min_y}"
        )
    base = candidates[0]
    left_x = points[base.left][0]
    right_x = points[base.right][0]
    min_x = min(p[0] for p in points)
    max_x = max(p[0] for p in points)
    if left_x > min_x + eps or right_x < max_x - eps:
        raise ConfigurationError(
            f"No horizontal base edge: top edge {base.left}-{base.right} spans "
            f"[{left_x}, {right_x}] but the polygon spans [{min_x}, {max_x}]"
        )
    return base


def classify_boundary(
    polygon: Sequence[Any],
    eps: Optional[float] = None,
    debug: bool = False,
) -> BoundaryClassification:
    """
    Validate a histogram boundary and classify its vertices and edges.

    Raises ConfigurationError for fewer than MIN_VERTICES vertices, a
    non-axis-aligned or zero-length edge, a flat vertex, a self-intersecting
    boundary, or a missing base edge.
    """
    eps = config.EPSILON if eps is None else eps
    points = normalize_polygon(polygon)
    n = len(points)
    if n < config.MIN_VERTICES:
        raise ConfigurationError(
            f"Polygon needs at least {config.MIN_VERTICES} vertices, got {n}"
        )

    _validate_edges(points, eps)

    area = signed_area(points)
    if abs(area) <= eps:
        raise ConfigurationError("Polygon has zero area")

    _validate_simple(points, eps)

    # Horizontal edges and endpoint tags
    fields: List[Dict[str, Any]] = [{} for _ in range(n)]
    edges: List[HorizontalEdge] = []
    for i in range(n):
        j = (i + 1) % n
        a, b = points[i], points[j]
        if abs(a[1] - b[1]) > eps:
            continue
        left, right = (i, j) if a[0] < b[0] else (j, i)
        fields[left].update(is_left_endpoint=True, corresponding=right)
        fields[right].update(is_right_endpoint=True, corresponding=left)
        edges.append(HorizontalEdge(left=left, right=right, y=a[1]))

    # Convex / reflex from the boundary turn
    orientation = 1.0 if area > 0 else -1.0
    for i in range(n):
        turn = turn_cross(points[i - 1], points[i], points[(i + 1) % n])
        if abs(turn) <= eps:
            raise ConfigurationError(f"Vertex {i} at {points[i]} is flat (collinear edges)")
        if turn * orientation > 0:
            fields[i]["is_convex"] = True
        else:
            fields[i]["is_reflex"] = True

    base = _find_base(points, edges, eps)
    edges = [
        HorizontalEdge(left=e.left, right=e.right, y=e.y, is_base=True) if e == base else e
        for e in edges
    ]
    base = next(e for e in edges if e.is_base)

    vertices = tuple(
        Vertex(id=i, x=points[i][0], y=points[i][1], **fields[i]) for i in range(n)
    )

    if debug:
        reflex = [v.id for v in vertices if v.is_reflex]
        print(f"  Classified {n} vertices, {len(edges)} horizontal edges")
        print(f"  Base edge: {base.left}-{base.right} at y={base.y}")
        print(f"  Reflex vertices: {reflex}")

    return BoundaryClassification(
        vertices=vertices,
        horizontal_edges=tuple(edges),
        base=base,
        area=area,
    )
