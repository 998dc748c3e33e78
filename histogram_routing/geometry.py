"""
Geometry predicates over a fixed rectilinear boundary.

Containment (boundary-inclusive point-in-polygon) and rectilinear visibility
(r-visibility): two points are r-visible when the closed axis-aligned
rectangle they span lies inside the polygon.

Coordinates are screen-style: smaller y is higher, i.e. closer to the base.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np
from matplotlib.path import Path as MplPath

from . import config
from .models import Point

Polygon = List[Point]


# ---------- Basic Geometry Utilities ----------

def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def _cross(o: Point, a: Point, b: Point) -> float:
    """
    2D cross product (OA x OB).
    Sign is relative to the raw coordinate frame; compare against
    signed_area() rather than reading it as left/right directly.
    """
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace area; the sign gives the traversal direction."""
    n = len(polygon)
    total = 0.0
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        total += x1 * y2 - x2 * y1
    return total / 2.0


def turn_cross(prev: Point, cur: Point, nxt: Point) -> float:
    """Cross product of the incoming and outgoing edge vectors at cur."""
    return _cross(prev, cur, nxt)


def axis_segments_touch(
    a1: Point, a2: Point, b1: Point, b2: Point, eps: float = 0.0
) -> bool:
    """
    Closed intersection test for two axis-aligned segments.
    An axis-aligned segment is its own bounding box, so box overlap is exact.
    """
    return (
        max(a1[0], a2[0]) >= min(b1[0], b2[0]) - eps and
        max(b1[0], b2[0]) >= min(a1[0], a2[0]) - eps and
        max(a1[1], a2[1]) >= min(b1[1], b2[1]) - eps and
        max(b1[1], b2[1]) >= min(a1[1], a2[1]) - eps
    )


# ---------- Polygon Predicates ----------

class HistogramGeometry:
    """
    Boundary-aware containment and visibility tests for one polygon.

    Edge arrays are built once and never modified, so a single instance can
    serve any number of concurrent queries.
    """

    def __init__(self, polygon: Sequence[Point], base_y: Optional[float] = None, eps: Optional[float] = None):
        self.polygon: Polygon = [(float(x), float(y)) for x, y in polygon]
        self.eps = config.EPSILON if eps is None else float(eps)

        pts = np.asarray(self.polygon, dtype=float)
        nxt = np.roll(pts, -1, axis=0)
        edges = np.hstack([pts, nxt])  # rows: x1, y1, x2, y2

        horizontal = np.abs(edges[:, 1] - edges[:, 3]) <= self.eps
        vertical = np.abs(edges[:, 0] - edges[:, 2]) <= self.eps
        self.base_y = float(pts[:, 1].min()) if base_y is None else float(base_y)

        self._edges = edges
        self._edge_len = np.hypot(edges[:, 2] - edges[:, 0], edges[:, 3] - edges[:, 1])
        # Teeth: every horizontal edge except the base
        self._teeth = edges[horizontal & (edges[:, 1] > self.base_y + self.eps)]
        self._walls = edges[vertical & ~horizontal]
        self._xs = np.unique(pts[:, 0])
        self._ys = np.unique(pts[:, 1])
        self._path = MplPath(np.vstack([pts, pts[:1]]), closed=True)

        for arr in (self._edges, self._edge_len, self._teeth, self._walls, self._xs, self._ys):
            arr.flags.writeable = False

    # ---------- containment ----------

    def on_boundary(self, p: Point) -> bool:
        """True if p lies on some boundary edge (collinear and inside its box)."""
        px, py = float(p[0]), float(p[1])
        e = self._edges
        eps = self.eps
        in_box = (
            (px >= np.minimum(e[:, 0], e[:, 2]) - eps) &
            (px <= np.maximum(e[:, 0], e[:, 2]) + eps) &
            (py >= np.minimum(e[:, 1], e[:, 3]) - eps) &
            (py <= np.maximum(e[:, 1], e[:, 3]) + eps)
        )
        cross = (e[:, 0] - e[:, 2]) * (py - e[:, 1]) - (e[:, 1] - e[:, 3]) * (px - e[:, 0])
        collinear = np.abs(cross) <= eps * np.maximum(1.0, self._edge_len)
        return bool(np.any(in_box & collinear))

    def point_in_polygon(self, p: Point) -> bool:
        """
        Boundary-inclusive containment.
        The boundary check runs first because the crossing test is unstable
        exactly on edges.
        """
        if self.on_boundary(p):
            return True
        return bool(self._path.contains_point((float(p[0]), float(p[1]))))

    # ---------- visibility ----------

    def r_visible(self, u: Point, v: Point) -> bool:
        """True iff the closed rectangle spanned by u and v lies inside the polygon."""
        eps = self.eps
        min_x, max_x = min(u[0], v[0]), max(u[0], v[0])
        min_y, max_y = min(u[1], v[1]), max(u[1], v[1])

        if max_x - min_x <= eps and max_y - min_y <= eps:
            return False
        if max_x - min_x <= eps or max_y - min_y <= eps:
            return self.segment_inside(u, v)

        # A tooth strictly inside the vertical span carves into the rectangle
        t = self._teeth
        if t.size:
            blocked = (
                (t[:, 1] > min_y + eps) & (t[:, 1] < max_y - eps) &
                (np.maximum(t[:, 0], t[:, 2]) > min_x + eps) &
                (np.minimum(t[:, 0], t[:, 2]) < max_x - eps)
            )
            if blocked.any():
                return False

        # So does a wall strictly inside the horizontal span
        w = self._walls
        if w.size:
            blocked = (
                (w[:, 0] > min_x + eps) & (w[:, 0] < max_x - eps) &
                (np.maximum(w[:, 1], w[:, 3]) > min_y + eps) &
                (np.minimum(w[:, 1], w[:, 3]) < max_y - eps)
            )
            if blocked.any():
                return False

        # No edge enters the open rectangle: it is all inside or all outside
        return self.point_in_polygon(((min_x + max_x) / 2.0, (min_y + max_y) / 2.0))

    def segment_inside(self, a: Point, b: Point) -> bool:
        """
        True iff every point of the axis-aligned segment a-b is in the polygon.

        The segment is split at every vertex coordinate it passes; between
        two split points no edge crosses it, so testing the split points and
        the piece midpoints is exact.
        """
        eps = self.eps
        if abs(a[1] - b[1]) <= eps:
            lo, hi = sorted((a[0], b[0]))
            inner = [float(x) for x in self._xs if lo + eps < x < hi - eps]
            stops = [lo] + inner + [hi]
            y = a[1]
            samples = [(x, y) for x in stops]
            samples += [((x0 + x1) / 2.0, y) for x0, x1 in zip(stops, stops[1:])]
        elif abs(a[0] - b[0]) <= eps:
            lo, hi = sorted((a[1], b[1]))
            inner = [float(y) for y in self._ys if lo + eps < y < hi - eps]
            stops = [lo] + inner + [hi]
            x = a[0]
            samples = [(x, y) for y in stops]
            samples += [(x, (y0 + y1) / 2.0) for y0, y1 in zip(stops, stops[1:])]
        else:
            raise ValueError(f"Segment {a} -> {b} is not axis-aligned")

        return all(self.point_in_polygon(p) for p in samples)
