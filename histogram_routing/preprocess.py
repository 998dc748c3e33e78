"""
One-shot preprocessing: boundary -> PreparedPolygon.

Classifier -> visibility graph -> landmarks and breakpoints. Either the
whole pipeline succeeds and a complete PreparedPolygon is returned, or a
ConfigurationError propagates and nothing is returned.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from . import config
from .classifier import classify_boundary
from .geometry import HistogramGeometry
from .landmarks import derive_breakpoints, derive_landmarks
from .models import PreparedPolygon
from .visibility import build_visibility_graph


def preprocess(
    polygon: Sequence[Any],
    eps: Optional[float] = None,
    debug: bool = False,
) -> PreparedPolygon:
    """
    Prepare a histogram boundary for routing.

    Args:
        polygon: ordered (x, y) pairs (or {'x', 'y'} dicts) along the boundary
        eps: coordinate tolerance, defaults to config.EPSILON
        debug: print a trace of each stage

    Returns:
        PreparedPolygon with neighbors, landmarks, escape bits and breakpoints

    Raises:
        ConfigurationError: the boundary is not a valid histogram
    """
    eps = config.EPSILON if eps is None else eps

    if debug:
        print("Preprocessing histogram")

    classification = classify_boundary(polygon, eps=eps, debug=debug)
    geometry = HistogramGeometry(classification.points, base_y=classification.base.y, eps=eps)

    neighbors = build_visibility_graph(classification.vertices, geometry, debug=debug)
    left, right, escape = derive_landmarks(classification.vertices, neighbors)
    breakpoints = derive_breakpoints(
        classification.vertices,
        classification.horizontal_edges,
        classification.base,
        neighbors,
        eps=eps,
        debug=debug,
    )

    if debug:
        for v in classification.vertices:
            print(
                f"    v{v.id}: N={sorted(neighbors[v.id])} "
                f"l={left[v.id]} r={right[v.id]} escape_left={escape[v.id]}"
            )

    return PreparedPolygon(
        vertices=classification.vertices,
        horizontal_edges=classification.horizontal_edges,
        base=classification.base,
        neighbors=neighbors,
        left_landmarks=left,
        right_landmarks=right,
        escape_bits=escape,
        breakpoints=breakpoints,
        geometry=geometry,
    )
