"""
Data model for histogram routing.

The preprocessing stage produces one immutable PreparedPolygon per input
boundary. Everything derived from the boundary (classification tags,
r-visibility neighbors, landmarks, escape bits, breakpoints) is stored in
tuples keyed by vertex index, so the value can be shared freely between
concurrent routing queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

Point = Tuple[float, float]
VertexId = int


# =============================================================================
# Exceptions
# =============================================================================

class HistogramError(Exception):
    """Base class for histogram routing errors."""


class ConfigurationError(HistogramError):
    """Raised by preprocessing when the boundary is not a valid histogram."""


class InvalidVertexError(HistogramError, ValueError):
    """Raised when a caller passes a vertex id the polygon does not have."""
    def __init__(self, vertex_id: Any, vertex_count: int):
        self.vertex_id = vertex_id
        self.vertex_count = vertex_count
        super().__init__(
            f"Unknown vertex {vertex_id!r}: polygon has vertices 0..{vertex_count - 1}"
        )


# =============================================================================
# Enums
# =============================================================================

class RouteState(str, Enum):
    """Verdict of a single routing step."""
    ROUTING = "ROUTING"
    ARRIVED = "ARRIVED"
    STUCK = "STUCK"
    LOOP_DETECTED = "LOOP_DETECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not RouteState.ROUTING


class RoutingCase(str, Enum):
    """Which branch of the routing procedure produced a hop."""
    DIRECT = "direct"
    ESCAPE = "escape"
    DOMINATOR = "dominator"
    FALLBACK = "fallback"


class DominatorPolicy(str, Enum):
    """How nd/fd are split when the near dominator has no breakpoint."""
    DISTANCE = "distance"
    MIDPOINT = "midpoint"


# =============================================================================
# Boundary data
# =============================================================================

@dataclass(frozen=True)
class Vertex:
    """A boundary vertex with its classification tags."""
    id: VertexId
    x: float
    y: float
    corresponding: Optional[VertexId] = None  # other endpoint of its horizontal edge
    is_left_endpoint: bool = False
    is_right_endpoint: bool = False
    is_reflex: bool = False
    is_convex: bool = False

    @property
    def point(self) -> Point:
        return (self.x, self.y)

    def tags(self) -> List[str]:
        out = []
        if self.is_left_endpoint:
            out.append("left")
        if self.is_right_endpoint:
            out.append("right")
        if self.is_reflex:
            out.append("reflex")
        if self.is_convex:
            out.append("convex")
        return out


@dataclass(frozen=True)
class HorizontalEdge:
    """A horizontal boundary edge, stored left endpoint first."""
    left: VertexId
    right: VertexId
    y: float
    is_base: bool = False

    def other(self, vertex_id: VertexId) -> VertexId:
        return self.right if vertex_id == self.left else self.left


# =============================================================================
# Prepared polygon
# =============================================================================

@dataclass(frozen=True)
class PreparedPolygon:
    """
    A histogram together with all per-vertex routing data.

    Produced only by preprocess(); read-only afterwards. Per-vertex fields are
    tuples indexed by vertex id.
    """
    vertices: Tuple[Vertex, ...]
    horizontal_edges: Tuple[HorizontalEdge, ...]
    base: HorizontalEdge
    neighbors: Tuple[FrozenSet[VertexId], ...]
    left_landmarks: Tuple[VertexId, ...]
    right_landmarks: Tuple[VertexId, ...]
    escape_bits: Tuple[bool, ...]
    breakpoints: Tuple[Optional[VertexId], ...]
    geometry: Any = field(default=None, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.vertices)

    # ---------- read accessors ----------

    def check_vertex(self, vertex_id: Any) -> VertexId:
        """Return vertex_id if it names a vertex of this polygon, else raise."""
        if isinstance(vertex_id, bool) or not isinstance(vertex_id, int):
            raise InvalidVertexError(vertex_id, len(self.vertices))
        if not 0 <= vertex_id < len(self.vertices):
            raise InvalidVertexError(vertex_id, len(self.vertices))
        return vertex_id

    def vertex(self, vertex_id: VertexId) -> Vertex:
        return self.vertices[self.check_vertex(vertex_id)]

    def neighbors_of(self, vertex_id: VertexId) -> FrozenSet[VertexId]:
        return self.neighbors[self.check_vertex(vertex_id)]

    def left_landmark(self, vertex_id: VertexId) -> VertexId:
        return self.left_landmarks[self.check_vertex(vertex_id)]

    def right_landmark(self, vertex_id: VertexId) -> VertexId:
        return self.right_landmarks[self.check_vertex(vertex_id)]

    def escape_bit(self, vertex_id: VertexId) -> bool:
        return self.escape_bits[self.check_vertex(vertex_id)]

    def breakpoint(self, vertex_id: VertexId) -> Optional[VertexId]:
        return self.breakpoints[self.check_vertex(vertex_id)]

    @property
    def points(self) -> List[Point]:
        return [v.point for v in self.vertices]

    def describe(self) -> Dict[str, Any]:
        """Inspection table for renderers and the HTTP API."""
        table = []
        for v in self.vertices:
            table.append({
                "id": v.id,
                "x": v.x,
                "y": v.y,
                "tags": v.tags(),
                "corresponding": v.corresponding,
                "neighbors": sorted(self.neighbors[v.id]),
                "left_landmark": self.left_landmarks[v.id],
                "right_landmark": self.right_landmarks[v.id],
                "escape_bit": self.escape_bits[v.id],
                "breakpoint": self.breakpoints[v.id],
            })
        return {
            "vertices": table,
            "horizontal_edges": [
                {"left": e.left, "right": e.right, "y": e.y, "is_base": e.is_base}
                for e in self.horizontal_edges
            ],
            "base": {"left": self.base.left, "right": self.base.right, "y": self.base.y},
        }


# =============================================================================
# Routing results
# =============================================================================

@dataclass(frozen=True)
class StepResult:
    """Outcome of one routing step."""
    next_vertex: Optional[VertexId]
    state: RouteState
    case: Optional[RoutingCase] = None


@dataclass
class RouteResult:
    """Outcome of a full start-to-target route."""
    path: List[VertexId]
    state: RouteState
    cases: List[RoutingCase] = field(default_factory=list)

    @property
    def hops(self) -> int:
        return len(self.path) - 1

    @property
    def message(self) -> str:
        if self.state is RouteState.ARRIVED:
            return f"Path found! Length: {self.hops} hops."
        if self.state is RouteState.LOOP_DETECTED:
            return "Error: Routing loop detected!"
        if self.state is RouteState.STUCK:
            return "Error: Algorithm stuck (no next vertex found)."
        return "Routing..."
