"""
Pydantic schemas for the Histogram Routing API.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel

from histogram_routing import DominatorPolicy, RouteState, RoutingCase


# =============================================================================
# Polygon Schemas
# =============================================================================

class PolygonRequest(BaseModel):
    """Request schema for POST/PUT /api/polygons."""
    vertices: List[Tuple[float, float]]  # boundary order, e.g. [[50, 50], [750, 50], ...]
    eps: Optional[float] = None          # coordinate tolerance override
    debug: bool = False


class VertexInfo(BaseModel):
    """Per-vertex routing table, as produced by preprocessing."""
    id: int
    x: float
    y: float
    tags: List[str]                      # left/right endpoint, convex/reflex
    corresponding: Optional[int] = None
    neighbors: List[int]
    left_landmark: int
    right_landmark: int
    escape_bit: bool
    breakpoint: Optional[int] = None


class HorizontalEdgeInfo(BaseModel):
    left: int
    right: int
    y: float
    is_base: bool = False


class PolygonResponse(BaseModel):
    """Response schema for polygon endpoints."""
    success: bool
    polygon_id: str
    vertex_count: int
    vertices: List[VertexInfo]
    horizontal_edges: List[HorizontalEdgeInfo]
    visibility_edges: List[Tuple[int, int]]
    revision: int = 1


class SamplePolygonResponse(BaseModel):
    vertices: List[Tuple[float, float]]


# =============================================================================
# Routing Schemas
# =============================================================================

class StepRequest(BaseModel):
    """Request schema for POST /api/polygons/{id}/step."""
    current: int
    target: int
    visited: List[int] = []              # path so far, current included
    policy: Optional[DominatorPolicy] = None


class StepResponse(BaseModel):
    next_vertex: Optional[int] = None
    state: RouteState
    case: Optional[RoutingCase] = None


class RouteRequest(BaseModel):
    """Request schema for POST /api/polygons/{id}/route."""
    start: int
    target: int
    policy: Optional[DominatorPolicy] = None


class RouteResponse(BaseModel):
    path: List[int]
    state: RouteState
    hops: int
    message: str
    cases: List[RoutingCase] = []
