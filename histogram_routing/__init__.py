"""
Histogram Routing - compact local routing in histogram polygons

Every vertex of a histogram gets a small routing table (visible neighbors,
two landmarks, an escape bit and a breakpoint); a token then reaches any
target by asking only the current vertex where to go next.

Key exports:
- preprocess: boundary -> PreparedPolygon (raises ConfigurationError)
- step: one routing decision from the current vertex
- route / RouteSession: drive step() from start to target
"""
from .models import (
    ConfigurationError,
    DominatorPolicy,
    HistogramError,
    HorizontalEdge,
    InvalidVertexError,
    PreparedPolygon,
    RouteResult,
    RouteState,
    RoutingCase,
    StepResult,
    Vertex,
)
from .preprocess import preprocess
from .routing import RouteSession, route, step
from .samples import SAMPLE_HISTOGRAM, load_polygon, polygon_from_payload

__all__ = [
    'preprocess',
    'step',
    'route',
    'RouteSession',
    'PreparedPolygon',
    'Vertex',
    'HorizontalEdge',
    'StepResult',
    'RouteResult',
    'RouteState',
    'RoutingCase',
    'DominatorPolicy',
    'HistogramError',
    'ConfigurationError',
    'InvalidVertexError',
    'SAMPLE_HISTOGRAM',
    'load_polygon',
    'polygon_from_payload',
]
