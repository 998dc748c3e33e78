"""
Memory module for the Histogram Routing service.

Provides storage for preprocessed polygons:
- InMemoryPolygonStore: lock-guarded, size-capped map of PreparedPolygon values
- get_polygon_store / reset_polygon_store: process-wide singleton access
"""

from .polygon_store import (
    PolygonRecord,
    InMemoryPolygonStore,
    get_polygon_store,
    reset_polygon_store,
)

__all__ = [
    "PolygonRecord",
    "InMemoryPolygonStore",
    "get_polygon_store",
    "reset_polygon_store",
]
