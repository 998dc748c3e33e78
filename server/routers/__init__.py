"""
API Routers for the Histogram Routing service.

Routers:
    - polygons: preprocessing, inspection and routing endpoints
"""

from .polygons import router as polygons_router

__all__ = ["polygons_router"]
