"""
Polygons Router - Histogram preprocessing and routing endpoints.

Endpoints:
    POST   /api/polygons              - Preprocess and store a histogram
    GET    /api/polygons/{id}         - Inspection table of a stored histogram
    PUT    /api/polygons/{id}         - Re-preprocess and replace a stored histogram
    DELETE /api/polygons/{id}         - Forget a stored histogram
    POST   /api/polygons/{id}/step    - One routing decision
    POST   /api/polygons/{id}/route   - Full route from start to target
"""

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from histogram_routing import (
    ConfigurationError,
    InvalidVertexError,
    PreparedPolygon,
    config,
    preprocess,
    route,
    step,
)
from histogram_routing.visibility import visibility_edges

from ..memory.polygon_store import get_polygon_store
from ..schemas import (
    PolygonRequest,
    PolygonResponse,
    RouteRequest,
    RouteResponse,
    StepRequest,
    StepResponse,
)

router = APIRouter(prefix="/api", tags=["polygons"])


# =============================================================================
# Helpers
# =============================================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


def _not_found(polygon_id: str) -> JSONResponse:
    print(f"[histogram_api] Unknown polygon {polygon_id}", flush=True)
    return _error(404, f"Polygon '{polygon_id}' not found")


def _prepare(req: PolygonRequest) -> PreparedPolygon:
    return preprocess(req.vertices, eps=req.eps, debug=req.debug or config.DEBUG)


def _polygon_response(polygon_id: str, prepared: PreparedPolygon, revision: int) -> Dict[str, Any]:
    table = prepared.describe()
    return PolygonResponse(
        success=True,
        polygon_id=polygon_id,
        vertex_count=len(prepared),
        vertices=table["vertices"],
        horizontal_edges=table["horizontal_edges"],
        visibility_edges=visibility_edges(prepared.neighbors),
        revision=revision,
    ).model_dump()


# =============================================================================
# Polygon lifecycle
# =============================================================================

@router.post("/polygons", response_model=PolygonResponse)
def create_polygon(req: PolygonRequest):
    """Preprocess a boundary and store the result."""
    try:
        prepared = _prepare(req)
    except ConfigurationError as e:
        print(f"[histogram_api] Rejected polygon: {e}", flush=True)
        return _error(422, str(e))

    polygon_id = get_polygon_store().create(prepared)
    print(f"[histogram_api] Stored polygon {polygon_id} ({len(prepared)} vertices)", flush=True)
    return _polygon_response(polygon_id, prepared, revision=1)


@router.get("/polygons/{polygon_id}", response_model=PolygonResponse)
def get_polygon(polygon_id: str):
    """Per-vertex routing tables of a stored polygon."""
    record = get_polygon_store().get_record(polygon_id)
    if record is None:
        return _not_found(polygon_id)
    return _polygon_response(polygon_id, record.prepared, revision=record.rev)


@router.put("/polygons/{polygon_id}", response_model=PolygonResponse)
def replace_polygon(polygon_id: str, req: PolygonRequest):
    """
    Re-preprocess and swap in a new boundary.

    Preprocessing runs before the store is touched, so a rejected boundary
    leaves the stored polygon as it was.
    """
    store = get_polygon_store()
    if store.get(polygon_id) is None:
        return _not_found(polygon_id)

    try:
        prepared = _prepare(req)
    except ConfigurationError as e:
        print(f"[histogram_api] Rejected replacement for {polygon_id}: {e}", flush=True)
        return _error(422, str(e))

    revision = store.replace(polygon_id, prepared)
    if revision is None:
        # Deleted while we were preprocessing
        return _not_found(polygon_id)

    print(f"[histogram_api] Replaced polygon {polygon_id} (rev {revision})", flush=True)
    return _polygon_response(polygon_id, prepared, revision=revision)


@router.delete("/polygons/{polygon_id}")
def delete_polygon(polygon_id: str):
    if not get_polygon_store().delete(polygon_id):
        return _not_found(polygon_id)
    print(f"[histogram_api] Deleted polygon {polygon_id}", flush=True)
    return {"success": True, "polygon_id": polygon_id}


# =============================================================================
# Routing
# =============================================================================

@router.post("/polygons/{polygon_id}/step", response_model=StepResponse)
def step_polygon(polygon_id: str, req: StepRequest):
    """
    One routing decision from req.current toward req.target.

    The caller owns the route state: it sends the path walked so far as
    `visited` and appends next_vertex only on ROUTING/ARRIVED.
    """
    prepared = get_polygon_store().get(polygon_id)
    if prepared is None:
        return _not_found(polygon_id)

    try:
        result = step(
            prepared, req.current, req.target,
            visited=req.visited, policy=req.policy, debug=config.DEBUG,
        )
    except InvalidVertexError as e:
        print(f"[histogram_api] Bad step request for {polygon_id}: {e}", flush=True)
        return _error(400, str(e))

    return StepResponse(
        next_vertex=result.next_vertex,
        state=result.state,
        case=result.case,
    ).model_dump()


@router.post("/polygons/{polygon_id}/route", response_model=RouteResponse)
def route_polygon(polygon_id: str, req: RouteRequest):
    """Drive step() from req.start until a terminal state."""
    prepared = get_polygon_store().get(polygon_id)
    if prepared is None:
        return _not_found(polygon_id)

    try:
        result = route(prepared, req.start, req.target, policy=req.policy, debug=config.DEBUG)
    except InvalidVertexError as e:
        print(f"[histogram_api] Bad route request for {polygon_id}: {e}", flush=True)
        return _error(400, str(e))

    print(f"[histogram_api] Route {req.start} -> {req.target} on {polygon_id}: {result.message}", flush=True)
    return RouteResponse(
        path=result.path,
        state=result.state,
        hops=result.hops,
        message=result.message,
        cases=result.cases,
    ).model_dump()
