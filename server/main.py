"""
Histogram Routing API
=====================
Preprocess histogram polygons once, then route between their vertices
with purely local decisions.

Run with:
    uvicorn server.main:app --reload
"""

from dotenv import load_dotenv

# Environment must be loaded before histogram_routing.config is imported
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from histogram_routing import SAMPLE_HISTOGRAM, config

from .routers import polygons_router
from .schemas import SamplePolygonResponse

app = FastAPI(title="Histogram Routing API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(polygons_router)

print(
    f"[histogram_api] Started (policy={config.DEFAULT_DOMINATOR_POLICY}, "
    f"eps={config.EPSILON}, max_polygons={config.MAX_POLYGONS}, debug={config.DEBUG})",
    flush=True,
)


# ------------------------- routes ----------------------------------


@app.get("/")
def index():
    return {
        "name": "Histogram Routing API",
        "endpoints": [
            "GET /health",
            "GET /api/sample",
            "POST /api/polygons",
            "GET /api/polygons/{id}",
            "PUT /api/polygons/{id}",
            "DELETE /api/polygons/{id}",
            "POST /api/polygons/{id}/step",
            "POST /api/polygons/{id}/route",
        ],
    }


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/sample", response_model=SamplePolygonResponse)
def sample_polygon():
    """The 16-vertex demo histogram, ready to POST to /api/polygons."""
    return {"vertices": [list(p) for p in SAMPLE_HISTOGRAM]}
