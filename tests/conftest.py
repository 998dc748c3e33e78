"""
Pytest configuration and fixtures for Histogram Routing tests.

Fixtures provide common test data and setup for:
- Polygons (the 16-vertex sample histogram, a rectangle)
- Prepared polygons
- API test client with a fresh polygon store
"""

import os
import sys
from pathlib import Path

import pytest

# Ensure project root is in path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Set PYTHONPATH for subprocesses
os.environ["PYTHONPATH"] = str(PROJECT_ROOT)


# =============================================================================
# Polygon Fixtures
# =============================================================================

@pytest.fixture
def sample_polygon():
    """16-vertex histogram: base 0-1 at y=50, seven bars hanging down."""
    from histogram_routing import SAMPLE_HISTOGRAM
    return list(SAMPLE_HISTOGRAM)


@pytest.fixture
def rectangle():
    """Smallest valid histogram: every vertex sees every other."""
    from histogram_routing.samples import RECTANGLE
    return list(RECTANGLE)


@pytest.fixture
def clockwise_sample(sample_polygon):
    """The sample traversed in the opposite direction, still starting at vertex 0."""
    return [sample_polygon[0]] + sample_polygon[:0:-1]


# =============================================================================
# Prepared Polygon Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def prepared_sample():
    """Preprocessed sample histogram (immutable, shared by all tests)."""
    from histogram_routing import SAMPLE_HISTOGRAM, preprocess
    return preprocess(SAMPLE_HISTOGRAM)


@pytest.fixture
def prepared_rectangle(rectangle):
    from histogram_routing import preprocess
    return preprocess(rectangle)


# =============================================================================
# API Test Fixtures
# =============================================================================

@pytest.fixture
def test_client():
    """FastAPI test client backed by an empty polygon store."""
    from fastapi.testclient import TestClient
    from server.main import app
    from server.memory.polygon_store import reset_polygon_store

    reset_polygon_store()
    yield TestClient(app)
    reset_polygon_store()


# =============================================================================
# Test Data Paths
# =============================================================================

@pytest.fixture
def polygon_file(tmp_path, sample_polygon):
    """Sample histogram written as a {"vertices": [{x, y}, ...]} JSON file."""
    import json

    path = tmp_path / "histogram.json"
    path.write_text(json.dumps({"vertices": [{"x": x, "y": y} for x, y in sample_polygon]}))
    return path
