"""
Sample histograms and polygon loading helpers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Union

from .classifier import normalize_polygon
from .models import ConfigurationError, Point

# Base 0-1 along the top, seven bars hanging down (depths 550, 200, 350,
# 150, 450, 250, 550 from left to right)
SAMPLE_HISTOGRAM: List[Point] = [
    (50, 50), (750, 50), (750, 550),
    (650, 550), (650, 250), (550, 250),
    (550, 450), (450, 450), (450, 150),
    (350, 150), (350, 350), (250, 350),
    (250, 200), (150, 200), (150, 550),
    (50, 550),
]

# Smallest valid histogram
RECTANGLE: List[Point] = [(0, 0), (10, 0), (10, 5), (0, 5)]


def polygon_from_payload(payload: Any) -> List[Point]:
    """
    Extract a vertex list from decoded JSON.

    Accepts a bare list of [x, y] pairs / {x, y} objects, or an object with
    a "vertices" (or "polygon") list of either.
    """
    if isinstance(payload, dict):
        for key in ("vertices", "polygon"):
            if key in payload:
                payload = payload[key]
                break
        else:
            raise ConfigurationError("Polygon payload has no 'vertices' list")
    if not isinstance(payload, list):
        raise ConfigurationError(f"Polygon payload must be a list, got {type(payload).__name__}")

    return normalize_polygon(payload)


def load_polygon(path: Union[str, Path]) -> List[Point]:
    """Read a polygon from a JSON file (ConfigurationError if unreadable)."""
    try:
        with open(path, "r") as f:
            payload = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read polygon file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Polygon file {path} is not valid JSON: {e}") from e
    return polygon_from_payload(payload)
