"""
Constants and configuration settings for histogram preprocessing and routing.
Every value can be overridden through the environment.
"""
import os

# Coordinate tolerance for boundary, axis-alignment and collinearity checks
EPSILON = float(os.environ.get("HISTOGRAM_EPSILON", "1e-9"))

# A histogram needs at least a base and one opposite edge
MIN_VERTICES = 4

# How the dominator descent splits nd/fd when nd has no breakpoint:
# "distance" (closer to target wins) or "midpoint" (side of the nd/fd midpoint)
DOMINATOR_POLICIES = ("distance", "midpoint")
DEFAULT_DOMINATOR_POLICY = os.environ.get("HISTOGRAM_DOMINATOR_POLICY", "distance").lower()
if DEFAULT_DOMINATOR_POLICY not in DOMINATOR_POLICIES:
    raise ValueError(
        f"HISTOGRAM_DOMINATOR_POLICY must be one of {DOMINATOR_POLICIES}, "
        f"got {DEFAULT_DOMINATOR_POLICY!r}"
    )

# Print preprocessing / routing traces from the HTTP service
DEBUG = os.environ.get("HISTOGRAM_DEBUG", "0") == "1"

# Maximum number of prepared polygons kept by the in-memory store
MAX_POLYGONS = int(os.environ.get("HISTOGRAM_MAX_POLYGONS", "256"))
