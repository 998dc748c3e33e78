#!/usr/bin/env python3
"""
Route between two vertices of a histogram from the command line.

    python scripts/route_histogram.py 14 6
    python scripts/route_histogram.py 0 10 --polygon my_histogram.json --policy midpoint --debug
    python scripts/route_histogram.py --table
"""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from histogram_routing import (  # noqa: E402
    SAMPLE_HISTOGRAM,
    DominatorPolicy,
    HistogramError,
    RouteState,
    load_polygon,
    preprocess,
    route,
)


def main():
    ap = argparse.ArgumentParser(
        description="Preprocess a histogram polygon and route a token between two vertices."
    )
    ap.add_argument("start", type=int, nargs="?", help="Start vertex index")
    ap.add_argument("target", type=int, nargs="?", help="Target vertex index")
    ap.add_argument("--polygon", help="Path to polygon JSON (default: built-in 16-vertex sample)")
    ap.add_argument("--policy", choices=[p.value for p in DominatorPolicy],
                    help="Dominator split policy (default: HISTOGRAM_DOMINATOR_POLICY)")
    ap.add_argument("--table", action="store_true", help="Print the per-vertex routing table as JSON")
    ap.add_argument("--debug", action="store_true", help="Trace preprocessing and every step")
    args = ap.parse_args()

    if not args.table and (args.start is None or args.target is None):
        ap.error("start and target are required unless --table is given")

    try:
        polygon = load_polygon(args.polygon) if args.polygon else SAMPLE_HISTOGRAM
        prepared = preprocess(polygon, debug=args.debug)
    except HistogramError as e:
        print(f"Invalid polygon: {e}", file=sys.stderr)
        sys.exit(2)

    if args.table:
        print(json.dumps(prepared.describe(), indent=2))
        if args.start is None:
            return

    try:
        result = route(prepared, args.start, args.target, policy=args.policy, debug=args.debug)
    except HistogramError as e:
        print(f"Invalid route request: {e}", file=sys.stderr)
        sys.exit(2)

    print(" -> ".join(str(v) for v in result.path))
    print(result.message)
    if result.state is not RouteState.ARRIVED:
        sys.exit(1)


if __name__ == "__main__":
    main()
