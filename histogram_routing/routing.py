"""
Local routing in a prepared histogram.

Each step looks only at the current vertex's table and the fixed target:

1. Direct: the target is r-visible -> go there.
2. Escape: the target's index lies outside [l(s), r(s)] -> move to the
   landmark the escape bit names, which leads out of the pocket.
3. Dominator descent: otherwise bracket the target's x between the near
   dominator nd (rightmost visible vertex with x <= t.x) and the far
   dominator fd (leftmost with x >= t.x) and use nd's breakpoint to decide
   which side the target hangs from.

step() is a pure function of (prepared, current, target, visited). The only
history is the caller's visited list, used to refuse revisits.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from . import config
from .geometry import distance
from .models import (
    DominatorPolicy,
    PreparedPolygon,
    RouteResult,
    RouteState,
    RoutingCase,
    StepResult,
    Vertex,
    VertexId,
)

PolicyArg = Union[DominatorPolicy, str, None]


def resolve_policy(policy: PolicyArg = None) -> DominatorPolicy:
    """Map None / a policy name to a DominatorPolicy (ValueError if unknown)."""
    if policy is None:
        policy = config.DEFAULT_DOMINATOR_POLICY
    if isinstance(policy, DominatorPolicy):
        return policy
    return DominatorPolicy(str(policy).lower())


def _between(x: float, a: float, b: float, eps: float) -> bool:
    return min(a, b) - eps <= x <= max(a, b) + eps


# ---------- Dominators ----------

def find_dominators(
    candidates: Sequence[Vertex],
    target: Vertex,
    eps: float,
) -> Tuple[Optional[Vertex], Optional[Vertex]]:
    """
    Near and far dominators of target among candidates.

    nd: largest x not exceeding target.x; fd: smallest x not below it.
    Ties on x go to the vertex closest to the base (smaller y).
    """
    left = [v for v in candidates if v.x <= target.x + eps]
    right = [v for v in candidates if v.x >= target.x - eps]

    nd = None
    if left:
        edge_x = max(v.x for v in left)
        nd = min((v for v in left if abs(v.x - edge_x) <= eps), key=lambda v: (v.y, v.id))

    fd = None
    if right:
        edge_x = min(v.x for v in right)
        fd = min((v for v in right if abs(v.x - edge_x) <= eps), key=lambda v: (v.y, v.id))

    return nd, fd


def nearest_to(candidates: Iterable[Vertex], target: Vertex) -> Optional[Vertex]:
    """Candidate closest to target; ties to smaller y, then smaller id."""
    best = None
    best_key = None
    for v in candidates:
        key = (distance(v.point, target.point), v.y, v.id)
        if best_key is None or key < best_key:
            best, best_key = v, key
    return best


def choose_dominator(
    nd: Vertex,
    fd: Vertex,
    target: Vertex,
    breakpoint: Optional[Vertex],
    corresponding: Optional[Vertex],
    policy: DominatorPolicy,
    eps: float,
) -> Vertex:
    """
    Split the dominated interval between nd and fd.

    With a breakpoint b on nd: targets between nd and b go to nd, targets
    between b's partner and fd go to fd. Without one, the policy decides.
    """
    if nd.id == fd.id:
        return nd

    if breakpoint is not None and corresponding is not None:
        if _between(target.x, nd.x, breakpoint.x, eps):
            return nd
        if _between(target.x, corresponding.x, fd.x, eps):
            return fd
        # Only reachable with a malformed breakpoint
        return min((nd, fd), key=lambda v: (abs(v.x - target.x), v.y, v.id))

    if policy is DominatorPolicy.MIDPOINT:
        return nd if target.x <= (nd.x + fd.x) / 2.0 + eps else fd

    if distance(nd.point, target.point) <= distance(fd.point, target.point):
        return nd
    return fd


# ---------- Single step ----------

def next_hop(
    prepared: PreparedPolygon,
    current: VertexId,
    target: VertexId,
    policy: DominatorPolicy,
    debug: bool = False,
) -> Tuple[Optional[VertexId], Optional[RoutingCase]]:
    """Candidate next vertex from current toward target, and the case used."""
    neighbors = prepared.neighbors[current]
    if not neighbors:
        return None, None

    if target in neighbors:
        return target, RoutingCase.DIRECT

    left = prepared.left_landmarks[current]
    right = prepared.right_landmarks[current]
    if left is None or right is None:
        return None, None

    lo, hi = min(left, right), max(left, right)
    if not lo <= target <= hi:
        if debug:
            print(f"    t={target} outside I({current})=[{lo}, {hi}], escaping")
        return (left if prepared.escape_bits[current] else right), RoutingCase.ESCAPE

    vertices = prepared.vertices
    eps = prepared.geometry.eps if prepared.geometry is not None else config.EPSILON
    t = vertices[target]
    candidates = [vertices[i] for i in sorted(neighbors)]
    nd, fd = find_dominators(candidates, t, eps)

    if nd is None or fd is None:
        fallback = nearest_to(candidates, t)
        if debug:
            print(f"    dominator missing (nd={nd and nd.id}, fd={fd and fd.id}), nearest={fallback.id}")
        return fallback.id, RoutingCase.FALLBACK

    b_id = prepared.breakpoints[nd.id]
    breakpoint = vertices[b_id] if b_id is not None else None
    corresponding = None
    if breakpoint is not None and breakpoint.corresponding is not None:
        corresponding = vertices[breakpoint.corresponding]

    chosen = choose_dominator(nd, fd, t, breakpoint, corresponding, policy, eps)
    if debug:
        print(f"    nd={nd.id} fd={fd.id} br(nd)={b_id} -> {chosen.id}")
    return chosen.id, RoutingCase.DOMINATOR


def step(
    prepared: PreparedPolygon,
    current: VertexId,
    target: VertexId,
    visited: Sequence[VertexId] = (),
    policy: PolicyArg = None,
    debug: bool = False,
) -> StepResult:
    """
    One routing decision.

    Returns ARRIVED without consulting any table when current == target.
    Otherwise the candidate hop is checked against visited: a repeat gives
    LOOP_DETECTED (next_vertex is the rejected candidate), no candidate
    gives STUCK, reaching the target gives ARRIVED, anything else ROUTING.
    """
    prepared.check_vertex(current)
    prepared.check_vertex(target)

    if current == target:
        return StepResult(next_vertex=None, state=RouteState.ARRIVED)

    nxt, case = next_hop(prepared, current, target, resolve_policy(policy), debug=debug)

    if nxt is None:
        result = StepResult(next_vertex=None, state=RouteState.STUCK)
    elif nxt in set(visited):
        result = StepResult(next_vertex=nxt, state=RouteState.LOOP_DETECTED, case=case)
    elif nxt == target:
        result = StepResult(next_vertex=nxt, state=RouteState.ARRIVED, case=case)
    else:
        result = StepResult(next_vertex=nxt, state=RouteState.ROUTING, case=case)

    if debug:
        print(f"  step {current} -> {result.next_vertex} [{case and case.value}] {result.state.value}")
    return result


# ---------- Route state ----------

class RouteSession:
    """
    Caller-owned route state: current vertex, fixed target, path so far.

    advance() performs exactly one step and extends the path on success.
    """

    def __init__(
        self,
        prepared: PreparedPolygon,
        start: VertexId,
        target: VertexId,
        policy: PolicyArg = None,
    ):
        self.prepared = prepared
        self.target = prepared.check_vertex(target)
        self.path: List[VertexId] = [prepared.check_vertex(start)]
        self.cases: List[RoutingCase] = []
        self.policy = resolve_policy(policy)
        self.state = RouteState.ARRIVED if start == target else RouteState.ROUTING

    @property
    def current(self) -> VertexId:
        return self.path[-1]

    def advance(self, debug: bool = False) -> StepResult:
        if self.state.is_terminal:
            return StepResult(next_vertex=None, state=self.state)

        result = step(
            self.prepared, self.current, self.target,
            visited=self.path, policy=self.policy, debug=debug,
        )
        if result.state in (RouteState.ROUTING, RouteState.ARRIVED) and result.next_vertex is not None:
            self.path.append(result.next_vertex)
            self.cases.append(result.case)
        self.state = result.state
        return result

    def result(self) -> RouteResult:
        return RouteResult(path=list(self.path), state=self.state, cases=list(self.cases))


def route(
    prepared: PreparedPolygon,
    start: VertexId,
    target: VertexId,
    policy: PolicyArg = None,
    debug: bool = False,
) -> RouteResult:
    """
    Drive step() from start until a terminal state.

    Terminates within n - 1 hops: every accepted hop is a new vertex.
    """
    session = RouteSession(prepared, start, target, policy=policy)
    if debug:
        print(f"Routing {start} -> {target} ({session.policy.value} policy)")
    while not session.state.is_terminal:
        session.advance(debug=debug)
    result = session.result()
    if debug:
        print(f"  {result.message} Path: {result.path}")
    return result
