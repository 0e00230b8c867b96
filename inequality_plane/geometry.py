"""Planar geometry for linear inequalities.

Every function here is pure and works on anything carrying ``a, b, c`` and
``operator`` (an :class:`~inequality_plane.model.Inequality` or a bare
:class:`~inequality_plane.model.LinearForm`). All "is this zero / on the line"
judgements share :data:`~inequality_plane.constants.EPSILON`. Degenerate input
(parallel lines, zero normals) yields ``None`` instead of raising.
"""
from __future__ import annotations

import logging
import math
from itertools import combinations
from typing import Iterable, Sequence, Union

from .constants import BIG, BUTTON_CONFIG, EPSILON
from .model import Inequality, LinearForm, Operator, Point, Side, Solved

__all__ = [
    "evaluate",
    "satisfies",
    "satisfies_all",
    "boundary_points",
    "intersect",
    "accepts",
    "feasible_vertices",
    "feasible_vertex_lines",
    "unit_normals",
    "midpoint",
    "region_anchor",
    "side_satisfies",
    "correct_side",
    "fill_direction",
    "half_plane_polygon",
    "distance_to_line",
    "same_inequality",
]

logger = logging.getLogger(__name__)

Linear = Union[Inequality, LinearForm]


def evaluate(eq: Linear, p: Point) -> float:
    return eq.a * p.x + eq.b * p.y + eq.c


def satisfies(eq: Linear, p: Point) -> bool:
    """Return ``True`` when *p* lies in the solution set of *eq*.

    On the boundary strict operators fail while ``<=``, ``>=`` and ``=`` hold.
    Off the boundary ``=`` never holds.
    """
    v = evaluate(eq, p)
    op = eq.operator
    if abs(v) < EPSILON:
        return not op.strict
    if op.less_type:
        return v < 0
    if op.greater_type:
        return v > 0
    return False


def satisfies_all(inequalities: Iterable[Linear], p: Point) -> bool:
    return all(satisfies(eq, p) for eq in inequalities)


def boundary_points(eq: Linear) -> tuple[Point, Point]:
    """Two far-apart points on ``a·x + b·y + c = 0``.

    ``y`` is solved at ``x = ±BIG``; vertical lines (``|b| < EPSILON``) solve
    ``x`` at ``y = ±BIG`` instead.
    """
    if abs(eq.b) >= EPSILON:
        return (
            Point(-BIG, (-eq.c - eq.a * -BIG) / eq.b),
            Point(BIG, (-eq.c - eq.a * BIG) / eq.b),
        )
    x = -eq.c / eq.a
    return Point(x, -BIG), Point(x, BIG)


def intersect(eq1: Linear, eq2: Linear) -> Point | None:
    """Crossing point of two boundary lines by Cramer's rule.

    ``None`` means parallel or coincident lines; callers must not retry.
    """
    det = eq1.a * eq2.b - eq2.a * eq1.b
    if abs(det) < EPSILON:
        return None
    x = (eq1.b * eq2.c - eq2.b * eq1.c) / det
    y = (eq2.a * eq1.c - eq1.a * eq2.c) / det
    return Point(x + 0.0, y + 0.0)


def midpoint(eq: Linear) -> Point:
    p1, p2 = boundary_points(eq)
    return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def unit_normals(eq: Linear) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """Return ``(n, -n)`` where ``n`` is the left normal of the boundary direction.

    The direction runs from the first to the second :func:`boundary_points`.
    """
    p1, p2 = boundary_points(eq)
    dx, dy = p2.x - p1.x, p2.y - p1.y
    length = math.hypot(dx, dy)
    if length < EPSILON:
        return None
    nx, ny = -dy / length, dx / length
    return (nx, ny), (-nx, -ny)


def region_anchor(eq: Linear, side: Side, offset: float = BUTTON_CONFIG["offset"]) -> Point | None:
    """Point *offset* math units from the line midpoint on *side*.

    ``REGION_A`` sits at ``midpoint - n·offset`` and ``REGION_B`` at
    ``midpoint + n·offset``.
    """
    normals = unit_normals(eq)
    if normals is None:
        return None
    (nx, ny), _ = normals
    mid = midpoint(eq)
    return Point(mid.x + side.sign * nx * offset, mid.y + side.sign * ny * offset)


def side_satisfies(eq: Linear, side: Side) -> bool:
    anchor = region_anchor(eq, side)
    return anchor is not None and satisfies(eq, anchor)


def correct_side(eq: Linear) -> Side | None:
    """The side whose region control satisfies *eq*; ``None`` for equations."""
    for side in (Side.REGION_A, Side.REGION_B):
        if side_satisfies(eq, side):
            return side
    return None


def _chosen_side(eq: Linear) -> Side | None:
    state = getattr(eq, "state", None)
    if isinstance(state, Solved):
        return state.side
    return None


def fill_direction(eq: Linear) -> tuple[float, float] | None:
    """Unit vector pointing into the half-plane that should be shaded.

    A chosen side wins; before a choice the satisfying normal is used.
    Equations have no fill.
    """
    if eq.operator is Operator.EQ:
        return None
    normals = unit_normals(eq)
    if normals is None:
        return None
    n, opposite = normals
    side = _chosen_side(eq)
    if side is not None:
        return n if side is Side.REGION_B else opposite
    mid = midpoint(eq)
    probe = Point(mid.x + n[0], mid.y + n[1])
    return n if satisfies(eq, probe) else opposite


def half_plane_polygon(eq: Linear) -> list[Point] | None:
    """Boundary segment swept ``BIG`` units along :func:`fill_direction`."""
    direction = fill_direction(eq)
    if direction is None:
        return None
    dx, dy = direction
    p1, p2 = boundary_points(eq)
    return [
        p1,
        p2,
        Point(p2.x + dx * BIG, p2.y + dy * BIG),
        Point(p1.x + dx * BIG, p1.y + dy * BIG),
    ]


def accepts(eq: Linear, p: Point) -> bool:
    """Membership of *p* in the side the learner accepted for *eq*.

    The chosen side's open half-plane plus, for non-strict operators, the
    boundary. Equations accept the boundary only. Without a choice this is
    :func:`satisfies`.
    """
    state = getattr(eq, "state", None)
    if not isinstance(state, Solved):
        return satisfies(eq, p)
    v = evaluate(eq, p)
    if abs(v) < EPSILON:
        return not eq.operator.strict
    if state.side is None or eq.operator is Operator.EQ:
        return False
    normals = unit_normals(eq)
    if normals is None:
        return False
    (nx, ny), _ = normals
    # evaluate() along +n from the midpoint has the sign of a·nx + b·ny
    side_value = state.side.sign * (eq.a * nx + eq.b * ny)
    return v * side_value > 0


def feasible_vertex_lines(
    inequalities: Sequence[Inequality],
) -> list[tuple[Point, tuple[str, str]]]:
    """Vertices of the accepted region with the labels of the lines forming them.

    Only solved inequalities take part. A crossing is kept when every other
    solved inequality accepts it; crossings within EPSILON of one already
    found are dropped.
    """
    solved = [eq for eq in inequalities if eq.solved]
    found: list[tuple[Point, tuple[str, str]]] = []
    for (i, eq1), (j, eq2) in combinations(enumerate(solved), 2):
        p = intersect(eq1, eq2)
        if p is None:
            logger.debug("[inequality-plane] %s and %s do not cross", eq1.label, eq2.label)
            continue
        others = (eq for k, eq in enumerate(solved) if k not in (i, j))
        if not all(accepts(eq, p) for eq in others):
            continue
        if any(abs(p.x - q.x) < EPSILON and abs(p.y - q.y) < EPSILON for q, _ in found):
            continue
        found.append((p, (eq1.label, eq2.label)))
    return found


def feasible_vertices(inequalities: Sequence[Inequality]) -> list[Point]:
    return [p for p, _ in feasible_vertex_lines(inequalities)]


def distance_to_line(eq: Linear, p: Point) -> float:
    norm = math.hypot(eq.a, eq.b)
    if norm < EPSILON:
        return math.inf
    return abs(evaluate(eq, p)) / norm


def _canonical(eq: Linear) -> tuple[float, float, float, Operator]:
    # unit normal with the first non-zero coefficient positive
    norm = math.hypot(eq.a, eq.b)
    a, b, c = eq.a / norm, eq.b / norm, eq.c / norm
    op = eq.operator
    lead = a if abs(a) >= EPSILON else b
    if lead < 0:
        a, b, c, op = -a, -b, -c, op.reversed()
    return a, b, c, op


def same_inequality(eq1: Linear, eq2: Linear) -> bool:
    """``True`` when both describe the same solution set up to EPSILON.

    Coefficients are compared after scaling to a unit normal, so ``x + y > 1``
    matches ``2x + 2y - 2 > 0`` and ``-x - y + 1 < 0``.
    """
    a1, b1, c1, op1 = _canonical(eq1)
    a2, b2, c2, op2 = _canonical(eq2)
    return (
        op1 is op2
        and abs(a1 - a2) < EPSILON
        and abs(b1 - b2) < EPSILON
        and abs(c1 - c2) < EPSILON
    )
