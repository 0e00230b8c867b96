"""Build the ordered list of draw operations for one frame.

Nothing here touches a display surface: :func:`build_scene` returns plain
records in screen coordinates and :mod:`inequality_plane.render` turns them
into pixels. Paint order is background → grid → axes → per inequality (fill,
boundary, label) → region controls → vertices → checked points.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from .constants import (
    BUTTON_CONFIG,
    FILL_ALPHA,
    FILL_ALPHA_HIGHLIGHT,
    STATUS_COLORS,
    THEME,
    VERTEX_HIT_RADIUS,
)
from .geometry import boundary_points, half_plane_polygon, region_anchor, side_satisfies
from .model import (
    CheckedPoint,
    Inequality,
    IntersectionPoint,
    Point,
    PointStatus,
    ScreenPoint,
    Side,
    SolutionType,
)
from .transform import ViewTransform

__all__ = [
    "Rect",
    "Segment",
    "Polygon",
    "Label",
    "Marker",
    "RegionControl",
    "DrawOp",
    "build_scene",
    "region_controls",
    "vertex_at",
    "control_at",
]

REGION_TEXT = {Side.REGION_A: "Region 1", Side.REGION_B: "Region 2"}


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    layer: str = "background"


@dataclass(frozen=True, slots=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0
    dashed: bool = False
    layer: str = "grid"


@dataclass(frozen=True, slots=True)
class Polygon:
    points: tuple[tuple[float, float], ...]
    color: str
    alpha: float = 1.0
    layer: str = "fill"


@dataclass(frozen=True, slots=True)
class Label:
    x: float
    y: float
    text: str
    color: str
    size: float = 12.0
    ha: str = "center"
    va: str = "center"
    italic: bool = False
    layer: str = "label"


@dataclass(frozen=True, slots=True)
class Marker:
    x: float
    y: float
    radius: float
    fill: str
    edge: str | None = None
    layer: str = "vertex"


@dataclass(frozen=True, slots=True)
class RegionControl:
    """A clickable box offered while an inequality is unsolved."""

    label: str
    side: Side
    x: float
    y: float
    width: float
    height: float
    color: str
    satisfies: bool
    layer: str = "region"

    @property
    def text(self) -> str:
        return REGION_TEXT[self.side]

    def contains(self, s: ScreenPoint) -> bool:
        return self.x <= s.x <= self.x + self.width and self.y <= s.y <= self.y + self.height


DrawOp = Union[Rect, Segment, Polygon, Label, Marker, RegionControl]


# ----------------------------------------------------------------------
# helpers
def _clip(
    s1: ScreenPoint, s2: ScreenPoint, width: float, height: float
) -> tuple[ScreenPoint, ScreenPoint] | None:
    """Liang–Barsky clip of the segment ``s1 → s2`` to the viewport."""
    dx, dy = s2.x - s1.x, s2.y - s1.y
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, s1.x), (dx, width - s1.x), (-dy, s1.y), (dy, height - s1.y)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            t0 = max(t0, t)
        else:
            t1 = min(t1, t)
        if t0 > t1:
            return None
    return (
        ScreenPoint(s1.x + t0 * dx, s1.y + t0 * dy),
        ScreenPoint(s1.x + t1 * dx, s1.y + t1 * dy),
    )


def _grid_and_axes(view: ViewTransform) -> list[DrawOp]:
    ops: list[DrawOp] = []
    w, h = view.width, view.height
    xmin, xmax, ymin, ymax = view.visible_bounds()
    xs = range(math.ceil(xmin), math.floor(xmax) + 1)
    ys = range(math.ceil(ymin), math.floor(ymax) + 1)

    for i in xs:
        sx = view.origin.x + i * view.zoom
        ops.append(Segment(sx, 0.0, sx, h, THEME["grid"], 1.0, layer="grid"))
    for j in ys:
        sy = view.origin.y - j * view.zoom
        ops.append(Segment(0.0, sy, w, sy, THEME["grid"], 1.0, layer="grid"))

    ox, oy = view.origin.x, view.origin.y
    axis = THEME["axis"]
    if 0 <= oy <= h:
        ops.append(Segment(0.0, oy, w, oy, axis, 2.0, layer="axis"))
        ops.append(Polygon(((w, oy), (w - 10, oy - 5), (w - 10, oy + 5)), axis, layer="axis"))
        ops.append(Label(w - 10, oy - 15, "x", axis, 14.0, italic=True, layer="axis"))
        for i in xs:
            if i != 0:
                ops.append(
                    Label(ox + i * view.zoom, oy + 5, str(i), axis, 10.0, va="top", layer="axis")
                )
    if 0 <= ox <= w:
        ops.append(Segment(ox, h, ox, 0.0, axis, 2.0, layer="axis"))
        ops.append(Polygon(((ox, 0.0), (ox - 5, 10.0), (ox + 5, 10.0)), axis, layer="axis"))
        ops.append(Label(ox + 15, 10.0, "y", axis, 14.0, italic=True, layer="axis"))
        for j in ys:
            if j != 0:
                ops.append(
                    Label(ox - 5, oy - j * view.zoom, str(j), axis, 10.0, ha="right", layer="axis")
                )
    if 0 <= ox <= w and 0 <= oy <= h:
        ops.append(Label(ox - 10, oy + 12, "O", axis, 12.0, italic=True, layer="axis"))
    return ops


def _inequality_ops(eq: Inequality, view: ViewTransform, emphasised: bool) -> list[DrawOp]:
    ops: list[DrawOp] = []
    side_known = eq.solution_type is not SolutionType.NONE
    if side_known:
        polygon = half_plane_polygon(eq)
        if polygon is not None:
            sx, sy = view.to_screen_array([p.x for p in polygon], [p.y for p in polygon])
            pts = tuple(zip(sx.tolist(), sy.tolist()))
            alpha = FILL_ALPHA_HIGHLIGHT if emphasised else FILL_ALPHA
            ops.append(Polygon(pts, eq.color, alpha, layer="fill"))

    p1, p2 = boundary_points(eq)
    s1, s2 = view.to_screen(p1), view.to_screen(p2)
    width = 3.0 if emphasised else 2.0
    ops.append(
        Segment(s1.x, s1.y, s2.x, s2.y, eq.color, width, eq.operator.strict, layer="boundary")
    )

    visible = _clip(s1, s2, view.width, view.height)
    if visible is not None:
        near, far = visible
        # towards the second boundary point, kept off the viewport edge
        lx = near.x + 0.85 * (far.x - near.x)
        ly = near.y + 0.85 * (far.y - near.y)
        ops.append(
            Label(lx + 5, ly - 5, eq.label, eq.color, 14.0, ha="left", va="bottom", italic=True)
        )
    return ops


def region_controls(inequalities: Iterable[Inequality], view: ViewTransform) -> list[RegionControl]:
    """The two side-choice controls for every unsolved inequality."""
    bw, bh = BUTTON_CONFIG["width"], BUTTON_CONFIG["height"]
    controls: list[RegionControl] = []
    for eq in inequalities:
        if eq.solved:
            continue
        for side in (Side.REGION_A, Side.REGION_B):
            anchor = region_anchor(eq, side)
            if anchor is None:
                continue
            s = view.to_screen(anchor)
            controls.append(
                RegionControl(
                    label=eq.label,
                    side=side,
                    x=s.x - bw / 2,
                    y=s.y - bh / 2,
                    width=bw,
                    height=bh,
                    color=eq.color,
                    satisfies=side_satisfies(eq, side),
                )
            )
    return controls


def control_at(controls: Sequence[RegionControl], s: ScreenPoint) -> RegionControl | None:
    # later controls are painted on top
    for control in reversed(controls):
        if control.contains(s):
            return control
    return None


def vertex_at(
    vertices: Sequence[IntersectionPoint],
    view: ViewTransform,
    s: ScreenPoint,
    radius: float = VERTEX_HIT_RADIUS,
) -> int | None:
    """Index of the nearest vertex within *radius* pixels of *s*."""
    best: tuple[float, int] | None = None
    for idx, vertex in enumerate(vertices):
        v = view.to_screen(vertex.point)
        d = math.hypot(v.x - s.x, v.y - s.y)
        if d <= radius and (best is None or d < best[0]):
            best = (d, idx)
    return None if best is None else best[1]


def _vertex_ops(
    vertices: Sequence[IntersectionPoint], view: ViewTransform, selected: int | None
) -> list[DrawOp]:
    ops: list[DrawOp] = []
    for idx, vertex in enumerate(vertices):
        s = view.to_screen(vertex.point)
        color = STATUS_COLORS[vertex.status.value]
        highlighted = idx == selected or vertex.status is PointStatus.ACTIVE
        edge = THEME["active_line"] if highlighted else None
        ops.append(Marker(s.x, s.y, 7.0 if highlighted else 5.0, color, edge))
        if vertex.status is PointStatus.SOLVED:
            ops.append(
                Label(
                    s.x + 8,
                    s.y - 8,
                    f"({vertex.x:.1f}, {vertex.y:.1f})",
                    color,
                    12.0,
                    ha="left",
                    va="bottom",
                    layer="vertex",
                )
            )
    return ops


def _checked_ops(points: Iterable[CheckedPoint], view: ViewTransform) -> list[DrawOp]:
    ops: list[DrawOp] = []
    for pt in points:
        s = view.to_screen(Point(pt.x, pt.y))
        color = THEME["point_ok"] if pt.ok else THEME["point_bad"]
        ops.append(Marker(s.x, s.y, 5.0, color, layer="point"))
        ops.append(
            Label(s.x + 8, s.y - 8, f"({pt.x:g}, {pt.y:g})", color, 11.0, ha="left", va="bottom", layer="point")
        )
    return ops


def build_scene(
    inequalities: Sequence[Inequality],
    vertices: Sequence[IntersectionPoint],
    view: ViewTransform,
    *,
    hovered: str | None = None,
    selected: int | None = None,
    checked: Sequence[CheckedPoint] = (),
) -> list[DrawOp]:
    """Return every draw operation for one full redraw, in paint order.

    *hovered* is the label of the inequality under the pointer; lines through
    the *selected* vertex are emphasised as well.
    """
    emphasised: set[str] = set()
    if hovered is not None:
        emphasised.add(hovered)
    if selected is not None and 0 <= selected < len(vertices):
        emphasised.update(vertices[selected].lines)

    ops: list[DrawOp] = [Rect(0.0, 0.0, view.width, view.height, THEME["background"])]
    ops.extend(_grid_and_axes(view))
    for eq in inequalities:
        ops.extend(_inequality_ops(eq, view, eq.label in emphasised))
    ops.extend(region_controls(inequalities, view))
    ops.extend(_vertex_ops(vertices, view, selected))
    ops.extend(_checked_ops(checked, view))
    return ops
