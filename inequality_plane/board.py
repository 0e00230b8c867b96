"""Interaction state machine tying parsing, geometry, view and rendering together."""
from __future__ import annotations

import logging
import math
import threading
from typing import Any, Callable, Sequence

from . import constants as C
from .debouncing import DebouncedCall
from .geometry import (
    distance_to_line,
    feasible_vertex_lines,
    same_inequality,
    satisfies,
    satisfies_all,
    side_satisfies,
)
from .model import (
    CheckedPoint,
    Feedback,
    Inequality,
    IntersectionPoint,
    LinearForm,
    Operator,
    Point,
    PointStatus,
    ScreenPoint,
    Side,
    Solved,
    Unsolved,
)
from .parsing import build_inequality, parse_linear
from .scene import DrawOp, build_scene, control_at, region_controls, vertex_at
from .session import ParseContext
from .transform import ViewTransform

__all__ = ["Board", "ValidationCallback"]

logger = logging.getLogger(__name__)

ValidationCallback = Callable[[str, "LinearForm | None"], Any]


def _one_decimal(v: float) -> str:
    s = f"{v:.1f}"
    return "0.0" if s == "-0.0" else s


def _read_number(text: str) -> float:
    return float(text.strip().replace("−", "-")) + 0.0


class Board:
    """One interactive graphing session.

    Every mutating call returns a :class:`~inequality_plane.model.Feedback`
    and mirrors its text in :attr:`message`. Vertices are recomputed after
    every change to the inequality set or to a solution state; a vertex that
    survives a recomputation keeps its status.
    """

    def __init__(
        self,
        *,
        width: float = C.CANVAS_CONFIG["width"],
        height: float = C.CANVAS_CONFIG["height"],
        zoom: float = C.CANVAS_CONFIG["default_zoom"],
        palette: Sequence[str] = C.PALETTE,
        debounce_ms: int = C.DEBOUNCE_MS,
    ) -> None:
        self.context = ParseContext(palette)
        self.view = ViewTransform.for_viewport(width, height, zoom)
        self.inequalities: list[Inequality] = []
        self.vertices: list[IntersectionPoint] = []
        self.checked: list[CheckedPoint] = []
        self.message = ""
        self.selected: int | None = None
        self.hovered: str | None = None
        self.generation = 0
        # guards generation against timer-thread validation delivery
        self._lock = threading.RLock()

        self._press: ScreenPoint | None = None
        self._last: ScreenPoint | None = None
        self._dragging = False
        self._pinch: tuple[float, float] | None = None  # (start distance, start zoom)
        self._validator = DebouncedCall(self._deliver_validation, delay_ms=debounce_ms)

    # ------------------------------------------------------------------
    # helpers
    def _say(self, message: str, ok: bool) -> Feedback:
        self.message = message
        return Feedback(message, ok)

    def get(self, label: str) -> Inequality:
        for eq in self.inequalities:
            if eq.label == label:
                return eq
        raise KeyError(label)

    @property
    def active_vertex(self) -> IntersectionPoint | None:
        if self.selected is None:
            return None
        return self.vertices[self.selected]

    def _recompute_vertices(self) -> None:
        previous = self.vertices
        selected = self.active_vertex
        fresh: list[IntersectionPoint] = []
        new_selected: int | None = None
        for p, lines in feasible_vertex_lines(self.inequalities):
            status = PointStatus.UNSOLVED
            for old in previous:
                if abs(old.x - p.x) < C.EPSILON and abs(old.y - p.y) < C.EPSILON:
                    status = old.status
                    if old is selected:
                        new_selected = len(fresh)
                    break
            fresh.append(IntersectionPoint(p.x, p.y, correct=p, status=status, lines=lines))
        self.vertices = fresh
        self.selected = new_selected
        logger.debug("[inequality-plane] %d feasible vertices", len(fresh))

    # ------------------------------------------------------------------
    # inequalities
    def add_inequality(self, text: str) -> Feedback:
        if not text or not text.strip():
            return self._say(C.MSG_EMPTY, False)
        form = parse_linear(text, self.context)
        if form is None:
            logger.info("[inequality-plane] rejected %r", text)
            return self._say(C.MSG_INVALID, False)
        if any(same_inequality(form, eq) for eq in self.inequalities):
            logger.info("[inequality-plane] duplicate %r", text)
            return self._say(C.MSG_DUPLICATE, False)
        eq = build_inequality(form, self.context)
        self.inequalities.append(eq)
        self._recompute_vertices()
        logger.info("[inequality-plane] added %s: %s", eq.label, eq.text)
        return self._say(C.MSG_ADDED, True)

    def remove_inequality(self, label: str) -> Feedback:
        eq = self.get(label)
        self.inequalities.remove(eq)
        if self.hovered == label:
            self.hovered = None
        self._recompute_vertices()
        logger.info("[inequality-plane] removed %s", label)
        return self._say(C.MSG_REMOVED.format(label=label), True)

    def clear_choice(self, label: str) -> Feedback:
        """Return *label* to the unsolved state so the side can be chosen again."""
        eq = self.get(label)
        if eq.operator is not Operator.EQ:
            eq.state = Unsolved()
            self._recompute_vertices()
        return self._say(C.MSG_CHOOSE_REGION.format(label=label), True)

    def choose_region(self, label: str, side: Side) -> Feedback:
        """Record *side* as the claimed solution of *label* and grade it.

        The choice is kept even when wrong; :meth:`clear_choice` allows a retry.
        """
        eq = self.get(label)
        if eq.operator is Operator.EQ:
            raise ValueError(f"{label} is an equation; it has no region to choose")
        side = Side(side)
        eq.state = Solved(side)
        correct = side_satisfies(eq, side)
        self._recompute_vertices()
        logger.info(
            "[inequality-plane] %s solved with %s (%s)",
            label,
            side.value,
            "correct" if correct else "incorrect",
        )
        return self._say(C.MSG_CORRECT if correct else C.MSG_INCORRECT, correct)

    # ------------------------------------------------------------------
    # vertices
    def select_vertex(self, index: int) -> Feedback:
        """Toggle selection of the vertex at *index*.

        UNSOLVED and PARTIAL vertices become ACTIVE (any other ACTIVE vertex
        drops back to UNSOLVED); SOLVED vertices are only highlighted.
        Selecting the selected vertex again deselects it: ACTIVE falls back to
        UNSOLVED while PARTIAL and SOLVED keep their status.
        """
        if not 0 <= index < len(self.vertices):
            raise IndexError(f"vertex index {index} out of range")
        vertex = self.vertices[index]

        if index == self.selected or vertex.status is PointStatus.ACTIVE:
            if vertex.status is PointStatus.ACTIVE:
                vertex.status = PointStatus.UNSOLVED
            self.selected = None
            logger.info("[inequality-plane] vertex %d deselected", index)
            return self._say("", True)

        for other in self.vertices:
            if other.status is PointStatus.ACTIVE:
                other.status = PointStatus.UNSOLVED
        self.selected = index
        if vertex.status is PointStatus.SOLVED:
            return self._say(C.MSG_ALREADY_SOLVED, True)
        vertex.status = PointStatus.ACTIVE
        logger.info("[inequality-plane] vertex %d active", index)
        return self._say(C.MSG_ENTER_COORDS, True)

    def submit_coordinates(self, x_text: str, y_text: str) -> Feedback:
        """Grade typed coordinates for the selected vertex to one decimal place."""
        vertex = self.active_vertex
        if vertex is None or vertex.status not in (PointStatus.ACTIVE, PointStatus.PARTIAL):
            return self._say(C.MSG_NO_ACTIVE, False)
        if not str(x_text).strip() or not str(y_text).strip():
            return self._say(C.MSG_MISSING_COORDS, False)
        try:
            x, y = _read_number(str(x_text)), _read_number(str(y_text))
        except ValueError:
            return self._say(C.MSG_BAD_NUMBER, False)

        x_ok = _one_decimal(x) == _one_decimal(vertex.correct.x)
        y_ok = _one_decimal(y) == _one_decimal(vertex.correct.y)
        if x_ok and y_ok:
            vertex.status = PointStatus.SOLVED
            self.selected = None
            logger.info("[inequality-plane] vertex (%s, %s) solved", _one_decimal(x), _one_decimal(y))
            return self._say(C.MSG_CORRECT, True)
        if x_ok or y_ok:
            vertex.status = PointStatus.PARTIAL
            logger.info("[inequality-plane] vertex partially solved")
        message = f"{'x correct' if x_ok else 'x incorrect'}, {'y correct' if y_ok else 'y incorrect'}"
        return self._say(message, False)

    # ------------------------------------------------------------------
    # points mode
    def check_point(self, point: Point) -> Feedback:
        """Record *point* as a candidate solution of the whole system."""
        ok = satisfies_all(self.inequalities, point)
        self.checked.append(CheckedPoint(point.x, point.y, ok))
        x, y = f"{point.x:g}", f"{point.y:g}"
        if ok:
            return self._say(C.MSG_POINT_OK.format(x=x, y=y), True)
        failed = [eq.label for eq in self.inequalities if not satisfies(eq, point)]
        return self._say(C.MSG_POINT_BAD.format(x=x, y=y, failed=", ".join(failed)), False)

    # ------------------------------------------------------------------
    # pointer input
    def click(self, at: ScreenPoint) -> Feedback | None:
        idx = vertex_at(self.vertices, self.view, at)
        if idx is not None:
            return self.select_vertex(idx)
        control = control_at(region_controls(self.inequalities, self.view), at)
        if control is not None:
            return self.choose_region(control.label, control.side)
        vertex = self.active_vertex
        if vertex is not None and vertex.status is PointStatus.ACTIVE:
            vertex.status = PointStatus.UNSOLVED
        self.selected = None
        return None

    def _hover(self, at: ScreenPoint) -> str | None:
        p = self.view.to_math(at)
        best: tuple[float, str] | None = None
        for eq in self.inequalities:
            d = distance_to_line(eq, p) * self.view.zoom
            if d <= C.LINE_HOVER_DISTANCE and (best is None or d < best[0]):
                best = (d, eq.label)
        self.hovered = None if best is None else best[1]
        return self.hovered

    def pointer_down(self, at: ScreenPoint) -> None:
        self._press = at
        self._last = at
        self._dragging = False

    def pointer_move(self, at: ScreenPoint) -> str | None:
        """Pan while a press is held; returns the label under the pointer."""
        if self._press is not None and self._last is not None:
            if not self._dragging:
                moved = math.hypot(at.x - self._press.x, at.y - self._press.y)
                self._dragging = moved > C.DRAG_THRESHOLD
            if self._dragging:
                self.view.pan(at.x - self._last.x, at.y - self._last.y)
            self._last = at
        return self._hover(at)

    def pointer_up(self, at: ScreenPoint) -> Feedback | None:
        """End a press; a press that never became a drag is a click."""
        was_click = self._press is not None and not self._dragging
        self._press = None
        self._last = None
        self._dragging = False
        return self.click(at) if was_click else None

    def wheel(self, delta_y: float, at: ScreenPoint | None = None) -> float:
        """Zoom in for negative *delta_y*, out for positive; zero leaves the view alone."""
        if delta_y == 0:
            return self.view.zoom
        factor = C.WHEEL_ZOOM_IN if delta_y < 0 else C.WHEEL_ZOOM_OUT
        self.view.zoom_by(factor, at)
        return self.view.zoom

    def touch_start(self, touches: Sequence[ScreenPoint]) -> None:
        if len(touches) >= 2:
            t1, t2 = touches[0], touches[1]
            self._pinch = (math.hypot(t2.x - t1.x, t2.y - t1.y), self.view.zoom)
            self._press = None
        elif touches:
            self.pointer_down(touches[0])

    def touch_move(self, touches: Sequence[ScreenPoint]) -> None:
        if self._pinch is not None and len(touches) >= 2:
            t1, t2 = touches[0], touches[1]
            start_distance, start_zoom = self._pinch
            if start_distance < C.EPSILON:
                return
            ratio = math.hypot(t2.x - t1.x, t2.y - t1.y) / start_distance
            centre = ScreenPoint((t1.x + t2.x) / 2, (t1.y + t2.y) / 2)
            self.view.set_zoom(start_zoom * ratio, centre)
        elif touches:
            self.pointer_move(touches[0])

    def touch_end(self, touches: Sequence[ScreenPoint] = ()) -> Feedback | None:
        """*touches* are the fingers still down."""
        if self._pinch is not None:
            if len(touches) < 2:
                self._pinch = None
            return None
        if self._last is None:
            return None
        return self.pointer_up(self._last)

    # ------------------------------------------------------------------
    # view and lifecycle
    def resize(self, width: float, height: float) -> None:
        self.view = ViewTransform.for_viewport(width, height, self.view.zoom)

    def reset_view(self) -> None:
        self.view = ViewTransform.for_viewport(self.view.width, self.view.height)

    def reset(self) -> Feedback:
        """Clear everything and restart the label and colour sequences."""
        with self._lock:
            self.generation += 1
            self._validator.cancel()
            self.inequalities.clear()
            self.vertices.clear()
            self.checked.clear()
            self.selected = None
            self.hovered = None
            self._press = None
            self._last = None
            self._pinch = None
            self.context.reset()
            self.reset_view()
        logger.info("[inequality-plane] board reset (generation %d)", self.generation)
        return self._say(C.MSG_RESET, True)

    def validate_later(self, text: str, callback: ValidationCallback) -> None:
        """Parse *text* once typing pauses and hand ``(text, form)`` to *callback*."""
        self._validator(text, self.generation, callback)

    def _deliver_validation(self, text: str, generation: int, callback: ValidationCallback) -> None:
        # may run on a timer thread: parse without the shared memo and check
        # the generation only after parsing, under the lock reset() holds
        form = parse_linear(text)
        with self._lock:
            if generation != self.generation:
                logger.debug("[inequality-plane] stale validation for %r ignored", text)
                return
            callback(text, form)

    def close(self) -> None:
        self._validator.cancel()

    # ------------------------------------------------------------------
    # output
    def scene(self) -> list[DrawOp]:
        return build_scene(
            self.inequalities,
            self.vertices,
            self.view,
            hovered=self.hovered,
            selected=self.selected,
            checked=self.checked,
        )

    def render(self, path: str | None = None) -> str:
        from .render import render_png

        return render_png(self.scene(), self.view.width, self.view.height, path)

    def snapshot(self) -> dict[str, Any]:
        return {
            "inequalities": [eq.to_dict() for eq in self.inequalities],
            "vertices": [v.to_dict() for v in self.vertices],
            "checked": [{"x": p.x, "y": p.y, "ok": p.ok} for p in self.checked],
            "view": {
                "width": self.view.width,
                "height": self.view.height,
                "zoom": self.view.zoom,
                "origin": [self.view.origin.x, self.view.origin.y],
            },
            "selected": self.selected,
            "message": self.message,
        }
