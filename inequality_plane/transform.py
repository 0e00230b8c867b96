"""Math ↔ screen coordinate mapping for a pannable, zoomable viewport."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .constants import CANVAS_CONFIG
from .model import Point, ScreenPoint

__all__ = ["ViewTransform"]


@dataclass
class ViewTransform:
    """``to_screen(p) = origin + (x·zoom, -y·zoom)``; screen y grows downward.

    ``zoom`` is kept inside ``[min_zoom, max_zoom]`` pixels per unit.
    """

    width: float = CANVAS_CONFIG["width"]
    height: float = CANVAS_CONFIG["height"]
    zoom: float = CANVAS_CONFIG["default_zoom"]
    origin: ScreenPoint = field(default_factory=lambda: ScreenPoint(0.0, 0.0))
    min_zoom: float = CANVAS_CONFIG["min_zoom"]
    max_zoom: float = CANVAS_CONFIG["max_zoom"]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")
        if not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom range [{self.min_zoom}, {self.max_zoom}]")
        self.zoom = self.clamp_zoom(self.zoom)

    @classmethod
    def for_viewport(
        cls,
        width: float,
        height: float,
        zoom: float = CANVAS_CONFIG["default_zoom"],
    ) -> "ViewTransform":
        """Fresh transform with the origin at the centre of the viewport."""
        return cls(width=width, height=height, zoom=zoom, origin=ScreenPoint(width / 2, height / 2))

    # ------------------------------------------------------------------
    # scalar mapping
    def to_screen(self, p: Point) -> ScreenPoint:
        return ScreenPoint(self.origin.x + p.x * self.zoom, self.origin.y - p.y * self.zoom)

    def to_math(self, s: ScreenPoint) -> Point:
        return Point((s.x - self.origin.x) / self.zoom, (self.origin.y - s.y) / self.zoom)

    # ------------------------------------------------------------------
    # vectorised mapping
    def to_screen_array(self, xs, ys) -> tuple[np.ndarray, np.ndarray]:
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        return self.origin.x + xs * self.zoom, self.origin.y - ys * self.zoom

    def to_math_array(self, sx, sy) -> tuple[np.ndarray, np.ndarray]:
        sx = np.asarray(sx, dtype=float)
        sy = np.asarray(sy, dtype=float)
        return (sx - self.origin.x) / self.zoom, (self.origin.y - sy) / self.zoom

    # ------------------------------------------------------------------
    # view changes
    def clamp_zoom(self, zoom: float) -> float:
        return min(self.max_zoom, max(self.min_zoom, float(zoom)))

    def set_zoom(self, zoom: float, anchor: ScreenPoint | None = None) -> None:
        """Change zoom keeping the math point under *anchor* in place.

        *anchor* defaults to the viewport centre.
        """
        if anchor is None:
            anchor = ScreenPoint(self.width / 2, self.height / 2)
        fixed = self.to_math(anchor)
        self.zoom = self.clamp_zoom(zoom)
        self.origin = ScreenPoint(anchor.x - fixed.x * self.zoom, anchor.y + fixed.y * self.zoom)

    def zoom_by(self, factor: float, anchor: ScreenPoint | None = None) -> None:
        self.set_zoom(self.zoom * factor, anchor)

    def pan(self, dx: float, dy: float) -> None:
        self.origin = ScreenPoint(self.origin.x + dx, self.origin.y + dy)

    def visible_bounds(self) -> tuple[float, float, float, float]:
        """Return ``(xmin, xmax, ymin, ymax)`` of the viewport in math units."""
        xs, ys = self.to_math_array([0.0, self.width], [0.0, self.height])
        return float(xs[0]), float(xs[1]), float(ys[1]), float(ys[0])
