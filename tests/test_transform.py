import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from inequality_plane.model import Point, ScreenPoint
from inequality_plane.transform import ViewTransform


def test_default_view_is_centred() -> None:
    view = ViewTransform.for_viewport(600, 600)
    assert view.origin == ScreenPoint(300.0, 300.0)
    assert view.zoom == 40.0
    assert view.to_screen(Point(1, 1)) == ScreenPoint(340.0, 260.0)
    assert view.visible_bounds() == pytest.approx((-7.5, 7.5, -7.5, 7.5))


@pytest.mark.parametrize("zoom", [20.0, 33.3, 40.0, 77.7, 100.0])
def test_to_math_inverts_to_screen(zoom: float) -> None:
    view = ViewTransform.for_viewport(640, 480, zoom)
    view.pan(13.5, -7.25)
    for p in [Point(0, 0), Point(1.5, -2.25), Point(-123.4, 56.7)]:
        back = view.to_math(view.to_screen(p))
        assert (back.x, back.y) == pytest.approx((p.x, p.y))


def test_zoom_is_clamped() -> None:
    assert ViewTransform.for_viewport(600, 600, zoom=500).zoom == 100.0
    assert ViewTransform.for_viewport(600, 600, zoom=1).zoom == 20.0

    view = ViewTransform.for_viewport(600, 600)
    for _ in range(50):
        view.zoom_by(1.1)
    assert view.zoom == 100.0


def test_zoom_keeps_anchor_fixed() -> None:
    view = ViewTransform.for_viewport(600, 600)
    anchor = ScreenPoint(100.0, 150.0)
    before = view.to_math(anchor)
    view.zoom_by(1.1, anchor)
    after = view.to_math(anchor)
    assert view.zoom == pytest.approx(44.0)
    assert (after.x, after.y) == pytest.approx((before.x, before.y))


def test_pan_moves_origin() -> None:
    view = ViewTransform.for_viewport(600, 600)
    view.pan(50, -20)
    assert view.origin == ScreenPoint(350.0, 280.0)
    assert view.to_math(ScreenPoint(350.0, 280.0)) == Point(0.0, 0.0)


def test_array_forms_match_scalar_forms() -> None:
    view = ViewTransform.for_viewport(600, 400, 25)
    xs, ys = np.array([0.0, 1.0, -2.5]), np.array([0.0, 3.0, 4.0])
    sx, sy = view.to_screen_array(xs, ys)
    for x, y, px, py in zip(xs, ys, sx, sy):
        s = view.to_screen(Point(x, y))
        assert (px, py) == pytest.approx((s.x, s.y))
    mx, my = view.to_math_array(sx, sy)
    assert np.allclose(mx, xs)
    assert np.allclose(my, ys)


@pytest.mark.parametrize("size", [(0, 600), (600, -1)])
def test_invalid_viewport(size: tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        ViewTransform.for_viewport(*size)
