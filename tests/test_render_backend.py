from pathlib import Path
import sys
from typing import Any

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inequality_plane.board import Board
from inequality_plane.model import Side
from inequality_plane.render import render_png
from inequality_plane.scene import build_scene
from inequality_plane.transform import ViewTransform


def test_render_headless_uses_agg(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.delenv("MPLBACKEND", raising=False)

    view = ViewTransform.for_viewport(300, 200)
    path = render_png(build_scene([], [], view), view.width, view.height)
    try:
        assert Path(path).is_file()
        import matplotlib
        assert matplotlib.get_backend().lower() == "agg"

        from PIL import Image
        with Image.open(path) as img:
            assert img.size == (300, 200)
    finally:
        Path(path).unlink(missing_ok=True)


def test_missing_gui_backend_warns(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MPLBACKEND", "tkagg")
    monkeypatch.delenv("DISPLAY", raising=False)

    import matplotlib
    original_use = matplotlib.use

    def fail_use(backend: str, *args: Any, **kwargs: Any) -> Any:
        if backend == "TkAgg":
            raise ImportError("TkAgg not available")
        return original_use(backend, *args, **kwargs)

    original_use("pdf")
    monkeypatch.setattr(matplotlib, "use", fail_use)

    view = ViewTransform.for_viewport(200, 200)
    with pytest.warns(RuntimeWarning):
        path = render_png(build_scene([], [], view), view.width, view.height)

    assert matplotlib.get_backend().lower() == "agg"
    Path(path).unlink(missing_ok=True)


def test_board_renders_to_requested_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.delenv("MPLBACKEND", raising=False)

    board = Board(width=400, height=300)
    board.add_inequality("x + y < 2")
    board.add_inequality("y >= -1")
    board.choose_region("d1", Side.REGION_A)
    board.check_point(board.view.to_math(board.view.origin))

    target = tmp_path / "plane.png"
    out = board.render(str(target))
    assert out == str(target)
    assert target.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_invalid_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        render_png([], 0, 100)


def test_figure_is_closed_when_drawing_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY", raising=False)
    monkeypatch.delenv("MPLBACKEND", raising=False)

    from inequality_plane import render

    def broken(ax: Any, op: Any) -> None:
        raise RuntimeError("cannot draw op")

    monkeypatch.setattr(render, "_draw", broken)
    view = ViewTransform.for_viewport(200, 200)
    with pytest.raises(RuntimeError, match="cannot draw op"):
        render.render_png(build_scene([], [], view), view.width, view.height)

    import matplotlib.pyplot as plt
    assert plt.get_fignums() == []
