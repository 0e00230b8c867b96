"""Matplotlib adapter: paint scene draw operations into a PNG file."""
from __future__ import annotations

import logging
import os
import tempfile
import warnings
from pathlib import Path
from typing import Any, Sequence

from .scene import DrawOp, Label, Marker, Polygon, Rect, RegionControl, Segment

__all__ = ["render_png", "select_backend"]

logger = logging.getLogger(__name__)

_DPI = 100


def select_backend(matplotlib: Any) -> str:
    """Pick a usable backend on demand and return its name (lower case).

    ``Agg`` when headless, ``TkAgg`` when a display is available or requested
    through ``MPLBACKEND``; an unavailable ``TkAgg`` falls back to ``Agg`` with
    a :class:`RuntimeWarning`.
    """
    try:
        backend = matplotlib.get_backend().lower()
    except Exception:
        backend = ""
    if backend in {"agg", "tkagg"}:
        return backend
    env_backend = os.environ.get("MPLBACKEND", "").lower()
    prefer_tk = bool(os.environ.get("DISPLAY")) or env_backend == "tkagg"
    if prefer_tk:
        try:
            matplotlib.use("TkAgg")
            return "tkagg"
        except Exception as exc:  # pragma: no cover - depends on system backend
            warnings.warn(
                f"Preferred GUI backend 'TkAgg' unavailable; falling back to 'Agg': {exc}",
                RuntimeWarning,
            )
    matplotlib.use("Agg")
    return "agg"


def _px(width: float) -> float:
    # scene widths are pixels, matplotlib line widths are points
    return width * 72.0 / _DPI


def _draw(ax: Any, op: DrawOp) -> None:
    from matplotlib import patches

    if isinstance(op, Rect):
        ax.add_patch(patches.Rectangle((op.x, op.y), op.width, op.height, color=op.fill, zorder=0))
    elif isinstance(op, Segment):
        ax.plot(
            [op.x1, op.x2],
            [op.y1, op.y2],
            color=op.color,
            linewidth=_px(op.width),
            linestyle=(0, (5, 5)) if op.dashed else "solid",
            solid_capstyle="butt",
        )
    elif isinstance(op, Polygon):
        ax.add_patch(
            patches.Polygon(op.points, closed=True, facecolor=op.color, edgecolor="none", alpha=op.alpha)
        )
    elif isinstance(op, Label):
        ax.text(
            op.x,
            op.y,
            op.text,
            color=op.color,
            fontsize=op.size,
            ha=op.ha,
            va=op.va,
            style="italic" if op.italic else "normal",
        )
    elif isinstance(op, Marker):
        ax.add_patch(
            patches.Circle(
                (op.x, op.y),
                op.radius,
                facecolor=op.fill,
                edgecolor=op.edge or op.fill,
                linewidth=_px(2.0),
                zorder=5,
            )
        )
    elif isinstance(op, RegionControl):
        ax.add_patch(
            patches.Rectangle(
                (op.x, op.y),
                op.width,
                op.height,
                facecolor="#ffffff",
                edgecolor=op.color,
                linewidth=_px(1.0),
                zorder=4,
            )
        )
        ax.text(
            op.x + op.width / 2,
            op.y + op.height / 2,
            op.text,
            color=op.color,
            fontsize=9,
            ha="center",
            va="center",
            zorder=4,
        )
    else:  # pragma: no cover - exhaustive over DrawOp
        raise TypeError(f"Unsupported draw op {op!r}")


def render_png(
    ops: Sequence[DrawOp],
    width: float,
    height: float,
    path: str | os.PathLike[str] | None = None,
) -> str:
    """Render *ops* to a **PNG file** and return the file path (string).

    Without *path* a temporary file is created; the caller owns it.
    """
    # Lazy import so the package works without matplotlib unless a frame is requested
    try:
        import matplotlib  # type: ignore
        import matplotlib.pyplot as plt  # type: ignore
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise RuntimeError(
            "matplotlib is required to render the plane. Install it or run without visuals."
        ) from exc

    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport must be positive, got {width}x{height}")

    select_backend(matplotlib)

    fig = plt.figure(figsize=(width / _DPI, height / _DPI), dpi=_DPI)
    try:
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)  # screen y grows downward
        ax.set_aspect("equal", adjustable="box")
        ax.axis("off")

        for op in ops:
            _draw(ax, op)

        if path is None:
            fd, tmp = tempfile.mkstemp(suffix=".png")
            os.close(fd)
            png_path = Path(tmp)
        else:
            png_path = Path(path)
        fig.savefig(png_path, format="png", dpi=_DPI)
    finally:
        plt.close(fig)
    logger.debug("[inequality-plane] rendered %d ops to %s", len(ops), png_path)
    return str(png_path)
