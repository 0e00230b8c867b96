"""Command‑line interface wrapper around :class:`inequality_plane.board.Board`."""
from __future__ import annotations

import argparse
import json
import logging
import sys

from . import constants as C
from .board import Board
from .geometry import correct_side
from .model import Point

__all__ = ["main"]


def _parse_pair(text: str, flag: str) -> tuple[float, float]:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        sys.exit(f"Error: {flag} expects X,Y, got {text!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        sys.exit(f"Error: {flag} expects numbers, got {text!r}")


def _parse_vertex_answer(text: str) -> tuple[int, str, str]:
    index, sep, coords = text.partition(":")
    parts = coords.split(",")
    if not sep or len(parts) != 2:
        sys.exit(f"Error: --vertex-answer expects I:X,Y, got {text!r}")
    try:
        return int(index), parts[0], parts[1]
    except ValueError:
        sys.exit(f"Error: --vertex-answer index must be an integer, got {index!r}")


def _preview_graph(path: str) -> None:
    """Display the rendered plane PNG in a Matplotlib window (best‑effort)."""
    try:
        import numpy as np  # type: ignore
        from PIL import Image  # type: ignore
        import matplotlib.pyplot as plt  # imported lazily to avoid GUI deps
    except ImportError as exc:
        print(
            f"⚠️ Could not preview plane image; missing dependency: {exc}",
            file=sys.stderr,
        )
        return

    try:
        img = Image.open(path).convert("RGBA")
        arr = np.array(img)
        fig, ax = plt.subplots()
        ax.imshow(arr)
        ax.axis("off")
        plt.show()
    except Exception as exc:
        print(f"⚠️ Could not preview plane image: {exc}", file=sys.stderr)


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(description="Graph linear inequalities on the plane ✔")
    parser.add_argument(
        "inequalities",
        nargs="*",
        help="Inequalities to cast, e.g. 'x+y<0' '2x-3y+1>=0' 'y = 2x + 1'",
    )
    parser.add_argument("--demo", action="store_true", help="Cast a small demo system")
    parser.add_argument(
        "--choose",
        choices=["auto", "none"],
        default="auto",
        help="'auto' claims the correct region of every inequality; 'none' leaves them unsolved",
    )
    parser.add_argument(
        "--point",
        action="append",
        default=[],
        metavar="X,Y",
        help="Check a candidate solution point (repeatable)",
    )
    parser.add_argument(
        "--vertex-answer",
        action="append",
        default=[],
        metavar="I:X,Y",
        help="Submit coordinates X,Y for feasible vertex number I (repeatable)",
    )
    parser.add_argument("--out", help="Write the rendered plane PNG to this path")
    parser.add_argument("--width", type=int, default=C.CANVAS_CONFIG["width"], help="Canvas width in pixels")
    parser.add_argument("--height", type=int, default=C.CANVAS_CONFIG["height"], help="Canvas height in pixels")
    parser.add_argument(
        "--zoom",
        type=float,
        default=C.CANVAS_CONFIG["default_zoom"],
        help="Pixels per unit (clamped to the supported range)",
    )
    parser.add_argument("--json", action="store_true", help="Print the board snapshot as JSON")
    parser.add_argument("--preview", action="store_true", help="Preview the rendered PNG")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for inequality_plane",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)

    logging.basicConfig(level=logging.WARNING)
    level = getattr(logging, ns.log_level)
    pkg_logger = logging.getLogger("inequality_plane")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)

    texts = list(ns.inequalities)
    if ns.demo:
        texts = list(C.DEMO_INEQUALITIES) + texts
    if not texts:
        sys.exit("Error: give at least one inequality or use --demo.")

    try:
        board = Board(width=ns.width, height=ns.height, zoom=ns.zoom)
    except ValueError as exc:
        sys.exit(f"Error: {exc}")

    for text in texts:
        fb = board.add_inequality(text)
        print(f"{'✔' if fb.ok else '✘'} {text}: {fb.message}")

    if ns.choose == "auto":
        for eq in board.inequalities:
            side = correct_side(eq)
            if eq.solved or side is None:
                continue
            fb = board.choose_region(eq.label, side)
            print(f"{eq.label} [{eq.text}]: {fb.message}")

    for raw in ns.point:
        x, y = _parse_pair(raw, "--point")
        fb = board.check_point(Point(x, y))
        print(fb.message)

    for raw in ns.vertex_answer:
        index, x_text, y_text = _parse_vertex_answer(raw)
        if board.selected != index:
            try:
                board.select_vertex(index)
            except IndexError:
                sys.exit(f"Error: no feasible vertex {index} (found {len(board.vertices)}).")
        fb = board.submit_coordinates(x_text, y_text)
        print(f"vertex {index}: {fb.message}")

    png_path: str | None = None
    if ns.out or ns.preview:
        try:
            png_path = board.render(ns.out)
        except RuntimeError as exc:
            sys.exit(f"Error: {exc}")
        if ns.out:
            print(f"✔ Plane written to {png_path}")

    if ns.preview and png_path:
        _preview_graph(png_path)

    if ns.json:
        print(json.dumps(board.snapshot(), ensure_ascii=False, separators=(",", ":")))

    board.close()


if __name__ == "__main__":  # pragma: no cover
    main()
