"""Public package interface for the linear-inequalities graphing board.

Importing this package gives you easy access to the top‑level helpers without
having to know the internal module layout.

Typical usage
-------------
>>> from inequality_plane import Board, Side
>>> board = Board()
>>> board.add_inequality("x + y - 4 <= 0").message
'Spell successfully cast!'
>>> board.choose_region("d1", Side.REGION_A).ok
True
"""
from importlib.metadata import version as _version  # type: ignore

from .board import Board  # re‑export for convenience
from .geometry import evaluate, intersect, satisfies
from .model import (
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
from .parsing import parse, parse_linear
from .session import ParseContext
from .transform import ViewTransform

__all__ = [
    "Board",
    "ParseContext",
    "ViewTransform",
    "parse",
    "parse_linear",
    "evaluate",
    "satisfies",
    "intersect",
    "Feedback",
    "Inequality",
    "IntersectionPoint",
    "LinearForm",
    "Operator",
    "Point",
    "PointStatus",
    "ScreenPoint",
    "Side",
    "Solved",
    "Unsolved",
    "__version__",
]

try:
    __version__ = _version("inequality_plane")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
