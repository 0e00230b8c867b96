"""Typed records shared by the parser, the geometry engine and the board."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Operator(str, Enum):
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "="

    @property
    def strict(self) -> bool:
        return self in (Operator.LT, Operator.GT)

    @property
    def less_type(self) -> bool:
        return self in (Operator.LT, Operator.LE)

    @property
    def greater_type(self) -> bool:
        return self in (Operator.GT, Operator.GE)

    def reversed(self) -> "Operator":
        """Operator obtained when both sides are multiplied by a negative number."""
        return _REVERSED[self]


_REVERSED = {
    Operator.LT: Operator.GT,
    Operator.LE: Operator.GE,
    Operator.GT: Operator.LT,
    Operator.GE: Operator.LE,
    Operator.EQ: Operator.EQ,
}


class Side(str, Enum):
    """The two half-planes offered to the learner for each boundary line."""

    REGION_A = "regionA"
    REGION_B = "regionB"

    @property
    def sign(self) -> int:
        # REGION_A sits at ``midpoint - normal``, REGION_B at ``midpoint + normal``
        return -1 if self is Side.REGION_A else 1


class SolutionType(str, Enum):
    NONE = "none"
    REGION_A = "regionA"
    REGION_B = "regionB"


class PointStatus(str, Enum):
    UNSOLVED = "unsolved"
    ACTIVE = "active"
    PARTIAL = "partial"
    SOLVED = "solved"


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Unsolved:
    """No half-plane has been claimed yet."""


@dataclass(frozen=True, slots=True)
class Solved:
    """A claimed solution set.

    ``side`` is ``None`` only for equations, whose solution set is the
    boundary line itself.
    """

    side: Side | None = None


SolutionState = Union[Unsolved, Solved]


@dataclass(frozen=True, slots=True)
class LinearForm:
    """Canonical ``a·x + b·y + c  operator  0`` produced by the parser."""

    a: float
    b: float
    c: float
    operator: Operator


@dataclass
class Inequality:
    """An accepted inequality as shown on the board."""

    a: float
    b: float
    c: float
    operator: Operator
    label: str
    color: str
    text: str = ""
    latex: str = ""
    state: SolutionState = field(default_factory=Unsolved)

    @property
    def solved(self) -> bool:
        return isinstance(self.state, Solved)

    @property
    def solution_type(self) -> SolutionType:
        if isinstance(self.state, Solved) and self.state.side is not None:
            return SolutionType(self.state.side.value)
        return SolutionType.NONE

    @property
    def form(self) -> LinearForm:
        return LinearForm(self.a, self.b, self.c, self.operator)

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "a": self.a,
            "b": self.b,
            "c": self.c,
            "operator": self.operator.value,
            "text": self.text,
            "latex": self.latex,
            "color": self.color,
            "solved": self.solved,
            "solutionType": self.solution_type.value,
        }


@dataclass
class IntersectionPoint:
    """A vertex of the feasible region the learner has to identify."""

    x: float
    y: float
    correct: Point
    status: PointStatus = PointStatus.UNSOLVED
    lines: tuple[str, str] = ("", "")

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "status": self.status.value,
            "lines": list(self.lines),
        }


@dataclass(frozen=True, slots=True)
class CheckedPoint:
    """A candidate solution entered in points mode."""

    x: float
    y: float
    ok: bool


@dataclass(frozen=True, slots=True)
class Feedback:
    message: str
    ok: bool


__all__ = [
    "Operator",
    "Side",
    "SolutionType",
    "PointStatus",
    "Point",
    "ScreenPoint",
    "Unsolved",
    "Solved",
    "SolutionState",
    "LinearForm",
    "Inequality",
    "IntersectionPoint",
    "CheckedPoint",
    "Feedback",
]
