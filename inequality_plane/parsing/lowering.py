"""Lower relation ASTs to canonical linear forms and format them for display."""
from __future__ import annotations

from typing import Any

from ..constants import EPSILON
from ..model import LinearForm, Operator
from .grammar import GeneralForm, RelationNode, SingleVariable, SlopeForm, StandardForm, Term

__all__ = ["lower", "format_number", "format_form", "to_sympy", "latex_form"]


def _clean(v: float) -> float:
    # collapse -0.0 and float noise below the shared tolerance
    return 0.0 if abs(v) < EPSILON else v + 0.0


def _collect(terms: tuple[Term, ...], sign: float, acc: dict[str | None, float]) -> None:
    for t in terms:
        acc[t.var] = acc.get(t.var, 0.0) + sign * t.coef


def lower(node: RelationNode) -> LinearForm | None:
    """Return the ``a·x + b·y + c OP 0`` form of *node*.

    ``None`` is returned for operators outside the supported set (``!=``) and
    for relations whose ``x`` and ``y`` coefficients both vanish.
    """
    if isinstance(node, StandardForm):
        a, b, c, op = node.x, node.y, node.const, node.op
    elif isinstance(node, SingleVariable):
        a = node.coef if node.var == "x" else 0.0
        b = node.coef if node.var == "y" else 0.0
        c, op = node.const, node.op
    elif isinstance(node, SlopeForm):
        a, b, c, op = -node.slope, 1.0, -node.intercept, "="
    elif isinstance(node, GeneralForm):
        acc: dict[str | None, float] = {}
        _collect(node.lhs, 1.0, acc)
        _collect(node.rhs, -1.0, acc)
        a, b, c, op = acc.get("x", 0.0), acc.get("y", 0.0), acc.get(None, 0.0), node.op
    else:  # pragma: no cover - exhaustive over RelationNode
        raise TypeError(f"Unsupported relation node {node!r}")

    try:
        operator = Operator(op)
    except ValueError:
        return None
    a, b, c = _clean(a), _clean(b), _clean(c)
    if a == 0.0 and b == 0.0:
        return None
    return LinearForm(a, b, c, operator)


def format_number(v: float) -> str:
    """Render *v* compactly; near-integers print without a decimal point."""
    if abs(v - round(v)) < EPSILON:
        return str(int(round(v)))
    # fixed notation: the tokenizer has no exponent syntax
    return f"{v:.12f}".rstrip("0").rstrip(".")


def _format_term(coef: float, var: str, first: bool) -> str:
    mag = abs(coef)
    body = var if abs(mag - 1) < EPSILON else f"{format_number(mag)}{var}"
    if first:
        return f"-{body}" if coef < 0 else body
    return f" - {body}" if coef < 0 else f" + {body}"


def format_form(form: LinearForm) -> str:
    """Plain-text rendering that :func:`parse_linear` reads back unchanged."""
    parts: list[str] = []
    if form.a != 0:
        parts.append(_format_term(form.a, "x", not parts))
    if form.b != 0:
        parts.append(_format_term(form.b, "y", not parts))
    if form.c != 0:
        mag = format_number(abs(form.c))
        parts.append(f" - {mag}" if form.c < 0 else f" + {mag}")
    return f"{''.join(parts)} {form.operator.value} 0"


def _rational(v: float) -> Any:
    import sympy as sp

    return sp.Rational(v).limit_denominator(10**6)


def to_sympy(form: LinearForm) -> Any:
    """Return the SymPy relational equivalent of *form* (unevaluated)."""
    import sympy as sp

    x, y = sp.symbols("x y")
    expr = _rational(form.a) * x + _rational(form.b) * y + _rational(form.c)
    rel_cls = {
        Operator.LT: sp.StrictLessThan,
        Operator.LE: sp.LessThan,
        Operator.GT: sp.StrictGreaterThan,
        Operator.GE: sp.GreaterThan,
        Operator.EQ: sp.Eq,
    }[form.operator]
    return rel_cls(expr, 0, evaluate=False)


def latex_form(form: LinearForm) -> str:
    import sympy as sp

    return sp.latex(to_sympy(form))
