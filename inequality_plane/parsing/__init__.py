"""Inequality text parsing.

Typical usage
-------------
>>> from inequality_plane.parsing import parse
>>> from inequality_plane.session import ParseContext
>>> eq = parse("2x-3y+1>=0", ParseContext())
>>> (eq.a, eq.b, eq.c, eq.operator.value, eq.label)
(2.0, -3.0, 1.0, '>=', 'd1')
"""
from __future__ import annotations

import logging

from ..model import Inequality, LinearForm, Operator, Solved, Unsolved
from ..session import ParseContext
from .grammar import parse_relation
from .lowering import format_form, latex_form, lower, to_sympy
from .tokens import ParseError, normalize, tokenize

__all__ = [
    "parse",
    "parse_linear",
    "build_inequality",
    "format_form",
    "latex_form",
    "to_sympy",
    "normalize",
    "tokenize",
    "ParseError",
]

logger = logging.getLogger(__name__)


def parse_linear(text: str, context: ParseContext | None = None) -> LinearForm | None:
    """Return the canonical form of *text*, or ``None`` if it does not parse.

    When *context* is given its memo is consulted first and updated afterwards.
    """
    if context is not None:
        hit, cached = context.memo_lookup(text)
        if hit:
            return cached

    try:
        form = lower(parse_relation(text))
    except ParseError as exc:
        logger.debug("[inequality-plane] parse miss for %r: %s", text, exc)
        form = None
    else:
        if form is None:
            logger.debug("[inequality-plane] degenerate relation %r", text)

    if context is not None:
        context.memo_store(text, form)
    return form


def build_inequality(form: LinearForm, context: ParseContext) -> Inequality:
    """Allocate a label and colour for *form* and wrap it as an :class:`Inequality`."""
    state = Solved(None) if form.operator is Operator.EQ else Unsolved()
    return Inequality(
        a=form.a,
        b=form.b,
        c=form.c,
        operator=form.operator,
        label=context.next_label(),
        color=context.next_color(),
        text=format_form(form),
        latex=latex_form(form),
        state=state,
    )


def parse(text: str, context: ParseContext | None = None) -> Inequality | None:
    """Parse *text* into a labelled, coloured :class:`Inequality`.

    Without a *context* a throwaway one is used, so the record is labelled
    ``d1`` with the first palette colour.
    """
    ctx = context if context is not None else ParseContext()
    form = parse_linear(text, ctx)
    if form is None:
        return None
    return build_inequality(form, ctx)
