"""Recursive-descent parser producing a tagged relation AST.

The token stream is first parsed into ``side OP side`` where each side is a
signed sum of terms. The resulting :class:`_Relation` is then matched against
the supported grammars in order:

1. :class:`StandardForm`   ``[±][k]x ± [k]y [± c] OP 0``
2. :class:`SingleVariable` ``[±][k](x|y) [± c] OP 0``
3. :class:`SlopeForm`      ``y = [m]x [± k]``
4. :class:`GeneralForm`    linear terms on both sides, e.g. ``x + 1 > 3``
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .tokens import ParseError, Token, TokenKind, tokenize

__all__ = [
    "Term",
    "StandardForm",
    "SingleVariable",
    "SlopeForm",
    "GeneralForm",
    "RelationNode",
    "parse_relation",
]


@dataclass(frozen=True, slots=True)
class Term:
    """A signed term; ``var`` is ``None`` for a constant."""

    var: str | None
    coef: float


@dataclass(frozen=True, slots=True)
class StandardForm:
    x: float
    y: float
    const: float
    op: str


@dataclass(frozen=True, slots=True)
class SingleVariable:
    var: str
    coef: float
    const: float
    op: str


@dataclass(frozen=True, slots=True)
class SlopeForm:
    slope: float
    intercept: float


@dataclass(frozen=True, slots=True)
class GeneralForm:
    lhs: tuple[Term, ...]
    op: str
    rhs: tuple[Term, ...]


RelationNode = Union[StandardForm, SingleVariable, SlopeForm, GeneralForm]


@dataclass(frozen=True, slots=True)
class _Relation:
    lhs: tuple[Term, ...]
    op: str
    rhs: tuple[Term, ...]


class _Parser:
    """relation := side OP side END ; side := term (('+'|'-') term)*"""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.peek()
        if tok.kind is not kind:
            raise ParseError(f"Expected {kind.value}, found {tok.text or 'end of input'!r}")
        return self.advance()

    def relation(self) -> _Relation:
        lhs = self.side()
        op = self.expect(TokenKind.OP).text
        rhs = self.side()
        self.expect(TokenKind.END)
        return _Relation(tuple(lhs), op, tuple(rhs))

    def side(self) -> list[Term]:
        terms = [self.term(leading=True)]
        while self.peek().kind in (TokenKind.PLUS, TokenKind.MINUS):
            terms.append(self.term(leading=False))
        return terms

    def term(self, *, leading: bool) -> Term:
        sign = 1.0
        tok = self.peek()
        if tok.kind in (TokenKind.PLUS, TokenKind.MINUS):
            self.advance()
            sign = -1.0 if tok.kind is TokenKind.MINUS else 1.0
        elif not leading:
            raise ParseError(f"Expected a sign before {tok.text!r}")

        tok = self.peek()
        if tok.kind is TokenKind.NUMBER:
            value = self.advance().value
            if self.peek().kind is TokenKind.STAR:
                self.advance()
                var = self.expect(TokenKind.VAR).text
                return Term(var, sign * value)
            if self.peek().kind is TokenKind.VAR:
                return Term(self.advance().text, sign * value)
            return Term(None, sign * value)
        if tok.kind is TokenKind.VAR:
            return Term(self.advance().text, sign)
        raise ParseError(f"Expected a number or variable, found {tok.text or 'end of input'!r}")


def _kinds(terms: tuple[Term, ...]) -> list[str]:
    return [t.var or "c" for t in terms]


def _is_zero_literal(terms: tuple[Term, ...]) -> bool:
    return len(terms) == 1 and terms[0].var is None and terms[0].coef == 0


def _as_standard(rel: _Relation) -> StandardForm | None:
    if not _is_zero_literal(rel.rhs):
        return None
    kinds = _kinds(rel.lhs)
    if kinds not in (["x", "y"], ["x", "y", "c"]):
        return None
    const = rel.lhs[2].coef if len(rel.lhs) == 3 else 0.0
    return StandardForm(rel.lhs[0].coef, rel.lhs[1].coef, const, rel.op)


def _as_single(rel: _Relation) -> SingleVariable | None:
    if not _is_zero_literal(rel.rhs):
        return None
    kinds = _kinds(rel.lhs)
    if kinds not in (["x"], ["y"], ["x", "c"], ["y", "c"]):
        return None
    const = rel.lhs[1].coef if len(rel.lhs) == 2 else 0.0
    return SingleVariable(kinds[0], rel.lhs[0].coef, const, rel.op)


def _as_slope(rel: _Relation) -> SlopeForm | None:
    if rel.op != "=" or len(rel.lhs) != 1:
        return None
    head = rel.lhs[0]
    if head.var != "y" or head.coef != 1:
        return None
    kinds = _kinds(rel.rhs)
    if kinds == ["x"]:
        return SlopeForm(rel.rhs[0].coef, 0.0)
    if kinds == ["x", "c"]:
        return SlopeForm(rel.rhs[0].coef, rel.rhs[1].coef)
    if kinds == ["c"]:
        return SlopeForm(0.0, rel.rhs[0].coef)
    return None


def parse_relation(text: str) -> RelationNode:
    """Parse *text* into the first grammar variant that accepts it.

    Raises :class:`ParseError` when the text is not a single linear relation.
    """
    rel = _Parser(tokenize(text)).relation()
    for matcher in (_as_standard, _as_single, _as_slope):
        node = matcher(rel)
        if node is not None:
            return node
    return GeneralForm(rel.lhs, rel.op, rel.rhs)
