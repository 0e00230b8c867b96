"""Input normalisation and tokenisation for inequality text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = ["ParseError", "TokenKind", "Token", "normalize", "tokenize"]


class ParseError(ValueError):
    """Raised internally when text does not match any supported grammar."""


class TokenKind(str, Enum):
    NUMBER = "number"
    VAR = "var"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    OP = "op"
    END = "end"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    value: float = 0.0


# Order matters: two-character forms must be rewritten before single glyphs
_REPLACEMENTS = (
    ("−", "-"),  # unicode minus
    ("≤", "<="),
    ("≥", ">="),
    ("≠", "!="),
    ("=>", ">="),
    ("=<", "<="),
    ("X", "x"),
    ("Y", "y"),
)

_SIGN_RUNS = (("--", "+"), ("+-", "-"), ("-+", "-"), ("++", "+"))

_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_OP_RE = re.compile(r"<=|>=|!=|<|>|=")


def normalize(text: str) -> str:
    """Return *text* without whitespace and with canonical operator glyphs."""
    s = re.sub(r"\s+", "", str(text))
    for old, new in _REPLACEMENTS:
        s = s.replace(old, new)
    changed = True
    while changed:
        changed = False
        for old, new in _SIGN_RUNS:
            if old in s:
                s = s.replace(old, new)
                changed = True
    return s


def tokenize(text: str) -> list[Token]:
    """Split normalised text into tokens, ending with an ``END`` token."""
    s = normalize(text)
    tokens: list[Token] = []
    pos = 0
    while pos < len(s):
        ch = s[pos]
        m = _NUMBER_RE.match(s, pos)
        if m:
            tokens.append(Token(TokenKind.NUMBER, m.group(0), float(m.group(0))))
            pos = m.end()
            continue
        if ch in "xy":
            tokens.append(Token(TokenKind.VAR, ch))
            pos += 1
            continue
        if ch == "+":
            tokens.append(Token(TokenKind.PLUS, ch))
            pos += 1
            continue
        if ch == "-":
            tokens.append(Token(TokenKind.MINUS, ch))
            pos += 1
            continue
        if ch == "*":
            tokens.append(Token(TokenKind.STAR, ch))
            pos += 1
            continue
        m = _OP_RE.match(s, pos)
        if m:
            tokens.append(Token(TokenKind.OP, m.group(0)))
            pos = m.end()
            continue
        raise ParseError(f"Unexpected character {ch!r} at position {pos}")
    tokens.append(Token(TokenKind.END, ""))
    return tokens
