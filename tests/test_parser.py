import sys
from pathlib import Path
from typing import Any

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from inequality_plane import parsing
from inequality_plane.constants import PALETTE
from inequality_plane.model import LinearForm, Operator, Solved, Unsolved
from inequality_plane.parsing import format_form, normalize, parse, parse_linear, to_sympy
from inequality_plane.parsing.lowering import format_number
from inequality_plane.session import ParseContext


def test_standard_form() -> None:
    eq = parse("2x-3y+1>=0", ParseContext())
    assert eq is not None
    assert (eq.a, eq.b, eq.c) == (2, -3, 1)
    assert eq.operator is Operator.GE
    assert eq.label == "d1"
    assert eq.color == PALETTE[0]
    assert eq.text == "2x - 3y + 1 >= 0"
    assert isinstance(eq.state, Unsolved)


def test_unicode_and_case_normalisation() -> None:
    assert normalize(" 2X − 3Y ≥ 0 ") == "2x-3y>=0"
    assert normalize("x ≤ 1") == "x<=1"
    assert normalize("x => 1") == "x>=1"
    assert normalize("x =< 1") == "x<=1"
    assert normalize("x--y") == "x+y"
    assert normalize("x+-y") == "x-y"
    assert normalize("x-+-y") == "x+y"

    form = parse_linear("2X − 3Y + 1 ≥ 0")
    assert form == LinearForm(2.0, -3.0, 1.0, Operator.GE)


def test_single_variable_forms() -> None:
    assert parse_linear("-3y+6<0") == LinearForm(0.0, -3.0, 6.0, Operator.LT)
    assert parse_linear("x >= 0") == LinearForm(1.0, 0.0, 0.0, Operator.GE)
    assert parse_linear("x>-2") == LinearForm(1.0, 0.0, 2.0, Operator.GT)


def test_slope_form_is_an_equation() -> None:
    assert parse_linear("y = 2x + 1") == LinearForm(-2.0, 1.0, -1.0, Operator.EQ)
    assert parse_linear("y = -x") == LinearForm(1.0, 1.0, 0.0, Operator.EQ)
    assert parse_linear("y = 3") == LinearForm(0.0, 1.0, -3.0, Operator.EQ)

    eq = parse("y = 2x + 1", ParseContext())
    assert eq is not None
    assert eq.state == Solved(None)
    assert eq.solved


def test_general_form_moves_everything_left() -> None:
    assert parse_linear("2x < y - 4") == LinearForm(2.0, -1.0, 4.0, Operator.LT)
    assert parse_linear("2*x + 3*y <= 6") == LinearForm(2.0, 3.0, -6.0, Operator.LE)
    assert parse_linear("x + 1 > 3") == LinearForm(1.0, 0.0, -2.0, Operator.GT)
    assert parse_linear("x - -2 > 0") == LinearForm(1.0, 0.0, 2.0, Operator.GT)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "hello",
        "x + y",
        "x^2 > 0",
        "x != 0",
        "x ≠ 1",
        "3 > 0",
        "0x + 0y > 1",
        "x y > 0",
        "x + y > 0 > 1",
        "2x3 < 0",
    ],
)
def test_unparseable_text_returns_none(text: str) -> None:
    ctx = ParseContext()
    assert parse_linear(text, ctx) is None
    assert parse(text, ctx) is None
    assert ctx.next_label() == "d1"


@pytest.mark.parametrize(
    "form",
    [
        LinearForm(2.0, -3.0, 1.0, Operator.GE),
        LinearForm(0.5, -1.0, 2.25, Operator.LE),
        LinearForm(-1.0, -1.0, 0.0, Operator.LT),
        LinearForm(0.0, 1.0, -3.0, Operator.GT),
        LinearForm(1.0, 0.0, 0.0, Operator.GE),
        LinearForm(-2.0, 1.0, -1.0, Operator.EQ),
    ],
)
def test_formatted_text_parses_back(form: LinearForm) -> None:
    assert parse_linear(format_form(form)) == form


def test_format_number() -> None:
    assert format_number(2.0) == "2"
    assert format_number(-3.0000000000001) == "-3"
    assert format_number(0.5) == "0.5"


def test_latex_is_built_with_sympy() -> None:
    import sympy as sp

    eq = parse("2x-3y+1>=0", ParseContext())
    assert eq is not None
    assert "\\geq" in eq.latex

    rel = to_sympy(eq.form)
    assert isinstance(rel, sp.GreaterThan)
    assert rel.lhs.free_symbols == set(sp.symbols("x y"))


def test_memo_hit_skips_parsing(monkeypatch: Any) -> None:
    ctx = ParseContext()
    first = parse_linear("x + y < 3", ctx)

    def boom(text: str) -> Any:
        raise AssertionError("parser should not run on a memo hit")

    monkeypatch.setattr(parsing, "parse_relation", boom)
    assert parse_linear("x + y < 3", ctx) is first


def test_memo_hit_still_allocates_labels() -> None:
    ctx = ParseContext()
    first = parse("x + y < 3", ctx)
    second = parse("x + y < 3", ctx)
    assert first is not None and second is not None
    assert (first.label, second.label) == ("d1", "d2")
    assert first.color != second.color


def test_memo_remembers_failures_and_is_bounded() -> None:
    ctx = ParseContext(memo_size=2)
    parse_linear("nonsense", ctx)
    assert ctx.memo_lookup("nonsense") == (True, None)
    parse_linear("x > 0", ctx)
    parse_linear("y > 0", ctx)
    assert ctx.memo_entries == 2
    assert ctx.memo_lookup("nonsense") == (False, None)
