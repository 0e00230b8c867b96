import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from inequality_plane.constants import PALETTE
from inequality_plane.model import LinearForm, Operator
from inequality_plane.parsing import parse
from inequality_plane.session import ParseContext


def test_labels_are_sequential_and_reset() -> None:
    ctx = ParseContext()
    assert [ctx.next_label() for _ in range(3)] == ["d1", "d2", "d3"]
    ctx.reset()
    assert ctx.next_label() == "d1"


def test_colors_recycle_after_palette_is_exhausted() -> None:
    ctx = ParseContext(("#aaaaaa", "#bbbbbb"))
    assert [ctx.next_color() for _ in range(5)] == [
        "#aaaaaa",
        "#bbbbbb",
        "#aaaaaa",
        "#bbbbbb",
        "#aaaaaa",
    ]


def test_reset_restarts_palette_and_labels_for_next_inequality() -> None:
    ctx = ParseContext()
    parse("x > 0", ctx)
    parse("y > 0", ctx)
    ctx.reset()
    eq = parse("x + y > 1", ctx)
    assert eq is not None
    assert eq.label == "d1"
    assert eq.color == PALETTE[0]


def test_contexts_are_independent() -> None:
    one, two = ParseContext(), ParseContext()
    parse("x > 0", one)
    parse("y > 0", one)
    eq = parse("x > 0", two)
    assert eq is not None
    assert eq.label == "d1"


def test_memo_evicts_least_recently_used() -> None:
    ctx = ParseContext(memo_size=2)
    form = LinearForm(1.0, 0.0, 0.0, Operator.GT)
    ctx.memo_store("a", form)
    ctx.memo_store("b", None)
    assert ctx.memo_lookup("a") == (True, form)
    ctx.memo_store("c", None)
    assert ctx.memo_lookup("b") == (False, None)
    assert ctx.memo_lookup("a")[0]
    assert ctx.memo_entries == 2


def test_memo_survives_reset() -> None:
    ctx = ParseContext()
    parse("x > 0", ctx)
    ctx.reset()
    assert ctx.memo_lookup("x > 0")[0]


@pytest.mark.parametrize("kwargs", [{"palette": ()}, {"memo_size": 0}])
def test_invalid_configuration(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ParseContext(**kwargs)
