"""Per-session parser state: label and colour allocators plus the parse memo."""
from __future__ import annotations

from collections import OrderedDict
from typing import Sequence

from .constants import LABEL_PREFIX, PALETTE, PARSE_MEMO_SIZE
from .model import LinearForm

__all__ = ["ParseContext"]


class ParseContext:
    """Explicit home for the state the parser needs across calls.

    Labels are handed out as ``d1, d2, …`` in acceptance order. Colours come
    from *palette* without repetition until it is exhausted, then the palette
    starts over. :meth:`reset` restarts both sequences. The memo maps raw input
    text to its :class:`LinearForm` (or ``None`` for unparseable text) and
    evicts the least recently used entry beyond *memo_size*.
    """

    def __init__(
        self,
        palette: Sequence[str] = PALETTE,
        *,
        label_prefix: str = LABEL_PREFIX,
        memo_size: int = PARSE_MEMO_SIZE,
    ) -> None:
        if not palette:
            raise ValueError("palette must contain at least one colour")
        if memo_size <= 0:
            raise ValueError("memo_size must be > 0")
        self.palette = tuple(palette)
        self.label_prefix = label_prefix
        self.memo_size = memo_size
        self._label_count = 0
        self._used_colors: list[str] = []
        self._memo: OrderedDict[str, LinearForm | None] = OrderedDict()

    # ------------------------------------------------------------------
    # allocators
    def next_label(self) -> str:
        self._label_count += 1
        return f"{self.label_prefix}{self._label_count}"

    def next_color(self) -> str:
        if len(self._used_colors) >= len(self.palette):
            self._used_colors.clear()
        for color in self.palette:
            if color not in self._used_colors:
                self._used_colors.append(color)
                return color
        # palettes with repeated entries
        self._used_colors.clear()
        self._used_colors.append(self.palette[0])
        return self.palette[0]

    def reset(self) -> None:
        self._label_count = 0
        self._used_colors.clear()

    # ------------------------------------------------------------------
    # memo
    def memo_lookup(self, text: str) -> tuple[bool, LinearForm | None]:
        """Return ``(hit, form)`` for *text*."""
        if text not in self._memo:
            return False, None
        self._memo.move_to_end(text)
        return True, self._memo[text]

    def memo_store(self, text: str, form: LinearForm | None) -> None:
        self._memo[text] = form
        self._memo.move_to_end(text)
        while len(self._memo) > self.memo_size:
            self._memo.popitem(last=False)

    @property
    def memo_entries(self) -> int:
        return len(self._memo)
