"""Unbounded text that repeats its content forever."""

from __future__ import annotations

import itertools
from typing import Iterator

from pi.stylish.slicing import column_in_range
from pi.stylish.spans import Spans
from pi.stylish.styled_grapheme import StyledGrapheme
from pi.stylish.width import UNBOUNDED, Width


class Repeat:
    """Text of unbounded width made by cycling *content*."""

    def __init__(self, content: Spans | str) -> None:
        if isinstance(content, str):
            content = Spans.from_str(content)
        self.content = content

    def width(self) -> Width:
        return UNBOUNDED

    def graphemes(self) -> Iterator[StyledGrapheme]:
        """Cycle the content's graphemes forever (nothing for empty content)."""
        return itertools.cycle(list(self.content.graphemes()))

    def slice_width(self, start: int | None = None, end: int | None = None) -> Spans | None:
        """Columns ``[start, end)`` of the repetition; *end* must be finite."""
        if end is None:
            raise ValueError("slicing unbounded text requires a finite end")
        if start is not None and start < 0:
            raise ValueError(f"start column must not be negative, got {start}")
        if self.content.bounded_width() == 0:
            return None

        picked: list[StyledGrapheme] = []
        column = 0
        for item in self.graphemes():
            if column >= end:
                break
            w = item.width().columns or 0
            if column_in_range(column, w, start, end):
                picked.append(item)
            elif picked:
                break
            column += w

        if not picked:
            return None
        return Spans.from_graphemes(picked, self.content.default_style)

    def __repr__(self) -> str:
        return f"Repeat({self.content!r})"
