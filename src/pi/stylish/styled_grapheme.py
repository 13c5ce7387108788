"""A single grapheme cluster paired with its style."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pi.stylish.painter import paint_one
from pi.stylish.width import Width, grapheme_width


@dataclass(frozen=True)
class StyledGrapheme:
    """One grapheme cluster and the style applied to it."""

    style: Any
    grapheme: str

    def raw(self) -> str:
        return self.grapheme

    def width(self) -> Width:
        return Width(grapheme_width(self.grapheme))

    def __str__(self) -> str:
        return paint_one(self.style, self.grapheme)
