"""A truncatable piece of text with its truncation settings."""

from __future__ import annotations

from typing import Any

from pi.stylish.config import get_config
from pi.stylish.spans import Spans
from pi.stylish.styled_grapheme import StyledGrapheme
from pi.stylish.truncation import TruncationStyle, truncate
from pi.stylish.width import Width

# Marks "symbol not given"; None means no symbol at all.
_DEFAULT_SYMBOL: Any = object()


class TextWidget:
    """Text plus the truncation style and symbol used to fit it."""

    def __init__(
        self,
        text: Any,
        truncation_style: TruncationStyle = TruncationStyle.LEFT,
        symbol: Spans | str | None = _DEFAULT_SYMBOL,
    ) -> None:
        if isinstance(text, str):
            text = Spans.from_str(text)
        if symbol is _DEFAULT_SYMBOL:
            symbol = get_config().ellipsis
        self.text = text
        self.truncation_style = truncation_style
        self.symbol = symbol

    def width(self) -> Width:
        return self.text.width()

    def truncate(self, width: int) -> list[StyledGrapheme]:
        return truncate(self.text, width, self.symbol, self.truncation_style)

    def __repr__(self) -> str:
        return (
            f"TextWidget({self.text!r}, {self.truncation_style}, symbol={self.symbol!r})"
        )
