"""Fit styled text into a column budget, marking elided content with a symbol."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pi.stylish.spans import Spans
from pi.stylish.styled_grapheme import StyledGrapheme


class TruncationStyle(Enum):
    """Where the symbol goes relative to the content that survives."""

    LEFT = "left"  # keep the start, symbol on the right
    RIGHT = "right"  # keep the end, symbol on the left
    INNER = "inner"  # keep both ends, symbol in the middle
    OUTER = "outer"  # keep the middle, symbol on both sides


def _graphemes(text: Any) -> list[StyledGrapheme]:
    if text is None:
        return []
    return list(text.graphemes())


def _slice(text: Any, start: int | None, end: int | None) -> list[StyledGrapheme]:
    return _graphemes(text.slice_width(start, end))


def truncate(
    text: Any,
    width: int,
    symbol: Spans | str | None = None,
    style: TruncationStyle = TruncationStyle.LEFT,
) -> list[StyledGrapheme]:
    """Graphemes of *text* fitted to *width* columns.

    *text* is a :class:`Spans`, a ``str`` or any unbounded text (such as
    :class:`~pi.stylish.widgets.Repeat`) with ``width()``, ``graphemes()``
    and ``slice_width()``. Text that already fits is returned unchanged.
    When not even the symbol fits, the widest prefix of the symbol is
    returned, so the result never exceeds *width*.
    """
    if width < 0:
        raise ValueError(f"width must not be negative, got {width}")
    if isinstance(text, str):
        text = Spans.from_str(text)
    if symbol is None:
        symbol = Spans()
    elif isinstance(symbol, str):
        symbol = Spans.from_str(symbol)

    text_width = text.width()
    if text_width.is_bounded and text_width.columns <= width:
        return _graphemes(text)
    if width == 0:
        return []

    sw = symbol.bounded_width()
    copies = 2 if style is TruncationStyle.OUTER else 1
    if width < sw * copies:
        return _slice(symbol, 0, width)

    mark = _graphemes(symbol)
    room = width - sw * copies
    bounded = text_width.is_bounded
    tw = text_width.columns or 0

    if style is TruncationStyle.LEFT:
        return _slice(text, 0, room) + mark
    if style is TruncationStyle.RIGHT:
        if bounded:
            return mark + _slice(text, tw - room, None)
        return mark + _slice(text, 0, room)
    if style is TruncationStyle.OUTER:
        start = (tw - width + 2 * sw) // 2 if bounded else 0
        return mark + _slice(text, start, start + room) + mark
    if style is TruncationStyle.INNER:
        left = (room + 1) // 2
        right = room // 2
        if bounded:
            tail = _slice(text, tw - right, None) if right else []
        else:
            tail = _slice(text, 0, right)
        return _slice(text, 0, left) + mark + tail
    raise ValueError(f"unknown truncation style: {style!r}")
