"""Width-aware slicing.

Converts a display-column range into an offset range without cutting a
grapheme cluster. Works on plain strings and on any text object that can
report its raw content and slice itself by offset.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pi.stylish.width import Width, grapheme_width, graphemes


@runtime_checkable
class HasRawContent(Protocol):
    def raw(self) -> str: ...


@runtime_checkable
class ByteSliceable(HasRawContent, Protocol):
    """Text that can produce a sub-text for an offset range."""

    def slice(self, start: int | None = None, end: int | None = None) -> Any: ...


@runtime_checkable
class WidthMeasurable(Protocol):
    def width(self) -> Width: ...


@runtime_checkable
class Appendable(Protocol):
    def join(self, other: Any) -> Any: ...


def column_in_range(column: int, width: int, start: int | None, end: int | None) -> bool:
    """Whether a grapheme at *column* spanning *width* columns lies in ``[start, end)``.

    A zero-width grapheme is in range when its position is.
    """
    if start is not None and column < start:
        return False
    if end is None:
        return True
    if width == 0:
        return column < end
    return column + width <= end


def slice_width(text: Any, start: int | None = None, end: int | None = None) -> Any:
    """Return the part of *text* occupying display columns ``[start, end)``.

    A grapheme is kept only when every column it occupies is inside the
    range. The result is the contiguous run of kept graphemes starting at
    the first one; ``None`` when no grapheme fits (for example a range that
    falls inside a single wide character).
    """
    if start is not None and start < 0:
        raise ValueError(f"start column must not be negative, got {start}")
    if end is not None and end < 0:
        raise ValueError(f"end column must not be negative, got {end}")

    if isinstance(text, str):
        raw = text
    elif isinstance(text, ByteSliceable):
        raw = text.raw()
    else:
        raise TypeError(f"cannot slice {type(text).__name__} by width")

    column = 0
    offset = 0
    begin: int | None = None
    finish = len(raw)
    for g in graphemes(raw):
        w = grapheme_width(g)
        if column_in_range(column, w, start, end):
            if begin is None:
                begin = offset
        elif begin is not None:
            finish = offset
            break
        column += w
        offset += len(g)

    if begin is None:
        return None
    if isinstance(text, str):
        return text[begin:finish]
    return text.slice(begin, finish)
