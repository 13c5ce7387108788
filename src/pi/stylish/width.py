"""Grapheme segmentation and display-width measurement.

Provides the :class:`Width` monoid (bounded column counts plus an absorbing
unbounded value), grapheme segmentation via the ``grapheme`` package and
per-cluster terminal widths built on ``wcwidth``.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterable, Iterator

import grapheme
import wcwidth as _wcwidth

from pi.stylish.config import get_config


# ---------------------------------------------------------------------------
# Width
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Width:
    """Display width of a text: a column count, or unbounded.

    ``columns`` is ``None`` for unbounded (indefinitely repeating) text.
    Addition is commutative and an unbounded operand absorbs the other.
    """

    columns: int | None

    @classmethod
    def bounded(cls, columns: int) -> Width:
        if columns < 0:
            raise ValueError(f"width must not be negative, got {columns}")
        return cls(columns)

    @property
    def is_bounded(self) -> bool:
        return self.columns is not None

    def __add__(self, other: object) -> Width:
        if not isinstance(other, Width):
            return NotImplemented
        if self.columns is None or other.columns is None:
            return UNBOUNDED
        return Width(self.columns + other.columns)

    @classmethod
    def total(cls, widths: Iterable[Width]) -> Width:
        result = cls(0)
        for w in widths:
            result = result + w
        return result

    def __repr__(self) -> str:
        if self.columns is None:
            return "Width.UNBOUNDED"
        return f"Width.bounded({self.columns})"


UNBOUNDED = Width(None)


# ---------------------------------------------------------------------------
# Grapheme segmentation
# ---------------------------------------------------------------------------


def graphemes(text: str) -> Iterator[str]:
    """Iterate over the extended grapheme clusters of *text*."""
    return grapheme.graphemes(text)


# ---------------------------------------------------------------------------
# Width cache (capped, cleared when full)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}


def _cache_width(key: str, value: int) -> int:
    limit = get_config().width_cache_size
    if limit == 0:
        return value
    if len(_width_cache) >= limit:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def clear_width_cache() -> None:
    _width_cache.clear()


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _is_emoji_cluster(codepoints: str) -> bool:
    for ch in codepoints:
        cp = ord(ch)
        # VS16, ZWJ, skin tone modifiers, regional indicators
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return True
    return False


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters are zero columns wide, except tab which takes the
    configured tab width. Emoji clusters are two columns; everything else
    defers to ``wcwidth`` on the first meaningful codepoint.
    """
    if not g:
        return 0

    if g == "\t":
        return get_config().tab_width

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        if cp < 0x7F:
            return 1

    cached = _width_cache.get(g)
    if cached is not None:
        return cached

    if len(g) == 1:
        return _cache_width(g, max(_wcwidth.wcwidth(g), 0))

    first_cp = ord(g[0])
    if _is_emoji_cluster(g) or first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return _cache_width(g, 2)

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return _cache_width(g, 0)

    return _cache_width(g, max(_wcwidth.wcwidth(g[0]), 0))


def text_width(text: str) -> int:
    """Sum of the grapheme widths of *text*."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(grapheme_width(g) for g in graphemes(text))
