"""Paint capability for style values.

Styles are opaque to the rest of the package; only equality is used when
building indexes. Rendering asks the style itself to paint text, either one
run at a time (``paint``) or in batch (``paint_many``), which lets markup
styles merge adjacent runs before emitting delimiters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol, runtime_checkable

Run = tuple[Any, str]


@runtime_checkable
class Painter(Protocol):
    """A style that knows how to render text."""

    def paint(self, text: str) -> str:
        """Return *text* decorated with this style."""
        ...


def paint_one(style: Any, text: str) -> str:
    """Paint a single run; styles without a ``paint`` method render raw."""
    if isinstance(style, Painter):
        return style.paint(text)
    return text


def coalesce(runs: Iterable[Run]) -> list[Run]:
    """Merge adjacent runs with equal styles and drop empty runs."""
    merged: list[Run] = []
    for style, text in runs:
        if not text:
            continue
        if merged and merged[-1][0] == style:
            merged[-1] = (style, merged[-1][1] + text)
        else:
            merged.append((style, text))
    return merged


def paint_runs(runs: Iterable[Run]) -> str:
    """Render ``(style, text)`` runs.

    Dispatches to the ``paint_many`` classmethod of the first styled run's
    type when it has one; otherwise each run is painted on its own.
    """
    runs = list(runs)
    for style, _text in runs:
        if style is None:
            continue
        paint_many = getattr(type(style), "paint_many", None)
        if paint_many is not None:
            return paint_many(runs)
        break
    return "".join(paint_one(style, text) for style, text in runs)


# ---------------------------------------------------------------------------
# Tag
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tag:
    """A simple format that surrounds text with an opening and closing tag."""

    opening: str = ""
    closing: str = ""

    def paint(self, text: str) -> str:
        return f"{self.opening}{text}{self.closing}"

    @classmethod
    def paint_many(cls, runs: Iterable[Run]) -> str:
        """Paint runs, emitting one tag pair per stretch of equal tags."""
        return "".join(paint_one(style, text) for style, text in coalesce(runs))
