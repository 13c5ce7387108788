"""Styled text buffer: content plus an offset -> style index.

A :class:`Spans` value owns its content string and a :class:`StyleIndex`
describing which style is active from each offset on. Values are immutable;
every edit (replace, slice, join) builds a new buffer by shift-copying the
untouched parts of the index instead of re-deriving styles grapheme by
grapheme.
"""

from __future__ import annotations

import itertools
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Union

from pi.stylish.ansi import parse_ansi
from pi.stylish.painter import Run, paint_one, paint_runs
from pi.stylish.slicing import slice_width
from pi.stylish.style_index import StyleIndex
from pi.stylish.styled_grapheme import StyledGrapheme
from pi.stylish.template import expand
from pi.stylish.width import Width, graphemes, text_width

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Span:
    """One run of content sharing a single style."""

    style: Any
    content: str

    def graphemes(self) -> Iterator[StyledGrapheme]:
        for g in graphemes(self.content):
            yield StyledGrapheme(self.style, g)

    def raw(self) -> str:
        return self.content

    def width(self) -> Width:
        return Width.bounded(text_width(self.content))

    def __str__(self) -> str:
        return paint_one(self.style, self.content)


@dataclass
class Split:
    """A segment and the delimiter that ended it.

    ``segment`` is ``None`` when nothing precedes the delimiter; ``delim`` is
    ``None`` for trailing content after the last delimiter.
    """

    segment: Spans | None
    delim: Spans | None


Replacement = Union[str, "Spans", Callable[["re.Match[str]"], Union[str, "Spans"]]]


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------


class Spans:
    """Text whose ranges carry opaque style values.

    For every offset the active style is the index entry at or before it,
    or ``default_style`` when there is none. A non-empty buffer always has
    an entry at offset 0, so two buffers with the same runs compare equal
    regardless of how they were built.
    """

    __slots__ = ("_content", "_index", "_default_style")

    def __init__(
        self,
        content: str = "",
        index: StyleIndex | None = None,
        default_style: Any = None,
    ) -> None:
        self._content = content
        self._index = index.copy() if index is not None else StyleIndex()
        self._default_style = default_style
        self._normalize()

    def _normalize(self) -> None:
        self._index.truncate(len(self._content))
        if self._content and 0 not in self._index:
            self._index.insert(0, self._default_style)
        self._index.dedup()

    # -- construction --------------------------------------------------------

    @classmethod
    def from_graphemes(
        cls, items: Iterable[StyledGrapheme], default_style: Any = None
    ) -> Spans:
        """Build a buffer in one pass, opening an index entry on each style change."""
        index = StyleIndex()
        parts: list[str] = []
        offset = 0
        previous: Any = None
        for item in items:
            if not item.grapheme:
                continue
            if offset == 0 or item.style != previous:
                index.insert(offset, item.style)
                previous = item.style
            parts.append(item.grapheme)
            offset += len(item.grapheme)
        return cls("".join(parts), index, default_style)

    @classmethod
    def from_str(cls, text: str, style: Any = None) -> Spans:
        """A single run of *text* in *style*."""
        if not text:
            return cls()
        return cls(text, StyleIndex({0: style}))

    @classmethod
    def from_spans(cls, runs: Iterable[Span | Run]) -> Spans:
        """Concatenate ``Span`` objects or ``(style, text)`` pairs."""
        result = cls()
        for run in runs:
            if isinstance(run, Span):
                result._push_run(run.style, run.content)
            else:
                style, text = run
                result._push_run(style, text)
        return result

    @classmethod
    def from_ansi(cls, text: str) -> Spans:
        """Parse a string with SGR escape sequences into ``AnsiStyle`` runs."""
        return cls.from_spans(parse_ansi(text))

    # -- in-place building (only on buffers that are not yet shared) --------

    def _push_run(self, style: Any, text: str) -> None:
        if not text:
            return
        self._index.insert(len(self._content), style)
        self._content += text
        self._index.dedup()

    def _push_region(self, source: Spans, start: int, end: int, text: str | None = None) -> None:
        """Append ``source[start:end]``, or *text* laid out with that region's styles.

        Styles of the region are shift-copied relative to *start*; entries
        that fall past the appended text are dropped.
        """
        if text is None:
            text = source._content[start:end]
        if not text:
            return
        base = len(self._content)
        self._index.insert(base, source.style_at(start))
        self._index.copy_with_shift(source._index, start + 1, end, base - start)
        self._content += text
        self._index.truncate(len(self._content))

    def _push(self, other: Spans) -> None:
        self._push_region(other, 0, len(other._content))

    # -- accessors -----------------------------------------------------------

    @property
    def content(self) -> str:
        return self._content

    @property
    def default_style(self) -> Any:
        return self._default_style

    @property
    def index(self) -> StyleIndex:
        return self._index.copy()

    def raw(self) -> str:
        return self._content

    def __len__(self) -> int:
        return len(self._content)

    def style_at(self, offset: int) -> Any:
        """Style active at *offset*."""
        return self._index.floor(offset, self._default_style)

    def width(self) -> Width:
        return Width.bounded(text_width(self._content))

    def bounded_width(self) -> int:
        return text_width(self._content)

    # -- views ---------------------------------------------------------------

    def graphemes(self) -> Iterator[StyledGrapheme]:
        """Iterate over styled grapheme clusters; each call starts over."""
        entries = self._index.items()
        i = 0
        style = self._default_style
        offset = 0
        for g in graphemes(self._content):
            while i < len(entries) and entries[i][0] <= offset:
                style = entries[i][1]
                i += 1
            yield StyledGrapheme(style, g)
            offset += len(g)

    def spans(self) -> Iterator[Span]:
        """Iterate over maximal runs of equal style."""
        entries = self._index.items()
        if not self._content:
            return
        if not entries or entries[0][0] > 0:
            first = entries[0][0] if entries else len(self._content)
            yield Span(self._default_style, self._content[:first])
        for i, (key, style) in enumerate(entries):
            end = entries[i + 1][0] if i + 1 < len(entries) else len(self._content)
            yield Span(style, self._content[key:end])

    # -- slicing -------------------------------------------------------------

    def slice(self, start: int | None = None, end: int | None = None) -> Spans | None:
        """Sub-buffer for the offsets ``[start, end)``; ``None`` for invalid bounds."""
        lo = 0 if start is None else start
        hi = len(self._content) if end is None else end
        if lo < 0 or hi > len(self._content) or lo > hi:
            return None
        index = self._index.slice(lo, hi)
        return Spans(self._content[lo:hi], index, self._default_style)

    def __getitem__(self, key: slice) -> Spans:
        if not isinstance(key, slice):
            raise TypeError(f"Spans indices must be slices, not {type(key).__name__}")
        start, stop, step = key.indices(len(self._content))
        if step != 1:
            raise ValueError("Spans slices do not support a step")
        stop = max(start, stop)
        return Spans(self._content[start:stop], self._index.slice(start, stop), self._default_style)

    def slice_width(self, start: int | None = None, end: int | None = None) -> Spans | None:
        """Sub-buffer covering display columns ``[start, end)``."""
        return slice_width(self, start, end)

    # -- joining and splitting -----------------------------------------------

    def join(self, other: Spans | Span | str) -> Spans:
        """Concatenate; a plain ``str`` continues the style active at the end."""
        result = self.copy()
        if isinstance(other, Spans):
            result._push(other)
        elif isinstance(other, Span):
            result._push_run(other.style, other.content)
        elif isinstance(other, str):
            style = self.style_at(len(self._content) - 1) if self._content else self._default_style
            result._push_run(style, other)
        else:
            raise TypeError(f"cannot join Spans with {type(other).__name__}")
        return result

    def __add__(self, other: object) -> Spans:
        if not isinstance(other, (Spans, Span, str)):
            return NotImplemented
        return self.join(other)

    def copy(self) -> Spans:
        return Spans(self._content, self._index, self._default_style)

    def split(self, delimiter: str) -> Iterator[Split]:
        """Split on a literal delimiter, keeping each delimiter with its styles."""
        if not delimiter:
            raise ValueError("empty separator")
        last_end = 0
        start = self._content.find(delimiter)
        while start != -1:
            end = start + len(delimiter)
            segment = self.slice(last_end, start) if start > last_end else None
            yield Split(segment, self.slice(start, end))
            last_end = end
            start = self._content.find(delimiter, last_end)
        if last_end < len(self._content):
            yield Split(self.slice(last_end), None)

    # -- replacing -----------------------------------------------------------

    def _replace_matches(
        self,
        matches: Iterable[re.Match[str]],
        replace: Callable[[re.Match[str]], str | Spans],
    ) -> tuple[Spans, int]:
        result = Spans(default_style=self._default_style)
        last_end = 0
        count = 0
        for match in matches:
            start, end = match.span()
            result._push_region(self, last_end, start)
            new = replace(match)
            if isinstance(new, Spans):
                result._push(new)
            else:
                result._push_region(self, start, end, new)
            last_end = end
            count += 1
        if count == 0:
            return self, 0
        result._push_region(self, last_end, len(self._content))
        result._normalize()
        return result, count

    def replace(self, old: str, new: str | Spans) -> Spans:
        """Replace every literal occurrence of *old*, left to right.

        A ``str`` replacement takes over the style layout of the text it
        replaces; a :class:`Spans` replacement keeps its own styles.
        """
        result, count = self._replace_matches(
            re.finditer(re.escape(old), self._content), lambda _match: new
        )
        logger.debug("Replaced %d occurrence(s) of %r", count, old)
        return result

    def replace_regex(
        self,
        pattern: str | re.Pattern[str],
        replacement: Replacement,
        count: int = 0,
    ) -> Spans:
        """Replace matches of *pattern*; at most *count* of them when non-zero.

        *replacement* may be a template string with ``$1`` / ``${name}``
        references, a :class:`Spans` whose runs are each expanded as a
        template, or a callable receiving the match.
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern

        def replace(match: re.Match[str]) -> str | Spans:
            if isinstance(replacement, str):
                return expand(replacement, match)
            if isinstance(replacement, Spans):
                return Spans.from_spans(
                    (span.style, expand(span.content, match)) for span in replacement.spans()
                )
            return replacement(match)

        matches: Iterable[re.Match[str]] = regex.finditer(self._content)
        if count:
            matches = itertools.islice(matches, count)
        result, replaced = self._replace_matches(matches, replace)
        logger.debug("Replaced %d match(es) of %r", replaced, regex.pattern)
        return result

    # -- rendering -----------------------------------------------------------

    def render(self, painter: Callable[[Iterable[Run]], str] | None = None) -> str:
        """Paint every run, through *painter* when given."""
        runs = [(span.style, span.content) for span in self.spans()]
        if painter is not None:
            return painter(runs)
        return paint_runs(runs)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Spans):
            return NotImplemented
        return (
            self._content == other._content
            and self._index == other._index
            and self._default_style == other._default_style
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        runs = ", ".join(f"({span.style!r}, {span.content!r})" for span in self.spans())
        return f"Spans([{runs}])"
