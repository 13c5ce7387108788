"""Ordered offset -> style map with floor lookup.

Each entry means "starting at this offset the active style is this value,
until the next key or the end of the content". Keys are kept sorted in a
plain list and searched with :mod:`bisect`.
"""

from __future__ import annotations

import bisect
import logging
from typing import Any, Iterator

from pi.stylish.config import ShiftPolicy, get_config
from pi.stylish.errors import IndexShiftError

logger = logging.getLogger(__name__)


def _check_offset(offset: int) -> None:
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise TypeError(f"offset must be an int, got {type(offset).__name__}")
    if offset < 0:
        raise ValueError(f"offset must not be negative, got {offset}")


class StyleIndex:
    """Sorted mapping from content offset to the style starting there."""

    __slots__ = ("_keys", "_values")

    def __init__(self, entries: dict[int, Any] | None = None) -> None:
        self._keys: list[int] = []
        self._values: list[Any] = []
        if entries:
            for offset, style in sorted(entries.items()):
                self.insert(offset, style)

    # -- basic mapping -------------------------------------------------------

    def insert(self, offset: int, style: Any) -> Any:
        """Set the style starting at *offset*; return the style it replaced, if any."""
        _check_offset(offset)
        i = bisect.bisect_left(self._keys, offset)
        if i < len(self._keys) and self._keys[i] == offset:
            previous = self._values[i]
            self._values[i] = style
            return previous
        self._keys.insert(i, offset)
        self._values.insert(i, style)
        return None

    def floor(self, offset: int, default: Any = None) -> Any:
        """Style of the greatest key <= *offset*, or *default* when there is none."""
        i = bisect.bisect_right(self._keys, offset)
        if i == 0:
            return default
        return self._values[i - 1]

    def _span(self, start: int | None, end: int | None) -> tuple[int, int]:
        lo = 0 if start is None else bisect.bisect_left(self._keys, start)
        hi = len(self._keys) if end is None else bisect.bisect_left(self._keys, end)
        return lo, max(lo, hi)

    def range(self, start: int | None = None, end: int | None = None) -> list[tuple[int, Any]]:
        """Entries with ``start <= key < end``; ``None`` leaves a side open."""
        lo, hi = self._span(start, end)
        return list(zip(self._keys[lo:hi], self._values[lo:hi]))

    def keys(self) -> list[int]:
        return list(self._keys)

    def items(self) -> list[tuple[int, Any]]:
        return list(zip(self._keys, self._values))

    def copy(self) -> StyleIndex:
        clone = StyleIndex()
        clone._keys = list(self._keys)
        clone._values = list(self._values)
        return clone

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        return iter(zip(self._keys, self._values))

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, offset: object) -> bool:
        if not isinstance(offset, int):
            return False
        i = bisect.bisect_left(self._keys, offset)
        return i < len(self._keys) and self._keys[i] == offset

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyleIndex):
            return NotImplemented
        return self._keys == other._keys and self._values == other._values

    def __repr__(self) -> str:
        body = ", ".join(f"{k}: {v!r}" for k, v in self)
        return f"StyleIndex({{{body}}})"

    # -- maintenance ---------------------------------------------------------

    def dedup(self) -> None:
        """Drop entries whose style equals the preceding entry's style."""
        if len(self._keys) < 2:
            return
        keys = [self._keys[0]]
        values = [self._values[0]]
        for key, value in zip(self._keys[1:], self._values[1:]):
            if value == values[-1]:
                continue
            keys.append(key)
            values.append(value)
        self._keys = keys
        self._values = values

    def truncate(self, limit: int) -> None:
        """Drop every entry whose key is ``>= limit``."""
        i = bisect.bisect_left(self._keys, limit)
        del self._keys[i:]
        del self._values[i:]

    # -- derived indexes -----------------------------------------------------

    def slice(self, start: int | None = None, end: int | None = None) -> StyleIndex | None:
        """Entries inside ``[start, end)`` rebased so that *start* becomes 0.

        The entry in effect at *start* is carried over at key 0 even when its
        own key lies before *start*. Returns ``None`` for an empty index.
        """
        if not self._keys:
            return None
        base = 0 if start is None else start
        result = StyleIndex()
        i = bisect.bisect_right(self._keys, base)
        if i > 0:
            result.insert(0, self._values[i - 1])
        lo, hi = self._span(base, end)
        for key, value in zip(self._keys[lo:hi], self._values[lo:hi]):
            result.insert(key - base, value)
        return result

    def copy_with_shift(
        self,
        source: StyleIndex,
        start: int | None,
        end: int | None,
        shift: int,
        policy: ShiftPolicy | None = None,
    ) -> None:
        """Copy ``source`` entries with ``start <= key < end`` into this index at ``key + shift``.

        Keys that would become negative follow *policy* (the configured
        default when ``None``): ``"lenient"`` keeps the unshifted key,
        ``"saturate"`` clamps to 0 and ``"strict"`` raises
        :class:`IndexShiftError`. A *shift* that is not an integer raises
        :class:`IndexShiftError` before anything is copied.
        """
        if isinstance(shift, bool) or not isinstance(shift, int):
            raise IndexShiftError(
                f"shift {shift!r} is not representable as an offset", shift=shift
            )
        if policy is None:
            policy = get_config().shift_policy

        for key, value in source.range(start, end):
            new_key = key + shift
            if new_key < 0:
                if policy == "strict":
                    raise IndexShiftError(
                        f"key {key} shifted by {shift} is negative", key=key, shift=shift
                    )
                fallback = key if policy == "lenient" else 0
                logger.debug(
                    "Shifted key %d%+d out of range; using %d (%s)", key, shift, fallback, policy
                )
                new_key = fallback
            self.insert(new_key, value)
        self.dedup()
