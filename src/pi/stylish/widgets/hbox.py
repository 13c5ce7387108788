"""Horizontal layout that shares a column budget between widgets."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pi.stylish.spans import Spans
from pi.stylish.width import Width

logger = logging.getLogger(__name__)


def _split_evenly(indices: list[int], space: int, allocation: list[int]) -> None:
    """Give each widget an equal share; earlier widgets take the remainder."""
    if not indices:
        return
    share, remainder = divmod(space, len(indices))
    for position, i in enumerate(indices):
        allocation[i] = share + (1 if position < remainder else 0)


class HBox:
    """Widgets laid out left to right on a single line.

    Any object with ``width() -> Width`` and
    ``truncate(width) -> list[StyledGrapheme]`` can be a child; normally a
    :class:`~pi.stylish.widgets.TextWidget`.
    """

    def __init__(self, widgets: Iterable[Any] = ()) -> None:
        self.widgets: list[Any] = list(widgets)

    def push(self, widget: Any) -> HBox:
        self.widgets.append(widget)
        return self

    def __len__(self) -> int:
        return len(self.widgets)

    def allocate(self, total: int) -> list[int]:
        """Column width given to each widget for a budget of *total* columns.

        Widgets that fit in the current fair share keep their natural width
        and release the rest; the share is recomputed until no more widgets
        fit, then the remaining bounded widgets split what is left. Unbounded
        widgets share whatever the bounded ones did not use.
        """
        if total < 0:
            raise ValueError(f"total width must not be negative, got {total}")

        widths: list[Width] = [widget.width() for widget in self.widgets]
        allocation = [0] * len(widths)
        unresolved = [i for i, w in enumerate(widths) if w.is_bounded]
        unbounded = [i for i, w in enumerate(widths) if not w.is_bounded]
        space = total

        while unresolved:
            target = space / len(unresolved)
            fits = [i for i in unresolved if (widths[i].columns or 0) <= target]
            if not fits:
                _split_evenly(unresolved, space, allocation)
                space = 0
                break
            for i in fits:
                allocation[i] = widths[i].columns or 0
                space -= allocation[i]
            unresolved = [i for i in unresolved if i not in fits]

        _split_evenly(unbounded, space, allocation)
        logger.debug("Allocated %s of %d columns", allocation, total)
        return allocation

    def truncate(self, total: int) -> Spans:
        """Fit every widget into its allocation and concatenate the results."""
        result = Spans()
        for widget, width in zip(self.widgets, self.allocate(total)):
            result = result.join(Spans.from_graphemes(widget.truncate(width)))
        return result

    def render(self, total: int) -> str:
        return str(self.truncate(total))
