"""Tests for pi.stylish.widgets -- TextWidget, Repeat and HBox."""

from __future__ import annotations

import itertools
import logging

import pytest

from pi.stylish.config import Config, set_config
from pi.stylish.painter import Tag
from pi.stylish.spans import Spans
from pi.stylish.truncation import TruncationStyle
from pi.stylish.widgets import HBox, Repeat, TextWidget
from pi.stylish.width import UNBOUNDED, Width


def widget(text: str, style: TruncationStyle = TruncationStyle.LEFT) -> TextWidget:
    return TextWidget(text, style, "…")


def split_path(path: str, style: TruncationStyle) -> HBox:
    box = HBox()
    for part in Spans.from_str(path).split("::"):
        if part.segment is not None:
            box.push(TextWidget(part.segment, style, "…"))
        if part.delim is not None:
            box.push(TextWidget(part.delim, style, "…"))
    return box


# ---------------------------------------------------------------------------
# Repeat
# ---------------------------------------------------------------------------


class TestRepeat:
    def test_width_is_unbounded(self) -> None:
        assert Repeat("ab").width() == UNBOUNDED

    def test_graphemes_cycle(self) -> None:
        graphemes = itertools.islice(Repeat("ab").graphemes(), 5)
        assert "".join(g.grapheme for g in graphemes) == "ababa"

    def test_slice_width(self) -> None:
        text = Repeat("01234")
        assert text.slice_width(1, 14).raw() == "1234012340123"
        assert text.slice_width(7, 18).raw() == "23401234012"

    def test_slice_width_keeps_styles(self) -> None:
        text = Repeat(Spans.from_spans([("red", "a"), ("blue", "b")]))
        assert text.slice_width(1, 4) == Spans.from_spans(
            [("blue", "b"), ("red", "a"), ("blue", "b")]
        )

    def test_slice_width_wide(self) -> None:
        text = Repeat("世")
        assert text.slice_width(1, 5).raw() == "世"

    def test_requires_finite_end(self) -> None:
        with pytest.raises(ValueError):
            Repeat("ab").slice_width(0, None)

    def test_empty_results(self) -> None:
        assert Repeat("ab").slice_width(2, 2) is None
        assert Repeat("").slice_width(0, 5) is None


# ---------------------------------------------------------------------------
# TextWidget
# ---------------------------------------------------------------------------


class TestTextWidget:
    def test_width(self) -> None:
        assert widget("01234").width() == Width.bounded(5)

    def test_truncate(self) -> None:
        graphemes = widget("01234").truncate(4)
        assert "".join(g.grapheme for g in graphemes) == "012…"

    def test_default_symbol_from_config(self) -> None:
        set_config(Config(ellipsis="~"))
        graphemes = TextWidget("01234").truncate(4)
        assert "".join(g.grapheme for g in graphemes) == "012~"

    def test_no_symbol(self) -> None:
        graphemes = TextWidget("01234", symbol=None).truncate(4)
        assert "".join(g.grapheme for g in graphemes) == "0123"


# ---------------------------------------------------------------------------
# HBox
# ---------------------------------------------------------------------------


class TestHBoxAllocate:
    """Water-filling allocation."""

    def test_everything_fits(self) -> None:
        box = HBox([widget("01234"), widget("56789")])
        assert box.allocate(10) == [5, 5]

    def test_even_split(self) -> None:
        box = HBox([widget("01234"), widget("56789")])
        assert box.allocate(8) == [4, 4]

    def test_remainder_goes_to_earliest(self) -> None:
        box = HBox([widget("0123456"), widget("0123456"), widget("0123456")])
        assert box.allocate(8) == [3, 3, 2]

    def test_small_widget_releases_space(self) -> None:
        box = HBox([widget("ab"), widget("0123456789"), widget("0123456789")])
        assert box.allocate(12) == [2, 5, 5]

    def test_unbounded_takes_leftover(self) -> None:
        box = HBox([widget("ab"), TextWidget(Repeat("-")), widget("cd")])
        assert box.allocate(10) == [2, 6, 2]

    def test_unbounded_split_evenly(self) -> None:
        box = HBox([TextWidget(Repeat("-")), TextWidget(Repeat("="))])
        assert box.allocate(5) == [3, 2]

    def test_unbounded_gets_nothing_when_bounded_overflow(self) -> None:
        box = HBox([widget("0123456789"), TextWidget(Repeat("-"))])
        assert box.allocate(4) == [4, 0]

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValueError):
            HBox([widget("a")]).allocate(-1)

    def test_empty_box(self) -> None:
        assert HBox().allocate(5) == []

    def test_logs_allocation(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="pi.stylish.widgets.hbox"):
            HBox([widget("01234")]).allocate(3)
        assert "Allocated [3]" in caplog.text

    @pytest.mark.parametrize("total", range(0, 40, 3))
    def test_sum_matches_budget(self, total: int) -> None:
        texts = ["a", "0123456789", "abcdef", "0123456789abcdef"]
        box = HBox(widget(t) for t in texts)
        allocation = box.allocate(total)
        natural = [len(t) for t in texts]
        if sum(natural) <= total:
            assert allocation == natural
        else:
            assert sum(allocation) == total
        assert all(a <= n for a, n in zip(allocation, natural))

    @pytest.mark.parametrize("total", range(0, 30, 4))
    def test_sum_matches_budget_with_unbounded(self, total: int) -> None:
        box = HBox([widget("abc"), TextWidget(Repeat("-")), widget("0123456789")])
        assert sum(box.allocate(total)) == total


class TestHBoxTruncate:
    def test_untouched_concatenation(self) -> None:
        box = HBox([widget("01234"), widget("56789")])
        assert box.truncate(10).raw() == "0123456789"

    def test_left(self) -> None:
        box = HBox([widget("01234"), widget("56789")])
        assert box.truncate(8).raw() == "012…567…"

    def test_inner(self) -> None:
        box = HBox([widget("01234", TruncationStyle.INNER), widget("56789", TruncationStyle.INNER)])
        assert box.truncate(8).raw() == "01…456…9"

    def test_outer(self) -> None:
        box = HBox([widget("01234", TruncationStyle.OUTER), widget("56789", TruncationStyle.OUTER)])
        assert box.truncate(8).raw() == "…12……67…"

    def test_split_path(self) -> None:
        box = split_path("::SomeExtremelyLong::RandomAndPoorlyNamed::Path::", TruncationStyle.INNER)
        assert box.truncate(20).raw() == "::So…g::Ra…d::Path::"

    def test_fill_between(self) -> None:
        box = HBox([widget("ab"), TextWidget(Repeat("-"), symbol=None), widget("cd")])
        assert box.truncate(8).raw() == "ab----cd"

    def test_keeps_styles(self) -> None:
        one, two = Tag("<1>", "</1>"), Tag("<2>", "</2>")
        box = HBox()
        box.push(TextWidget(Spans.from_str("abc", one))).push(
            TextWidget(Spans.from_str("def", two))
        )
        assert box.render(6) == "<1>abc</1><2>def</2>"

    def test_render_total_width(self) -> None:
        box = HBox([widget("0123456789"), widget("abcdefghij")])
        assert Spans.from_ansi(box.render(7)).bounded_width() == 7
