"""ANSI SGR styles: painting styled runs and parsing escaped strings back.

:class:`AnsiStyle` is an immutable style value usable as a style tag in
:class:`~pi.stylish.spans.Spans`. :func:`parse_ansi` turns a string with
embedded escape sequences into ``(AnsiStyle, text)`` runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from pi.stylish.painter import Run, coalesce

RESET = "\x1b[0m"

Color = Union[str, int, tuple[int, int, int]]

_COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

# SGR attribute code -> AnsiStyle field
_ATTRIBUTES: dict[int, str] = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    7: "inverse",
    8: "hidden",
    9: "strikethrough",
}

_ATTRIBUTE_RESETS: dict[int, tuple[str, ...]] = {
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    25: ("blink",),
    27: ("inverse",),
    28: ("hidden",),
    29: ("strikethrough",),
}


def _color_params(color: Color, base: int) -> str:
    """SGR parameters for *color*; *base* is 30 for foreground, 40 for background."""
    if isinstance(color, tuple):
        r, g, b = color
        if not all(0 <= c <= 255 for c in color):
            raise ValueError(f"RGB component out of range: {color}")
        return f"{base + 8};2;{r};{g};{b}"
    if isinstance(color, int):
        if not 0 <= color <= 255:
            raise ValueError(f"256-color index out of range: {color}")
        return f"{base + 8};5;{color}"
    name = color.lower()
    bright = name.startswith("bright_")
    if bright:
        name = name[len("bright_"):]
    if name not in _COLOR_NAMES:
        raise ValueError(f"Unknown color name: {color!r}")
    offset = _COLOR_NAMES.index(name)
    return str((base + 60 if bright else base) + offset)


# ---------------------------------------------------------------------------
# AnsiStyle
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnsiStyle:
    """A terminal text style rendered with SGR escape sequences."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    inverse: bool = False
    hidden: bool = False
    strikethrough: bool = False

    def params(self) -> list[str]:
        result = [str(code) for code, name in _ATTRIBUTES.items() if getattr(self, name)]
        if self.fg is not None:
            result.append(_color_params(self.fg, 30))
        if self.bg is not None:
            result.append(_color_params(self.bg, 40))
        return result

    def prefix(self) -> str:
        params = self.params()
        if not params:
            return ""
        return f"\x1b[{';'.join(params)}m"

    @property
    def is_plain(self) -> bool:
        return not self.params()

    def paint(self, text: str) -> str:
        prefix = self.prefix()
        if not prefix:
            return text
        return f"{prefix}{text}{RESET}"

    @classmethod
    def paint_many(cls, runs: Iterable[Run]) -> str:
        """Paint runs, switching styles only where they change.

        Runs whose style is not an :class:`AnsiStyle` (e.g. ``None``) are
        rendered unstyled.
        """
        parts: list[str] = []
        current = cls()
        for style, text in coalesce(runs):
            if not isinstance(style, AnsiStyle):
                style = cls()
            if style != current:
                if not current.is_plain:
                    parts.append(RESET)
                parts.append(style.prefix())
                current = style
            parts.append(text)
        if not current.is_plain:
            parts.append(RESET)
        return "".join(parts)


# ---------------------------------------------------------------------------
# Escape sequence extraction
# ---------------------------------------------------------------------------

def extract_escape(text: str, pos: int) -> str | None:
    """Return the escape sequence starting at *pos* in *text*, if any.

    Handles CSI (``ESC[ ... final``), OSC and APC (``ESC] / ESC_`` terminated
    by BEL or ST) sequences.
    """
    if pos + 1 >= len(text) or text[pos] != "\x1b":
        return None

    next_ch = text[pos + 1]

    if next_ch == "[":
        i = pos + 2
        while i < len(text):
            ch = text[i]
            if "\x40" <= ch <= "\x7e":
                return text[pos : i + 1]
            if ch.isdigit() or ch in ";:?":
                i += 1
                continue
            break
        return None

    if next_ch in "]_":
        i = pos + 2
        while i < len(text):
            if text[i] == "\x07":
                return text[pos : i + 1]
            if text[i] == "\x1b" and i + 1 < len(text) and text[i + 1] == "\\":
                return text[pos : i + 2]
            i += 1
        return None

    return None


# ---------------------------------------------------------------------------
# SgrState
# ---------------------------------------------------------------------------


class SgrState:
    """Track the active SGR attributes while scanning escaped text."""

    def __init__(self) -> None:
        self._values: dict[str, object] = {}

    def clear(self) -> None:
        self._values.clear()

    def style(self) -> AnsiStyle:
        return AnsiStyle(**self._values)  # type: ignore[arg-type]

    def _extended_color(self, params: list[int], i: int) -> tuple[Color | None, int]:
        """Parse ``5;N`` or ``2;R;G;B`` after a 38/48 code at ``params[i]``."""
        if i + 1 >= len(params):
            return None, i
        mode = params[i + 1]
        if mode == 5 and i + 2 < len(params):
            index = params[i + 2]
            return (index if 0 <= index <= 255 else None), i + 2
        if mode == 2 and i + 4 < len(params):
            rgb = (params[i + 2], params[i + 3], params[i + 4])
            return (rgb if all(0 <= c <= 255 for c in rgb) else None), i + 4
        return None, i + 1

    def process(self, code: str) -> None:
        """Update state from a CSI sequence; non-SGR sequences are ignored."""
        if not code.startswith("\x1b[") or not code.endswith("m"):
            return

        body = code[2:-1]
        if not body:
            self.clear()
            return

        try:
            params = [int(p) if p else 0 for p in body.replace(":", ";").split(";")]
        except ValueError:
            return

        i = 0
        while i < len(params):
            val = params[i]
            if val == 0:
                self.clear()
            elif val in _ATTRIBUTES:
                self._values[_ATTRIBUTES[val]] = True
            elif val in _ATTRIBUTE_RESETS:
                for name in _ATTRIBUTE_RESETS[val]:
                    self._values.pop(name, None)
            elif 30 <= val <= 37:
                self._values["fg"] = _COLOR_NAMES[val - 30]
            elif 90 <= val <= 97:
                self._values["fg"] = "bright_" + _COLOR_NAMES[val - 90]
            elif 40 <= val <= 47:
                self._values["bg"] = _COLOR_NAMES[val - 40]
            elif 100 <= val <= 107:
                self._values["bg"] = "bright_" + _COLOR_NAMES[val - 100]
            elif val in (38, 48):
                color, i = self._extended_color(params, i)
                if color is not None:
                    self._values["fg" if val == 38 else "bg"] = color
            elif val == 39:
                self._values.pop("fg", None)
            elif val == 49:
                self._values.pop("bg", None)
            i += 1


def parse_ansi(text: str) -> Iterator[tuple[AnsiStyle, str]]:
    """Split *text* into ``(style, text)`` runs according to its SGR codes.

    Escape sequences are removed from the output; adjacent runs with the
    same effective style are merged and empty runs are dropped.
    """
    state = SgrState()
    runs: list[Run] = []
    chunk: list[str] = []
    i = 0
    while i < len(text):
        code = extract_escape(text, i)
        if code is None:
            chunk.append(text[i])
            i += 1
            continue
        if chunk:
            runs.append((state.style(), "".join(chunk)))
            chunk = []
        state.process(code)
        i += len(code)
    if chunk:
        runs.append((state.style(), "".join(chunk)))
    for style, run_text in coalesce(runs):
        yield style, run_text


def strip_ansi(text: str) -> str:
    return "".join(run_text for _style, run_text in parse_ansi(text))
