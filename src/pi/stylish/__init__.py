"""pi-stylish: styled text with grapheme-aware slicing, truncation and layout."""

# ANSI styles
from pi.stylish.ansi import AnsiStyle, parse_ansi, strip_ansi

# Configuration
from pi.stylish.config import Config, get_config, load_config, reset_config, set_config

# Errors
from pi.stylish.errors import IndexShiftError, StylishError

# Painting
from pi.stylish.painter import Painter, Tag, paint_runs

# Width-aware slicing
from pi.stylish.slicing import (
    Appendable,
    ByteSliceable,
    HasRawContent,
    WidthMeasurable,
    slice_width,
)

# Styled text
from pi.stylish.spans import Span, Spans, Split
from pi.stylish.style_index import StyleIndex
from pi.stylish.styled_grapheme import StyledGrapheme

# Truncation
from pi.stylish.truncation import TruncationStyle, truncate

# Layout widgets
from pi.stylish.widgets import HBox, Repeat, TextWidget

# Width primitives
from pi.stylish.width import UNBOUNDED, Width, grapheme_width, graphemes, text_width

__all__ = [
    # ANSI
    "AnsiStyle",
    "parse_ansi",
    "strip_ansi",
    # Config
    "Config",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
    # Errors
    "IndexShiftError",
    "StylishError",
    # Painting
    "Painter",
    "Tag",
    "paint_runs",
    # Slicing
    "Appendable",
    "ByteSliceable",
    "HasRawContent",
    "WidthMeasurable",
    "slice_width",
    # Styled text
    "Span",
    "Spans",
    "Split",
    "StyleIndex",
    "StyledGrapheme",
    # Truncation
    "TruncationStyle",
    "truncate",
    # Widgets
    "HBox",
    "Repeat",
    "TextWidget",
    # Width
    "UNBOUNDED",
    "Width",
    "grapheme_width",
    "graphemes",
    "text_width",
]
