"""Layout widgets: truncatable text, repeating fill and horizontal boxes."""

from pi.stylish.widgets.hbox import HBox
from pi.stylish.widgets.repeat import Repeat
from pi.stylish.widgets.text_widget import TextWidget

__all__ = ["HBox", "Repeat", "TextWidget"]
