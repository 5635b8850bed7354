"""
Style sheet generation for cosmetic view properties.

Cosmetic properties are stored as Qt dynamic properties so that "set" and
"unset" stay distinguishable per property. Every time one changes, the
widget's style sheet is regenerated from whichever properties are set.
"""

import logging
from typing import Any, Dict, Optional

from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QWidget

from pyqt_embedview.core.properties import (
    BACKGROUND_COLOR,
    COSMETIC_PROPERTIES,
    FOREGROUND_COLOR,
    TEXT_FONT,
    TEXT_SIZE,
    TEXT_STYLE,
)

logger = logging.getLogger(__name__)


def to_hex(value: Any) -> str:
    """Normalize a color given as a name, hex string, QColor or RGB tuple."""
    if isinstance(value, QColor):
        color = value
    elif isinstance(value, (tuple, list)):
        color = QColor(*value)
    else:
        color = QColor(str(value))
    if not color.isValid():
        raise ValueError(f"Invalid color: {value!r}")
    return color.name()


class CosmeticStyleGenerator:
    """Generates a widget-level style sheet from cosmetic properties."""

    def generate(self, cosmetics: Dict[str, Any]) -> str:
        """
        Build style sheet declarations for the given set cosmetics.

        Args:
            cosmetics: Mapping of cosmetic property name to value; unset
                properties must be absent

        Returns:
            str: Declaration list suitable for QWidget.setStyleSheet()
        """
        rules = []
        if cosmetics.get(BACKGROUND_COLOR) is not None:
            rules.append(f"background-color: {to_hex(cosmetics[BACKGROUND_COLOR])};")
        if cosmetics.get(FOREGROUND_COLOR) is not None:
            rules.append(f"color: {to_hex(cosmetics[FOREGROUND_COLOR])};")
        if cosmetics.get(TEXT_FONT) is not None:
            rules.append(f"font-family: \"{cosmetics[TEXT_FONT]}\";")
        if cosmetics.get(TEXT_SIZE) is not None:
            rules.append(f"font-size: {int(cosmetics[TEXT_SIZE])}px;")
        style = cosmetics.get(TEXT_STYLE)
        if style is not None:
            styles = {part.strip().lower() for part in str(style).split(",")}
            if "bold" in styles:
                rules.append("font-weight: bold;")
            if "italic" in styles:
                rules.append("font-style: italic;")
            if "underline" in styles:
                rules.append("text-decoration: underline;")
        return " ".join(rules)

    def apply(self, widget: QWidget) -> None:
        """Regenerate ``widget``'s style sheet from its cosmetic properties."""
        cosmetics = widget_cosmetics(widget)
        widget.setStyleSheet(self.generate(cosmetics))
        logger.debug(f"Applied cosmetics to {widget.objectName() or type(widget).__name__}: {cosmetics}")


def widget_cosmetics(widget: QWidget) -> Dict[str, Any]:
    """Return the cosmetic properties currently set on ``widget``."""
    cosmetics = {}
    for name in COSMETIC_PROPERTIES:
        value: Optional[Any] = widget.property(name)
        if value is not None:
            cosmetics[name] = value
    return cosmetics
