"""
PyQt6 host for embedded views.

Concrete widgets and the QtHostTree adapter the synchronization services
drive through the HostTree protocol.
"""

from .widgets import ViewStack, ViewCard, ViewGroup
from .cosmetics import (
    CosmeticStyleGenerator,
    COSMETIC_PROPERTIES,
    BACKGROUND_COLOR,
    FOREGROUND_COLOR,
    TEXT_FONT,
    TEXT_SIZE,
    TEXT_STYLE,
)
from .cloning import clone_widget
from .qt_host import QtHostTree, load_ui_screen

__all__ = [
    "ViewStack",
    "ViewCard",
    "ViewGroup",
    "CosmeticStyleGenerator",
    "COSMETIC_PROPERTIES",
    "BACKGROUND_COLOR",
    "FOREGROUND_COLOR",
    "TEXT_FONT",
    "TEXT_SIZE",
    "TEXT_STYLE",
    "clone_widget",
    "QtHostTree",
    "load_ui_screen",
]
