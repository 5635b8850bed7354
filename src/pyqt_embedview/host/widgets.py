"""
Qt widgets backing the host object model.

- ViewStack: a screen. Pages of a QStackedWidget are its cards; a separate
  background layer holds groups shared by every card.
- ViewCard: one canvas of a screen.
- ViewGroup: a group container. Tagged with a kind it is an embedded view
  instance, untagged it is plain scaffolding.

Any other QWidget placed on a card or group is a leaf control.
"""

import logging
from typing import List, Optional

from PyQt6.QtWidgets import QFrame, QStackedWidget, QVBoxLayout, QWidget

logger = logging.getLogger(__name__)


class BehaviorHolder:
    """Mixin holding the live behavior object created for a widget."""

    behavior_object = None


class ViewCard(BehaviorHolder, QWidget):
    """A single canvas of a screen."""

    def __init__(self, name: str = "", parent: Optional[QWidget] = None):
        super().__init__(parent)
        if name:
            self.setObjectName(name)


class ViewGroup(BehaviorHolder, QFrame):
    """A group container positioned absolutely inside a card or group."""

    def __init__(self, parent: Optional[QWidget] = None, name: Optional[str] = None):
        super().__init__(parent)
        if name:
            self.setObjectName(name)


class ViewStack(QWidget):
    """A screen: ordered cards plus a background layer."""

    def __init__(self, name: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName(name)
        self._pages = QStackedWidget(self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._pages)

        # Not managed by the layout; floats above the current card
        self.background = QWidget(self)
        self.background.setObjectName(f"{name}.background")

    def add_card(self, name: str = "") -> ViewCard:
        card = ViewCard(name)
        self._pages.addWidget(card)
        logger.debug(f"Added card {name!r} to screen {self.objectName()!r}")
        return card

    def cards(self) -> List[ViewCard]:
        return [self._pages.widget(i) for i in range(self._pages.count())]

    def current_card(self) -> Optional[ViewCard]:
        return self._pages.currentWidget()

    def set_current_card(self, card: ViewCard) -> None:
        self._pages.setCurrentWidget(card)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.background.setGeometry(self.rect())
