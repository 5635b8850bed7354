"""
PyQt6 implementation of the HostTree protocol.

Maps the abstract object model onto widgets:

- screens are ViewStack widgets, kept in a name-keyed registry of resident
  screens;
- cards are ViewCard pages, groups are ViewGroup frames;
- tags, identity toggles, cosmetics and behaviors are Qt dynamic properties;
- suppression disables updates and blocks signals on the owning screen.

Screen files are turned into widgets by a pluggable loader. The default
loader reads Qt Designer files with PyQt6.uic, which requires the top-level
widget to be promoted to ViewStack.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Tuple

from PyQt6 import uic
from PyQt6.QtCore import QPoint
from PyQt6.QtWidgets import QFrame, QWidget

from pyqt_embedview.core.exceptions import HostMutationFailure
from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.core.properties import COSMETIC_PROPERTIES, MARGINS, OPAQUE, SHOW_BORDER
from pyqt_embedview.protocols.embed_config import get_embed_view_config
from .cloning import clone_widget
from .cosmetics import CosmeticStyleGenerator
from .widgets import BehaviorHolder, ViewCard, ViewGroup, ViewStack

logger = logging.getLogger(__name__)

ScreenLoader = Callable[[str], ViewStack]


def load_ui_screen(path: str) -> ViewStack:
    """Default screen loader: build a ViewStack from a Qt Designer file."""
    widget = uic.loadUi(path)
    if not isinstance(widget, ViewStack):
        raise TypeError(f"{path} does not define a ViewStack (got {type(widget).__name__})")
    return widget


class QtHostTree:
    """HostTree over live PyQt6 widgets.

    Example:
        host = QtHostTree(screen_loader=my_loader)
        main = ViewStack("Main")
        host.register_screen(main)
    """

    def __init__(self, screen_loader: Optional[ScreenLoader] = None):
        self._screen_loader = screen_loader or load_ui_screen
        self._screens: Dict[str, ViewStack] = {}
        self._style_generator = CosmeticStyleGenerator()

    # ========== SCREENS ==========

    def register_screen(self, screen: ViewStack) -> None:
        """Mark a screen as resident so it can be found by name."""
        self._screens[screen.objectName()] = screen
        logger.debug(f"Registered resident screen {screen.objectName()!r}")

    def find_screen(self, name: str) -> Optional[ViewStack]:
        return self._screens.get(name)

    def load_screen(self, path: str) -> ViewStack:
        try:
            screen = self._screen_loader(path)
        except Exception as e:
            logger.error(f"Failed to load screen from {path}: {e}")
            raise HostMutationFailure("load", str(e)) from e
        self.register_screen(screen)
        logger.debug(f"Loaded screen {screen.objectName()!r} from {path}")
        return screen

    def unload_screen(self, screen: ViewStack) -> None:
        name = screen.objectName()
        if self._screens.get(name) is screen:
            del self._screens[name]
        screen.hide()
        screen.deleteLater()
        logger.debug(f"Unloaded screen {name!r}")

    def screen_name(self, screen: ViewStack) -> str:
        return screen.objectName()

    def owning_screen(self, node: QWidget) -> Optional[ViewStack]:
        current = node
        while current is not None:
            if isinstance(current, ViewStack):
                return current
            current = current.parentWidget()
        return None

    # ========== ENUMERATION ==========

    def is_screen(self, node: Any) -> bool:
        return isinstance(node, ViewStack)

    def is_card(self, node: Any) -> bool:
        return isinstance(node, ViewCard)

    def is_group(self, node: Any) -> bool:
        return isinstance(node, ViewGroup)

    def cards(self, screen: ViewStack) -> List[ViewCard]:
        return screen.cards()

    def current_card(self, screen: ViewStack) -> ViewCard:
        card = screen.current_card()
        if card is None:
            raise HostMutationFailure("current_card", f"screen {screen.objectName()!r} has no cards")
        return card

    def background_groups(self, screen: ViewStack) -> List[ViewGroup]:
        return self.child_groups(screen.background)

    def child_groups(self, container: QWidget) -> List[ViewGroup]:
        return [child for child in self.child_controls(container) if isinstance(child, ViewGroup)]

    def child_controls(self, container: QWidget) -> List[QWidget]:
        # children() is in creation (stacking) order; layouts and other
        # non-widget QObjects are not controls
        return [child for child in container.children() if isinstance(child, QWidget)]

    # ========== MUTATION ==========

    @contextmanager
    def _mutation(self, operation: str, node: QWidget):
        """Report any failure inside the block as a HostMutationFailure."""
        try:
            yield
        except HostMutationFailure:
            raise
        except Exception as e:
            logger.error(f"Host operation {operation!r} failed on {type(node).__name__} {node.objectName()!r}: {e}")
            raise HostMutationFailure(operation, str(e)) from e

    def create_group(self, parent: QWidget, name: Optional[str] = None) -> ViewGroup:
        if isinstance(parent, ViewStack):
            raise HostMutationFailure("create_group", "groups must be created on a card or group, not a screen")
        with self._mutation("create_group", parent):
            group = ViewGroup(parent, name)
            group.show()
        return group

    def delete(self, node: QWidget) -> None:
        with self._mutation("delete", node):
            node.hide()
            node.setParent(None)
            node.deleteLater()

    def copy_control(self, control: QWidget, target: QWidget) -> QWidget:
        with self._mutation("copy", control):
            return clone_widget(control, target)

    # ========== GEOMETRY ==========

    # Rects are expressed in the coordinates of the card (or background
    # layer) a node lives on, not relative to its immediate parent group.

    def _coordinate_space(self, node: QWidget) -> Optional[QWidget]:
        current = node.parentWidget()
        while current is not None:
            if isinstance(current, ViewCard):
                return current
            parent = current.parentWidget()
            if isinstance(parent, ViewStack) and current is parent.background:
                return current
            current = parent
        return None

    def get_rect(self, node: QWidget) -> Rect:
        geometry = node.geometry()
        parent = node.parentWidget()
        space = self._coordinate_space(node)
        if space is None or parent is space:
            return Rect(geometry.x(), geometry.y(), geometry.width(), geometry.height())
        origin = parent.mapTo(space, geometry.topLeft())
        return Rect(origin.x(), origin.y(), geometry.width(), geometry.height())

    def set_rect(self, node: QWidget, rect: Rect) -> None:
        with self._mutation("set_rect", node):
            parent = node.parentWidget()
            space = self._coordinate_space(node)
            if space is None or parent is space:
                node.setGeometry(rect.left, rect.top, rect.width, rect.height)
                return
            local = parent.mapFrom(space, QPoint(rect.left, rect.top))
            node.setGeometry(local.x(), local.y(), rect.width, rect.height)

    def reference_point(self, container: QWidget) -> Tuple[int, int]:
        if isinstance(container, ViewStack):
            container = self.current_card(container)
        if self._coordinate_space(container) is None or isinstance(container, ViewCard):
            return (container.width() // 2, container.height() // 2)
        return self.get_rect(container).center

    # ========== PROPERTIES ==========

    def get_property(self, node: QWidget, name: str) -> Any:
        return node.property(name)

    def set_property(self, node: QWidget, name: str, value: Any) -> None:
        with self._mutation("set_property", node):
            node.setProperty(name, value)
            if name in COSMETIC_PROPERTIES:
                self._style_generator.apply(node)
            elif isinstance(node, QFrame) and value is not None:
                self._apply_frame_property(node, name, value)

    def _apply_frame_property(self, frame: QFrame, name: str, value: Any) -> None:
        if name == SHOW_BORDER:
            frame.setFrameShape(QFrame.Shape.Box if value else QFrame.Shape.NoFrame)
        elif name == MARGINS:
            margin = int(value)
            frame.setContentsMargins(margin, margin, margin, margin)
        elif name == OPAQUE:
            frame.setAutoFillBackground(bool(value))

    # ========== BEHAVIOR ==========

    def get_behavior(self, node: QWidget) -> Optional[type]:
        return node.property(get_embed_view_config().behavior_property)

    def set_behavior(self, node: QWidget, behavior: Optional[type]) -> None:
        with self._mutation("set_behavior", node):
            node.setProperty(get_embed_view_config().behavior_property, behavior)
        if isinstance(node, BehaviorHolder):
            # A new behavior starts from fresh state on the next dispatch
            node.behavior_object = None

    def dispatch(self, node: QWidget, message: str) -> None:
        behavior = self.get_behavior(node)
        if behavior is None:
            logger.debug(f"No behavior on {node.objectName()!r}; {message!r} not delivered")
            return

        with self._mutation("dispatch", node):
            if isinstance(node, BehaviorHolder):
                if node.behavior_object is None:
                    node.behavior_object = behavior()
                target = node.behavior_object
            else:
                target = behavior()

            config = get_embed_view_config()
            if message == config.instantiated_message:
                handler = target.on_instantiated
            elif message == config.geometry_message:
                handler = target.on_recalculate_geometry
            else:
                handler = getattr(target, f"on_{message}", None)
            if handler is None:
                logger.debug(f"{type(target).__name__} does not handle {message!r}")
                return
            handler(node)

    # ========== SUPPRESSION ==========

    @contextmanager
    def suppressed(self, node: QWidget):
        """Disable updates and block signals on the node's screen (or window).

        Previous states are saved and restored on exit, so nested scopes leave
        suppression on until the outermost one finishes.
        """
        target = self.owning_screen(node) or node.window()
        prev_updates = target.updatesEnabled()
        prev_blocked = target.signalsBlocked()
        target.setUpdatesEnabled(False)
        target.blockSignals(True)
        try:
            yield
        finally:
            target.blockSignals(prev_blocked)
            target.setUpdatesEnabled(prev_updates)
