"""Host tree protocol.

The synchronization core never touches widgets directly. It issues commands
against an object implementing HostTree and reads results back from it.
Node handles are opaque to the core: screens, cards, groups and leaf
controls are whatever objects the host hands out.

Loading and every mutating operation (create, delete, copy, set_rect,
set_property, set_behavior, dispatch) report failures as HostMutationFailure,
so callers only ever see errors from the EmbedViewError hierarchy.

The production implementation is pyqt_embedview.host.QtHostTree.
"""

from typing import Any, ContextManager, List, Optional, Protocol, Tuple

from pyqt_embedview.core.geometry import Rect


class HostTree(Protocol):
    """Protocol for the GUI object tree the core mutates."""

    # ========== SCREENS ==========

    def find_screen(self, name: str) -> Optional[Any]:
        """Return the resident screen named ``name``, or None."""
        ...

    def load_screen(self, path: str) -> Any:
        """Load the screen stored at ``path`` into memory and return it."""
        ...

    def unload_screen(self, screen: Any) -> None:
        """Remove a previously loaded screen from memory without saving."""
        ...

    def screen_name(self, screen: Any) -> str:
        ...

    def owning_screen(self, node: Any) -> Optional[Any]:
        """Return the screen a node lives in, or None when detached."""
        ...

    # ========== ENUMERATION ==========

    def is_screen(self, node: Any) -> bool:
        ...

    def is_card(self, node: Any) -> bool:
        ...

    def is_group(self, node: Any) -> bool:
        ...

    def cards(self, screen: Any) -> List[Any]:
        """Return a screen's cards in order."""
        ...

    def current_card(self, screen: Any) -> Any:
        ...

    def background_groups(self, screen: Any) -> List[Any]:
        """Return the groups placed on a screen's background layer."""
        ...

    def child_groups(self, container: Any) -> List[Any]:
        """Return the direct group children of a card or group."""
        ...

    def child_controls(self, container: Any) -> List[Any]:
        """Return every direct child of a card or group, groups included."""
        ...

    # ========== MUTATION ==========

    def create_group(self, parent: Any, name: Optional[str] = None) -> Any:
        """Create an empty group inside a card or group."""
        ...

    def delete(self, node: Any) -> None:
        ...

    def copy_control(self, control: Any, target: Any) -> Any:
        """Copy ``control`` into ``target`` and return the copy."""
        ...

    # ========== GEOMETRY ==========

    def get_rect(self, node: Any) -> Rect:
        ...

    def set_rect(self, node: Any, rect: Rect) -> None:
        ...

    def reference_point(self, container: Any) -> Tuple[int, int]:
        """Return the logical center of a container in its own coordinates."""
        ...

    # ========== PROPERTIES ==========

    def get_property(self, node: Any, name: str) -> Any:
        """Return a property value, or None when the property is unset."""
        ...

    def set_property(self, node: Any, name: str, value: Any) -> None:
        """Set a property; a value of None clears it."""
        ...

    # ========== BEHAVIOR ==========

    def get_behavior(self, node: Any) -> Optional[Any]:
        ...

    def set_behavior(self, node: Any, behavior: Optional[Any]) -> None:
        ...

    def dispatch(self, node: Any, message: str) -> None:
        """Deliver a named lifecycle message to a node's behavior."""
        ...

    # ========== SUPPRESSION ==========

    def suppressed(self, node: Any) -> ContextManager[None]:
        """Suppress redraw and change notifications around ``node``.

        Restores the previous suppression state on exit and nests.
        """
        ...
