"""
Template memory management.

Templates are only read from memory. A template that is not resident is
loaded on demand and unloaded again once nobody needs it. Callers hold a
TemplateLease for as long as they read the template:

    with leases.acquire("Foo") as lease:
        plan = plan_content(host, lease.handle)

Leases are counted per kind. A template this manager loaded is unloaded when
its last lease is released; a template that was already resident when the
first lease was taken is never unloaded by this manager.
"""

import logging
from typing import Any, Dict, Set, Tuple

from pyqt_embedview.protocols.host_tree import HostTree
from .template_registry import TemplateRegistry

logger = logging.getLogger(__name__)


class TemplateLease:
    """Scoped hold on a resident template. Release is idempotent."""

    def __init__(self, manager: "TemplateLeases", kind: str, handle: Any):
        self._manager = manager
        self.kind = kind
        self.handle = handle
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def keep_resident(self) -> None:
        """Leave the template loaded after the last lease is released.

        Used when the template itself was modified and must stay in memory
        until the caller has persisted it.
        """
        self._manager._keep_resident(self.kind)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._manager._release_lease(self)

    def __enter__(self) -> "TemplateLease":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class TemplateLeases:
    """Loads templates on demand and unloads the ones it loaded."""

    def __init__(self, host: HostTree, registry: TemplateRegistry):
        self.host = host
        self.registry = registry
        self._active: Dict[str, int] = {}
        self._owned: Set[str] = set()

    def is_resident(self, kind: str) -> bool:
        return self.host.find_screen(kind) is not None

    def active_count(self, kind: str) -> int:
        return self._active.get(kind, 0)

    def ensure_loaded(self, kind: str) -> Tuple[Any, bool]:
        """
        Make the template resident.

        Returns:
            (handle, was_already_resident). When the second item is False the
            caller loaded the template and is responsible for releasing it.

        Raises:
            TemplateNotFound: If the kind is not declared
            HostMutationFailure: If the backing file cannot be loaded
        """
        screen = self.host.find_screen(kind)
        if screen is not None:
            return screen, True

        path = self.registry.backing_path(kind)
        screen = self.host.load_screen(path)
        loaded_name = self.host.screen_name(screen)
        if loaded_name != kind:
            logger.warning(f"Template file {path} declares screen {loaded_name!r}, expected {kind!r}")
        logger.debug(f"Loaded template {kind!r} from {path}")
        return screen, False

    def release(self, kind: str, should_unload: bool) -> None:
        """Unload a template only if the caller was the one that loaded it."""
        if not should_unload:
            return
        screen = self.host.find_screen(kind)
        if screen is not None:
            self.host.unload_screen(screen)
            logger.debug(f"Unloaded template {kind!r}")

    def acquire(self, kind: str) -> TemplateLease:
        """Take a lease on a template, loading it if needed."""
        screen = self.host.find_screen(kind) if self._active.get(kind) else None
        if screen is None:
            screen, was_resident = self.ensure_loaded(kind)
            if not was_resident:
                self._owned.add(kind)
        self._active[kind] = self._active.get(kind, 0) + 1
        return TemplateLease(self, kind, screen)

    def _keep_resident(self, kind: str) -> None:
        self._owned.discard(kind)

    def _release_lease(self, lease: TemplateLease) -> None:
        remaining = self._active.get(lease.kind, 0) - 1
        if remaining > 0:
            self._active[lease.kind] = remaining
            return
        self._active.pop(lease.kind, None)
        if lease.kind in self._owned:
            self._owned.discard(lease.kind)
            self.release(lease.kind, should_unload=True)
