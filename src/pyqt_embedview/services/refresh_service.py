"""
Refresh glue for editor integrations.

Translates editor events into core operations: a saved template file triggers
a cascade whose modified containers are handed to the persistence
collaborator; an opened screen gets its instances re-synchronized in place.
Deciding when these events fire is left to the integration.
"""

import logging
from typing import Any

from pyqt_embedview.core.mutated_containers import MutatedContainers
from pyqt_embedview.protocols.persistence import PersistenceProtocol
from .cascade_updater import CascadeUpdater

logger = logging.getLogger(__name__)


class RefreshService:
    """Runs cascades on template saves and re-syncs screens on open."""

    def __init__(self, updater: CascadeUpdater, persistence: PersistenceProtocol):
        self.updater = updater
        self.persistence = persistence

    def template_saved(self, path: str) -> MutatedContainers:
        """
        Propagate a saved template file to everything embedding it.

        Paths that do not back a declared template are ignored.

        Returns:
            The containers modified and saved
        """
        kind = self.updater.registry.kind_for_path(path)
        if kind is None:
            return MutatedContainers()

        mutated = self.updater.cascade_update(kind)
        for container in mutated:
            self.persistence.save(container)
        logger.info(
            f"Template {kind!r} saved; persisted {self.updater.mutated_screen_names(mutated)}"
        )
        return mutated

    def screen_opened(self, screen: Any) -> bool:
        """Re-synchronize every instance on a freshly opened screen.

        Returns:
            True if at least one instance was rebuilt
        """
        instances = self.updater.synchronizer.sync_all(screen)
        if instances:
            logger.info(f"Refreshed {len(instances)} instance(s) on open")
        return bool(instances)
