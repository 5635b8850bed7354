"""Persistence protocol for saving mutated containers.

The synchronization core only reports which containers changed. Saving is
delegated to an application-provided collaborator.
"""

from typing import Any, Protocol


class PersistenceProtocol(Protocol):
    """Protocol for objects able to persist a container to its backing file."""

    def save(self, container: Any) -> None:
        """Save the screen owning ``container``."""
        ...
