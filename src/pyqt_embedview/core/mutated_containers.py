"""Identity-keyed set of containers changed during one cascade."""

from typing import Any, Dict, Iterable, Iterator


class MutatedContainers:
    """Insertion-ordered collection of containers, deduplicated by identity.

    Host handles are frequently unhashable or compare by value, so membership
    is keyed on ``id()`` while the handles themselves are kept alive in the
    mapping for the lifetime of the set.
    """

    def __init__(self, containers: Iterable[Any] = ()):
        self._by_id: Dict[int, Any] = {}
        for container in containers:
            self.add(container)

    def add(self, container: Any) -> bool:
        """Record a container. Returns False if it was already present."""
        key = id(container)
        if key in self._by_id:
            return False
        self._by_id[key] = container
        return True

    def merge(self, other: "MutatedContainers") -> None:
        for container in other:
            self.add(container)

    def __contains__(self, container: Any) -> bool:
        return id(container) in self._by_id

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._by_id.values()))

    def __len__(self) -> int:
        return len(self._by_id)

    def __bool__(self) -> bool:
        return bool(self._by_id)

    def __repr__(self) -> str:
        return f"MutatedContainers({len(self._by_id)} containers)"
