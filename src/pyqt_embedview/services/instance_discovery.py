"""
Instance discovery.

Finds the topmost embedded-view instances inside a container. Descent stops
at the first tagged group on every path: an instance's own nested instances
are never reported through it, so each instance is synchronized by exactly
one independent call and a content copy never has to reason about instances
inside the root it copies from.
"""

import logging
from collections import deque
from typing import Any, Deque, List, Optional, Set

from pyqt_embedview.core.nodes import InstanceNode, PlainGroup, classify
from pyqt_embedview.protocols.host_tree import HostTree

logger = logging.getLogger(__name__)


class InstanceDiscovery:
    """Breadth-first search for topmost instances."""

    def __init__(self, host: HostTree):
        self.host = host

    def scan_roots(self, container: Any) -> List[Any]:
        """
        Return the groups the search starts from.

        For a screen: its background groups followed by every card's groups.
        For a card or group: its direct child groups.
        """
        if self.host.is_screen(container):
            roots = list(self.host.background_groups(container))
            for card in self.host.cards(container):
                roots.extend(self.host.child_groups(card))
            return roots
        return list(self.host.child_groups(container))

    def find_top_instances(self, container: Any, kind_filter: Optional[str] = None) -> List[InstanceNode]:
        """
        Find topmost instances in ``container``.

        Args:
            container: A screen, card or group
            kind_filter: Only report instances of this kind; None or "" reports all

        Returns:
            Instances in discovery order, each reported once
        """
        found: List[InstanceNode] = []
        seen: Set[int] = set()
        queue: Deque[Any] = deque(self.scan_roots(container))

        while queue:
            handle = queue.popleft()
            if id(handle) in seen:
                continue
            seen.add(id(handle))

            node = classify(self.host, handle)
            if isinstance(node, InstanceNode):
                # Tagged: never descend, whether or not it matches
                if not kind_filter or node.kind == kind_filter:
                    found.append(node)
            elif isinstance(node, PlainGroup):
                queue.extend(self.host.child_groups(node.handle))

        logger.debug(
            f"Found {len(found)} instance(s)"
            f"{f' of {kind_filter!r}' if kind_filter else ''} in {self._describe(container)}"
        )
        return found

    def _describe(self, container: Any) -> str:
        if self.host.is_screen(container):
            return f"screen {self.host.screen_name(container)!r}"
        screen = self.host.owning_screen(container)
        if screen is None:
            return "detached container"
        return f"container in {self.host.screen_name(screen)!r}"
