"""
Instance content synchronization.

Replaces an instance's content with a fresh copy of its template's content
root while keeping the instance itself (tag, rect, name) intact:

1. resolve the kind and lease the template
2. plan the content from the template
3. tear down the instance's children
4. re-apply the kind tag and identity toggles
5. carry over behavior and cosmetics from the content root
6. copy the root's non-group controls, placed relative to the instance
7. release the template lease
8. notify the instance's behavior: instantiated, then recalculate geometry

There is no rollback. A failure midway leaves a partially rebuilt instance
and the error propagates to the caller.
"""

import logging
from typing import Any, List, Optional

from pyqt_embedview.core.exceptions import TemplateNotFound
from pyqt_embedview.core.nodes import InstanceNode
from pyqt_embedview.core.properties import CLIPPING, COSMETIC_PROPERTIES, SELECT_GROUPED_CONTROLS
from pyqt_embedview.protocols.embed_config import get_embed_view_config
from pyqt_embedview.protocols.host_tree import HostTree
from .content_plan import ContentPlan, plan_content
from .instance_discovery import InstanceDiscovery
from .template_leases import TemplateLeases
from .template_registry import TemplateRegistry

logger = logging.getLogger(__name__)


class InstanceSynchronizer:
    """Rebuilds instance content from templates."""

    def __init__(self, host: HostTree, registry: TemplateRegistry, leases: Optional[TemplateLeases] = None):
        self.host = host
        self.registry = registry
        self.leases = leases or TemplateLeases(host, registry)

    def sync(self, kind: str, instance: Any) -> List[Any]:
        """
        Synchronize ``instance`` with the template named ``kind``.

        Returns:
            The controls copied into the instance, in template order

        Raises:
            TemplateNotFound: If ``kind`` is not declared in the manifest
            HostMutationFailure: If a host operation fails midway
        """
        if not self.registry.resolves(kind):
            raise TemplateNotFound(kind)

        with self.leases.acquire(kind) as lease:
            plan = plan_content(self.host, lease.handle)
            with self.host.suppressed(instance):
                self.clear_instance(instance)
                self.apply_identity(instance, kind)
                self._carry_over(instance, plan)
                copies = self._copy_controls(instance, plan)

        config = get_embed_view_config()
        self.host.dispatch(instance, config.instantiated_message)
        self.host.dispatch(instance, config.geometry_message)
        logger.info(f"Synchronized instance of {kind!r} ({len(copies)} controls)")
        return copies

    def sync_all(self, container: Any) -> List[InstanceNode]:
        """Synchronize every topmost instance in ``container`` with its own kind."""
        instances = InstanceDiscovery(self.host).find_top_instances(container)
        for node in instances:
            self.sync(node.kind, node.handle)
        return instances

    def clear_instance(self, instance: Any) -> None:
        """Delete every child control and group of ``instance``."""
        with self.host.suppressed(instance):
            children = self.host.child_controls(instance)
            for child in children:
                self.host.delete(child)
        logger.debug(f"Cleared {len(children)} child(ren) from instance")

    def apply_identity(self, instance: Any, kind: str) -> None:
        """(Re)apply the kind tag and the identity toggles."""
        self.host.set_property(instance, get_embed_view_config().kind_property, kind)
        self.host.set_property(instance, SELECT_GROUPED_CONTROLS, False)
        self.host.set_property(instance, CLIPPING, True)

    def _carry_over(self, instance: Any, plan: ContentPlan) -> None:
        self.host.set_behavior(instance, plan.behavior)
        for name in COSMETIC_PROPERTIES:
            # Unset on the root means unset on the instance
            self.host.set_property(instance, name, plan.cosmetics.get(name))

    def _copy_controls(self, instance: Any, plan: ContentPlan) -> List[Any]:
        origin = self.host.get_rect(instance).top_left
        copies = []
        for descriptor in plan:
            copy = self.host.copy_control(descriptor.source, instance)
            self.host.set_rect(copy, descriptor.placed_at(origin))
            copies.append(copy)
        return copies
