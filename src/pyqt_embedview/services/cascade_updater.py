"""
Cascading updates after a template change.

When template K changes, every instance of K must be rebuilt:

- State A: instances on ordinary application screens, in manifest order.
- State B: instances inside other templates, in registry order. A template
  that holds an instance of K changes along with K, so the cascade recurses
  into that template's kind.

Kinds already being cascaded on the current recursion path are skipped. This
excludes K itself from its own State B and stops templates that embed each
other from recursing forever.

The cascade runs in two passes. The recursive collection pass only reads:
it records every affected container with its instances, deduplicated by
identity, so a container reached through several templates is listed once.
The sweep then synchronizes each recorded instance exactly once. Templates
are swept before the templates and screens embedding them, so every
instance is rebuilt from already updated content.

Screens and templates that had to be loaded for the scan are unloaded again
unless they were modified; modified containers stay resident so the caller
can persist them.
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Set

from pyqt_embedview.core.exceptions import CascadeAborted, EmbedViewError, TemplateNotFound
from pyqt_embedview.core.mutated_containers import MutatedContainers
from pyqt_embedview.core.nodes import InstanceNode
from pyqt_embedview.protocols.embed_config import get_embed_view_config
from pyqt_embedview.protocols.host_tree import HostTree
from pyqt_embedview.protocols.manifest import ManifestProvider, ScreenEntry
from .content_plan import template_canvas
from .instance_discovery import InstanceDiscovery
from .instance_sync import InstanceSynchronizer
from .template_leases import TemplateLease

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CascadeTarget:
    """A container affected by a cascade and the instances to rebuild in it."""
    container: Any
    template: Optional[str] = None
    lease: Optional[TemplateLease] = None
    instances: List[InstanceNode] = field(default_factory=list)
    _seen: Set[int] = field(default_factory=set, repr=False)

    def add(self, nodes: List[InstanceNode]) -> None:
        for node in nodes:
            if id(node.handle) not in self._seen:
                self._seen.add(id(node.handle))
                self.instances.append(node)

    def embedded_kinds(self) -> Set[str]:
        return {node.kind for node in self.instances}


class CascadePlan:
    """Affected containers of one cascade, keyed by identity in discovery order."""

    def __init__(self):
        self._targets: Dict[int, CascadeTarget] = {}

    def record(self, container: Any, nodes: List[InstanceNode], template: Optional[str] = None) -> CascadeTarget:
        target = self._targets.get(id(container))
        if target is None:
            target = CascadeTarget(container, template)
            self._targets[id(container)] = target
        target.add(nodes)
        return target

    def __len__(self) -> int:
        return len(self._targets)

    def sweep_order(self) -> Iterator[CascadeTarget]:
        """
        Yield templates before anything embedding them, then screens.

        Among templates, the first one in discovery order whose embedded
        kinds are all swept goes next. Templates embedding each other cannot
        be ordered; the earliest discovered of them goes first.
        """
        pending = [t for t in self._targets.values() if t.template is not None]
        while pending:
            pending_kinds = {t.template for t in pending}
            ready = next(
                (t for t in pending if not (t.embedded_kinds() & (pending_kinds - {t.template}))),
                pending[0],
            )
            pending.remove(ready)
            yield ready
        for target in self._targets.values():
            if target.template is None:
                yield target


class CascadeUpdater:
    """Propagates a template change to every screen and template embedding it."""

    def __init__(self, host: HostTree, manifest: ManifestProvider, synchronizer: InstanceSynchronizer):
        self.host = host
        self.manifest = manifest
        self.synchronizer = synchronizer
        self.discovery = InstanceDiscovery(host)

    @property
    def registry(self):
        return self.synchronizer.registry

    @property
    def leases(self):
        return self.synchronizer.leases

    def cascade_update(self, kind: str) -> MutatedContainers:
        """
        Refresh every instance affected by a change to template ``kind``.

        Returns:
            The screens and templates that were modified, each once

        Raises:
            TemplateNotFound: If ``kind`` is not declared
            CascadeAborted: If any step fails; carries the original error
                and the containers modified before the failure
        """
        if not self.registry.resolves(kind):
            raise TemplateNotFound(kind)

        mutated = MutatedContainers()
        # Leases on affected templates are held until the sweep is over
        with ExitStack() as held:
            try:
                plan = CascadePlan()
                self._collect(kind, frozenset(), plan, held)
                logger.debug(f"Cascade for {kind!r} affects {len(plan)} container(s)")
                self._sweep(plan, mutated)
            except EmbedViewError as e:
                logger.error(f"Cascade for {kind!r} aborted after {len(mutated)} container(s): {e}")
                raise CascadeAborted(kind, e, mutated) from e

        logger.info(f"Cascade for {kind!r} modified {len(mutated)} container(s)")
        return mutated

    def _collect(self, kind: str, cascading: FrozenSet[str], plan: CascadePlan, held: ExitStack) -> None:
        cascading = cascading | {kind}
        logger.debug(f"Collecting {kind!r} (path: {sorted(cascading)})")
        self._scan_screens(kind, plan)
        for other in self.registry.kinds():
            if other in cascading:
                continue
            if self._scan_template(kind, other, plan, held):
                self._collect(other, cascading, plan, held)

    def _sweep(self, plan: CascadePlan, mutated: MutatedContainers) -> None:
        for target in plan.sweep_order():
            for node in target.instances:
                self.synchronizer.sync(node.kind, node.handle)
            if target.lease is not None:
                target.lease.keep_resident()
            mutated.add(target.container)
            logger.debug(f"Rebuilt {len(target.instances)} instance(s) in {self._name_of(target.container)!r}")

    # ========== STATE A: APPLICATION SCREENS ==========

    def application_screens(self) -> list:
        """Manifest screens that are neither the template list nor a template."""
        config = get_embed_view_config()
        template_kinds: Set[str] = set(self.registry.kinds())
        return [
            entry for entry in self.manifest.list_screens()
            if entry.key != config.template_list_key and entry.name not in template_kinds
        ]

    def _scan_screens(self, kind: str, plan: CascadePlan) -> None:
        for entry in self.application_screens():
            screen, loaded_here = self._resident_screen(entry)
            instances = self.discovery.find_top_instances(screen, kind)
            if instances:
                plan.record(screen, instances)
            elif loaded_here:
                self.host.unload_screen(screen)

    def _resident_screen(self, entry: ScreenEntry) -> tuple:
        screen = self.host.find_screen(entry.name)
        if screen is not None:
            return screen, False
        return self.host.load_screen(entry.backing_path), True

    # ========== STATE B: OTHER TEMPLATES ==========

    def _scan_template(self, kind: str, other: str, plan: CascadePlan, held: ExitStack) -> bool:
        """Record instances of ``kind`` inside template ``other``; True if any."""
        with self.leases.acquire(other) as lease:
            canvas = template_canvas(self.host, lease.handle)
            instances = self.discovery.find_top_instances(canvas, kind)
            if not instances:
                return False

            target = plan.record(lease.handle, instances, template=other)
            if target.lease is None:
                target.lease = held.enter_context(self.leases.acquire(other))
        return True

    def mutated_screen_names(self, mutated: MutatedContainers) -> list:
        """Names of the modified containers, for logging and reporting."""
        return [self._name_of(container) for container in mutated]

    def _name_of(self, container: Any) -> str:
        screen = container if self.host.is_screen(container) else self.host.owning_screen(container)
        return self.host.screen_name(screen) if screen is not None else repr(container)
