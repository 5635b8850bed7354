"""Wiring of the embedded-view services around one host and manifest."""

from dataclasses import dataclass
from typing import Optional

from pyqt_embedview.protocols.host_tree import HostTree
from pyqt_embedview.protocols.manifest import ManifestProvider
from pyqt_embedview.protocols.persistence import PersistenceProtocol
from .cascade_updater import CascadeUpdater
from .instance_discovery import InstanceDiscovery
from .instance_factory import InstanceFactory
from .instance_sync import InstanceSynchronizer
from .refresh_service import RefreshService
from .template_leases import TemplateLeases
from .template_registry import TemplateRegistry


@dataclass
class EmbedViewServices:
    """All services sharing one registry and one lease manager.

    Example:
        services = EmbedViewServices.create(QtHostTree(), JsonManifest("app.json"))
        view = services.factory.create_instance("Foo", main_card)
        mutated = services.updater.cascade_update("Foo")
    """
    registry: TemplateRegistry
    leases: TemplateLeases
    discovery: InstanceDiscovery
    synchronizer: InstanceSynchronizer
    factory: InstanceFactory
    updater: CascadeUpdater
    refresh: Optional[RefreshService] = None

    @classmethod
    def create(cls, host: HostTree, manifest: ManifestProvider,
               persistence: Optional[PersistenceProtocol] = None) -> "EmbedViewServices":
        registry = TemplateRegistry(manifest)
        leases = TemplateLeases(host, registry)
        synchronizer = InstanceSynchronizer(host, registry, leases)
        updater = CascadeUpdater(host, manifest, synchronizer)
        return cls(
            registry=registry,
            leases=leases,
            discovery=InstanceDiscovery(host),
            synchronizer=synchronizer,
            factory=InstanceFactory(host, synchronizer),
            updater=updater,
            refresh=RefreshService(updater, persistence) if persistence is not None else None,
        )
