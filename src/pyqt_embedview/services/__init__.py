"""
Embedded-view services.

Registry lookup, template leases, content planning, discovery,
synchronization, instance creation, cascading updates and refresh glue.
All services talk to the GUI only through the HostTree protocol.
"""

from .template_registry import TemplateRegistry
from .template_leases import TemplateLeases, TemplateLease
from .content_plan import ContentPlan, ControlDescriptor, plan_content, effective_content_root
from .instance_discovery import InstanceDiscovery
from .instance_sync import InstanceSynchronizer
from .instance_factory import InstanceFactory
from .cascade_updater import CascadeUpdater
from .refresh_service import RefreshService
from .embed_view_services import EmbedViewServices

__all__ = [
    "TemplateRegistry",
    "TemplateLeases",
    "TemplateLease",
    "ContentPlan",
    "ControlDescriptor",
    "plan_content",
    "effective_content_root",
    "InstanceDiscovery",
    "InstanceSynchronizer",
    "InstanceFactory",
    "CascadeUpdater",
    "RefreshService",
    "EmbedViewServices",
]
