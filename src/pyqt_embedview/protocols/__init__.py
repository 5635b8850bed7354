"""
Collaborator protocols.

Contracts for everything the synchronization core consumes but does not own:
the manifest, the host object tree, persistence and behaviors.
"""

from .embed_config import EmbedViewConfig, set_embed_view_config, get_embed_view_config
from .manifest import TemplateEntry, ScreenEntry, ManifestProvider, StaticManifest
from .host_tree import HostTree
from .persistence import PersistenceProtocol
from .behavior import ViewBehavior

__all__ = [
    "EmbedViewConfig",
    "set_embed_view_config",
    "get_embed_view_config",
    "TemplateEntry",
    "ScreenEntry",
    "ManifestProvider",
    "StaticManifest",
    "HostTree",
    "PersistenceProtocol",
    "ViewBehavior",
]
