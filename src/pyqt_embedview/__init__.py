"""
pyqt-embedview: reusable embedded views for PyQt6 screens.

A template is a screen whose first card holds a set of controls, optionally
with a behavior and cosmetic defaults. Any number of instances of it can be
embedded inside other screens, in groups, or inside other templates, and
every instance can be rebuilt in place when the template changes.

Architecture:
- Core: exceptions, geometry, node variants (no Qt imports)
- Protocols: manifest, host tree, persistence, behavior contracts
- Services: registry, leases, discovery, synchronization, factory, cascade
- Host: PyQt6 widgets and the QtHostTree adapter
- IO: JSON manifest loader

Key Features:
- Topmost-instance discovery that never descends into an instance
- Scoped template leases that unload only what they loaded
- Two-phase content rebuild that preserves instance tag and geometry
- Cascading updates through templates nested in other templates
"""

__version__ = "0.1.0"

from pyqt_embedview.core import (
    EmbedViewError,
    TemplateNotFound,
    HostMutationFailure,
    CascadeAborted,
    ManifestError,
    Rect,
    MutatedContainers,
)
from pyqt_embedview.protocols import (
    EmbedViewConfig,
    set_embed_view_config,
    get_embed_view_config,
    TemplateEntry,
    ScreenEntry,
    StaticManifest,
    ViewBehavior,
)
from pyqt_embedview.services import EmbedViewServices

__all__ = [
    "__version__",
    "EmbedViewError",
    "TemplateNotFound",
    "HostMutationFailure",
    "CascadeAborted",
    "ManifestError",
    "Rect",
    "MutatedContainers",
    "EmbedViewConfig",
    "set_embed_view_config",
    "get_embed_view_config",
    "TemplateEntry",
    "ScreenEntry",
    "StaticManifest",
    "ViewBehavior",
    "EmbedViewServices",
]
