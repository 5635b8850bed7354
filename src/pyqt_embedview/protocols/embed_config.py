"""Base configuration for embedded-view synchronization.

Provides hooks for applications to customize property names, defaults and
lifecycle message names without touching the core services.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class EmbedViewConfig:
    """Configuration for embedded-view behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        kind_property: Name of the tag property marking a group as an instance
        behavior_property: Name of the property holding a node's behavior
        default_instance_size: Side of the default square for new instances
        template_list_key: Manifest screen key that denotes the template list
        instantiated_message: Lifecycle message sent after content is rebuilt
        geometry_message: Lifecycle message asking the behavior to lay out
        manifest_file: Optional manifest path used by JsonManifest.from_config()
    """

    kind_property: str = "kind"
    behavior_property: str = "behavior"
    default_instance_size: int = 300
    template_list_key: str = "templates"
    instantiated_message: str = "instantiated"
    geometry_message: str = "recalculate_geometry"
    manifest_file: Optional[str] = None


# Global config instance (set by application)
_embed_view_config: Optional[EmbedViewConfig] = None


def set_embed_view_config(config: Optional[EmbedViewConfig]) -> None:
    """Set the global embedded-view configuration.

    Args:
        config: EmbedViewConfig instance, or None to restore defaults
    """
    global _embed_view_config
    _embed_view_config = config


def get_embed_view_config() -> EmbedViewConfig:
    """Get the current embedded-view configuration.

    Returns:
        Current EmbedViewConfig or default if not set
    """
    if _embed_view_config is None:
        return EmbedViewConfig()
    return _embed_view_config
