"""
Core value types.

Exceptions, geometry, the node variant model and the mutated-container set.
No Qt imports live here.
"""

from .exceptions import (
    EmbedViewError,
    TemplateNotFound,
    HostMutationFailure,
    CascadeAborted,
    ManifestError,
)
from .geometry import Rect
from .nodes import InstanceNode, PlainGroup, Leaf, Node, classify
from .mutated_containers import MutatedContainers

__all__ = [
    "EmbedViewError",
    "TemplateNotFound",
    "HostMutationFailure",
    "CascadeAborted",
    "ManifestError",
    "Rect",
    "InstanceNode",
    "PlainGroup",
    "Leaf",
    "Node",
    "classify",
    "MutatedContainers",
]
