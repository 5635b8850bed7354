"""Tagged-variant view of host nodes.

A group carrying a non-empty kind tag is an instance; an untagged group is
transparent scaffolding that may contain instances; anything else is a leaf.
Classification happens once per node at traversal time so the traversal
code matches on types instead of probing the tag property repeatedly.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING, Union

from pyqt_embedview.protocols.embed_config import get_embed_view_config

if TYPE_CHECKING:
    from pyqt_embedview.protocols.host_tree import HostTree


@dataclass(frozen=True, eq=False)
class InstanceNode:
    """A tagged group mirroring the template named by ``kind``."""
    handle: Any
    kind: str


@dataclass(frozen=True, eq=False)
class PlainGroup:
    """An untagged group; its children are searched for instances."""
    handle: Any


@dataclass(frozen=True, eq=False)
class Leaf:
    """Any non-group control."""
    handle: Any


Node = Union[InstanceNode, PlainGroup, Leaf]


def classify(host: "HostTree", handle: Any) -> Node:
    """Resolve a host node into its variant."""
    if not host.is_group(handle):
        return Leaf(handle)
    kind = host.get_property(handle, get_embed_view_config().kind_property)
    if kind:
        return InstanceNode(handle, str(kind))
    return PlainGroup(handle)
