"""
Content planning for instance synchronization.

Separates "what to copy" from "how to mutate the host tree": a ContentPlan
is computed from a resident template and describes the effective content
root, the behavior and cosmetics to carry over, and the controls to copy.
The InstanceSynchronizer then applies the plan as one teardown-and-rebuild.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from pyqt_embedview.core.exceptions import HostMutationFailure
from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.core.nodes import PlainGroup, classify
from pyqt_embedview.core.properties import COSMETIC_PROPERTIES
from pyqt_embedview.protocols.host_tree import HostTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControlDescriptor:
    """One control to copy, with its rect relative to the content root."""
    source: Any
    offset_rect: Rect

    def placed_at(self, origin: Tuple[int, int]) -> Rect:
        """Rect of the copy once placed relative to ``origin``."""
        return self.offset_rect.translated(*origin)


@dataclass
class ContentPlan:
    """Everything an instance needs from its template.

    Iterating a plan yields ControlDescriptors lazily from the live template.
    Each iteration starts over, so a plan can be applied more than once.
    """
    host: HostTree
    canvas: Any
    root: Any
    root_origin: Tuple[int, int]
    behavior: Optional[Any] = None
    cosmetics: Dict[str, Any] = field(default_factory=dict)

    @property
    def uses_wrapper_group(self) -> bool:
        return self.root is not self.canvas

    def controls(self) -> Iterator[ControlDescriptor]:
        ox, oy = self.root_origin
        for handle in self.host.child_controls(self.root):
            # Groups are nested instances or scaffolding; they are
            # discovered and synchronized on their own, never copied
            if self.host.is_group(handle):
                continue
            yield ControlDescriptor(handle, self.host.get_rect(handle).translated(-ox, -oy))

    def __iter__(self) -> Iterator[ControlDescriptor]:
        return self.controls()


def read_cosmetics(host: HostTree, node: Any) -> Dict[str, Any]:
    """Return the cosmetic properties individually set on ``node``."""
    cosmetics = {}
    for name in COSMETIC_PROPERTIES:
        value = host.get_property(node, name)
        if value is not None:
            cosmetics[name] = value
    return cosmetics


def template_canvas(host: HostTree, template: Any) -> Any:
    """Return the card holding a template's content (its first card)."""
    cards = host.cards(template)
    if not cards:
        raise HostMutationFailure("read_template", f"template {host.screen_name(template)!r} has no card")
    return cards[0]


def effective_content_root(host: HostTree, canvas: Any) -> Any:
    """
    Return the node whose children are mirrored into instances.

    The canvas itself, unless it holds nothing but a single untagged group
    and carries no behavior or cosmetic override of its own; in that case
    the group is a design-time wrapper and its children are the content.
    """
    children = host.child_controls(canvas)
    if len(children) != 1:
        return canvas
    if host.get_behavior(canvas) is not None or read_cosmetics(host, canvas):
        return canvas
    node = classify(host, children[0])
    if isinstance(node, PlainGroup):
        return node.handle
    return canvas


def plan_content(host: HostTree, template: Any) -> ContentPlan:
    """Compute the content plan for a resident template screen."""
    canvas = template_canvas(host, template)
    root = effective_content_root(host, canvas)
    root_origin = (0, 0) if root is canvas else host.get_rect(root).top_left
    plan = ContentPlan(
        host=host,
        canvas=canvas,
        root=root,
        root_origin=root_origin,
        behavior=host.get_behavior(root),
        cosmetics=read_cosmetics(host, root),
    )
    logger.debug(
        f"Planned content for {host.screen_name(template)!r}: "
        f"wrapper={plan.uses_wrapper_group}, cosmetics={sorted(plan.cosmetics)}"
    )
    return plan
