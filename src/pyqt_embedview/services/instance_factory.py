"""Creation of new embedded-view instances."""

import logging
from typing import Any, Optional

from pyqt_embedview.core.exceptions import TemplateNotFound
from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.core.properties import CLIPPING, MARGINS, OPAQUE, SHOW_BORDER
from pyqt_embedview.protocols.embed_config import get_embed_view_config
from pyqt_embedview.protocols.host_tree import HostTree
from .instance_sync import InstanceSynchronizer

logger = logging.getLogger(__name__)


class InstanceFactory:
    """Creates tagged containers and populates them from their template."""

    def __init__(self, host: HostTree, synchronizer: InstanceSynchronizer):
        self.host = host
        self.synchronizer = synchronizer

    def create_instance(self, kind: str, parent: Any, rect: Optional[Rect] = None,
                        name: Optional[str] = None) -> Any:
        """
        Create an instance of ``kind`` inside ``parent``.

        Args:
            kind: Template kind to instantiate
            parent: A screen (its current card is used), a card or a group
            rect: Instance rect; defaults to a square centered on the parent
            name: Optional instance name

        Returns:
            The new instance

        Raises:
            TemplateNotFound: If ``kind`` is not declared
            HostMutationFailure: If creating or populating the instance fails.
                When population fails the empty tagged instance stays in place.
        """
        if not self.synchronizer.registry.resolves(kind):
            raise TemplateNotFound(kind)

        target = self.host.current_card(parent) if self.host.is_screen(parent) else parent
        config = get_embed_view_config()

        with self.host.suppressed(target):
            instance = self.host.create_group(target, name)
            self.synchronizer.apply_identity(instance, kind)
            self.host.set_property(instance, SHOW_BORDER, False)
            self.host.set_property(instance, MARGINS, 0)
            self.host.set_property(instance, OPAQUE, False)
            self.host.set_property(instance, CLIPPING, True)
            if rect is None:
                rect = Rect.centered_square(self.host.reference_point(target), config.default_instance_size)
            self.host.set_rect(instance, rect)

        logger.info(f"Created instance of {kind!r} at {rect}")
        self.synchronizer.sync(kind, instance)
        return instance
