"""Template registry lookup backed by the application manifest."""

import logging
from pathlib import Path
from typing import List, Optional

from pyqt_embedview.core.exceptions import TemplateNotFound
from pyqt_embedview.protocols.manifest import ManifestProvider, TemplateEntry

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Read-only view over the manifest's declared templates.

    The manifest is injected rather than looked up globally so registries
    can be built from fakes in tests.
    """

    def __init__(self, manifest: ManifestProvider):
        self.manifest = manifest

    def entries(self) -> List[TemplateEntry]:
        return self.manifest.list_templates()

    def kinds(self) -> List[str]:
        """Return template kinds in registry order."""
        return [entry.kind for entry in self.entries()]

    def find(self, kind: str) -> Optional[TemplateEntry]:
        for entry in self.entries():
            if entry.kind == kind:
                return entry
        return None

    def resolves(self, kind: str) -> bool:
        """True iff the manifest declares a template of this kind."""
        return self.find(kind) is not None

    def backing_path(self, kind: str) -> str:
        """
        Return the screen file backing a template.

        Raises:
            TemplateNotFound: If the kind is not declared
        """
        entry = self.find(kind)
        if entry is None:
            raise TemplateNotFound(kind)
        return entry.backing_path

    def kind_for_path(self, path: str) -> Optional[str]:
        """Reverse lookup used when a template file is saved."""
        target = Path(path).resolve()
        for entry in self.entries():
            if Path(entry.backing_path).resolve() == target:
                return entry.kind
        logger.debug(f"No template backed by {path}")
        return None
