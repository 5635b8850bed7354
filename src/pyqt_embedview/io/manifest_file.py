"""
JSON manifest loader.

Reads the application's declared templates and screens from a file:

    {
        "templates": [{"kind": "Foo", "path": "views/foo.ui"}],
        "screens": [{"key": "main", "name": "Main", "path": "main.ui"}]
    }

Relative paths are resolved against the manifest file's directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Set, Union

from pyqt_embedview.core.exceptions import ManifestError
from pyqt_embedview.protocols.embed_config import get_embed_view_config
from pyqt_embedview.protocols.manifest import ScreenEntry, TemplateEntry

logger = logging.getLogger(__name__)


class JsonManifest:
    """ManifestProvider backed by a JSON file, read once at construction."""

    def __init__(self, manifest_file: Union[str, Path]):
        self.manifest_file = Path(manifest_file)
        self._templates: List[TemplateEntry] = []
        self._screens: List[ScreenEntry] = []
        self.reload()

    @classmethod
    def from_config(cls) -> "JsonManifest":
        """Build from the manifest_file configured in EmbedViewConfig."""
        config = get_embed_view_config()
        if not config.manifest_file:
            raise ManifestError("No manifest_file configured")
        return cls(config.manifest_file)

    def reload(self) -> None:
        """Re-read the manifest file."""
        try:
            with open(self.manifest_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(f"Cannot read manifest {self.manifest_file}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {self.manifest_file} must contain a JSON object")

        self._templates = [
            TemplateEntry(kind=item["kind"], backing_path=self._resolve(item["path"]))
            for item in self._section(data, "templates", ("kind", "path"))
        ]
        self._screens = [
            ScreenEntry(key=item["key"], name=item["name"], backing_path=self._resolve(item["path"]))
            for item in self._section(data, "screens", ("key", "name", "path"))
        ]
        self._check_unique_kinds()
        logger.debug(
            f"Loaded manifest {self.manifest_file}: "
            f"{len(self._templates)} template(s), {len(self._screens)} screen(s)"
        )

    def list_templates(self) -> List[TemplateEntry]:
        return list(self._templates)

    def list_screens(self) -> List[ScreenEntry]:
        return list(self._screens)

    def _section(self, data: Dict[str, Any], name: str, required: tuple) -> List[Dict[str, Any]]:
        items = data.get(name, [])
        if not isinstance(items, list):
            raise ManifestError(f"Manifest section {name!r} must be a list")
        for index, item in enumerate(items):
            missing = [key for key in required if not isinstance(item, dict) or not item.get(key)]
            if missing:
                raise ManifestError(f"Manifest {name}[{index}] is missing {', '.join(missing)}")
        return items

    def _resolve(self, path: str) -> str:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.manifest_file.parent / candidate
        return str(candidate)

    def _check_unique_kinds(self) -> None:
        seen: Set[str] = set()
        for entry in self._templates:
            if entry.kind in seen:
                raise ManifestError(f"Template kind {entry.kind!r} declared more than once")
            seen.add(entry.kind)
