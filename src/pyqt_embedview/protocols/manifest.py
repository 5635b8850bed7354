"""Manifest protocol for template and screen lookup.

The application's manifest is the single source of truth for which templates
exist and which screens make up the application. The core never writes it.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class TemplateEntry:
    """One declared template: its kind and the screen file backing it."""
    kind: str
    backing_path: str


@dataclass(frozen=True)
class ScreenEntry:
    """One declared application screen."""
    key: str
    name: str
    backing_path: str


class ManifestProvider(Protocol):
    """Protocol for manifest services.

    Example:
        manifest = StaticManifest(
            templates=[TemplateEntry("Foo", "views/foo.ui")],
            screens=[ScreenEntry("main", "Main", "main.ui")],
        )
        registry = TemplateRegistry(manifest)
    """

    def list_templates(self) -> List[TemplateEntry]:
        """Return declared templates in registry order."""
        ...

    def list_screens(self) -> List[ScreenEntry]:
        """Return declared screens in manifest order."""
        ...


class StaticManifest:
    """In-memory manifest built from explicit entry lists."""

    def __init__(self, templates: Optional[List[TemplateEntry]] = None,
                 screens: Optional[List[ScreenEntry]] = None):
        self._templates = list(templates or [])
        self._screens = list(screens or [])

    def list_templates(self) -> List[TemplateEntry]:
        return list(self._templates)

    def list_screens(self) -> List[ScreenEntry]:
        return list(self._screens)
