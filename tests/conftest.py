"""pytest configuration and fixtures for pyqt-embedview tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication, QLabel

from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.host import QtHostTree, ViewGroup, ViewStack
from pyqt_embedview.protocols import (
    ScreenEntry,
    StaticManifest,
    TemplateEntry,
    get_embed_view_config,
    set_embed_view_config,
)
from pyqt_embedview.services import EmbedViewServices


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    set_embed_view_config(None)
    yield
    set_embed_view_config(None)


class ViewWorld:
    """Builds screens, templates and a manifest around one QtHostTree.

    Screens declared with resident=False are only built when the host loads
    them from their backing path, which exercises on-demand loading.
    """

    def __init__(self):
        self.templates = []
        self.screens = []
        self.builders = {}
        self.loads = []
        self.host = QtHostTree(screen_loader=self._load)
        self.keep_alive = []

    # ---------- manifest ----------

    @property
    def manifest(self) -> StaticManifest:
        return StaticManifest(self.templates, self.screens)

    def services(self, persistence=None) -> EmbedViewServices:
        return EmbedViewServices.create(self.host, self.manifest, persistence)

    # ---------- screens ----------

    def template(self, kind, build=None, resident=True):
        """Declare a template; ``build(card)`` fills its canvas."""
        path = f"/views/{kind}.ui"
        self.templates.append(TemplateEntry(kind, path))
        self.builders[path] = (kind, build)
        if resident:
            return self._register(self._build(kind, build))
        return None

    def app_screen(self, name, build=None, resident=True, key=None):
        """Declare an application screen; ``build(card)`` fills its first card."""
        path = f"/screens/{name}.ui"
        self.screens.append(ScreenEntry(key or name.lower(), name, path))
        self.builders[path] = (name, build)
        if resident:
            return self._register(self._build(name, build))
        return None

    def _build(self, name, build):
        screen = ViewStack(name)
        screen.resize(800, 600)
        card = screen.add_card(f"{name}.card1")
        card.resize(800, 600)
        if build is not None:
            build(card)
        self.keep_alive.append(screen)
        return screen

    def _register(self, screen):
        self.host.register_screen(screen)
        return screen

    def _load(self, path):
        name, build = self.builders[path]
        self.loads.append(name)
        return self._build(name, build)

    # ---------- controls ----------

    @staticmethod
    def label(parent, text, rect):
        label = QLabel(text, parent)
        label.setObjectName(text)
        label.setGeometry(rect.left, rect.top, rect.width, rect.height)
        return label

    def group(self, parent, rect, kind=None, name=None):
        group = ViewGroup(parent, name)
        group.setGeometry(rect.left, rect.top, rect.width, rect.height)
        if kind:
            group.setProperty(get_embed_view_config().kind_property, kind)
        return group


class RecordingPersistence:
    """PersistenceProtocol fake recording saved containers."""

    def __init__(self):
        self.saved = []

    def save(self, container):
        self.saved.append(container)


@pytest.fixture
def world(qapp):
    return ViewWorld()


@pytest.fixture
def persistence():
    return RecordingPersistence()
