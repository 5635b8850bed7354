"""Tests for instance creation."""

import pytest
from PyQt6.QtWidgets import QFrame

from pyqt_embedview.core.exceptions import HostMutationFailure, TemplateNotFound
from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.core.properties import CLIPPING, MARGINS, OPAQUE, SHOW_BORDER, TEXT_FONT
from pyqt_embedview.host import ViewGroup
from pyqt_embedview.protocols import EmbedViewConfig, set_embed_view_config


@pytest.fixture
def foo_world(world):
    def build(card):
        world.label(card, "title", Rect(0, 0, 40, 20))
        card.setProperty(TEXT_FONT, "Courier")

    world.template("Foo", build)
    world.app_screen("Main")
    return world


def test_create_instance_with_explicit_rect(foo_world):
    services = foo_world.services()
    card = foo_world.host.find_screen("Main").current_card()

    instance = services.factory.create_instance("Foo", card, Rect(0, 0, 100, 100))

    host = foo_world.host
    assert isinstance(instance, ViewGroup)
    assert host.get_rect(instance) == Rect(0, 0, 100, 100)
    children = host.child_controls(instance)
    assert len(children) == 1
    assert children[0].text() == "title"
    assert host.get_rect(children[0]) == Rect(0, 0, 40, 20)
    assert host.get_property(instance, TEXT_FONT) == "Courier"
    assert instance.property("kind") == "Foo"


def test_default_rect_is_centered_square(foo_world):
    services = foo_world.services()
    card = foo_world.host.find_screen("Main").current_card()

    instance = services.factory.create_instance("Foo", card)

    expected = Rect.centered_square((card.width() // 2, card.height() // 2), 300)
    assert foo_world.host.get_rect(instance) == expected


def test_default_size_follows_config(foo_world):
    set_embed_view_config(EmbedViewConfig(default_instance_size=120))
    services = foo_world.services()
    card = foo_world.host.find_screen("Main").current_card()

    instance = services.factory.create_instance("Foo", card)

    rect = foo_world.host.get_rect(instance)
    assert (rect.width, rect.height) == (120, 120)


def test_screen_parent_uses_current_card(foo_world):
    services = foo_world.services()
    screen = foo_world.host.find_screen("Main")

    instance = services.factory.create_instance("Foo", screen, Rect(10, 10, 50, 50))

    assert instance.parentWidget() is screen.current_card()


def test_group_parent_centers_on_group(foo_world):
    services = foo_world.services()
    card = foo_world.host.find_screen("Main").current_card()
    holder = foo_world.group(card, Rect(100, 100, 200, 200), name="holder")

    instance = services.factory.create_instance("Foo", holder)

    assert instance.parentWidget() is holder
    assert foo_world.host.get_rect(instance) == Rect(50, 50, 300, 300)


def test_baseline_properties_and_name(foo_world):
    services = foo_world.services()
    card = foo_world.host.find_screen("Main").current_card()

    named = services.factory.create_instance("Foo", card, Rect(0, 0, 100, 100), name="header")
    unnamed = services.factory.create_instance("Foo", card, Rect(0, 0, 100, 100))

    assert named.objectName() == "header"
    assert unnamed.objectName() == ""
    assert named.property(SHOW_BORDER) is False
    assert named.property(MARGINS) == 0
    assert named.property(OPAQUE) is False
    assert named.property(CLIPPING) is True
    assert named.frameShape() == QFrame.Shape.NoFrame
    assert not named.autoFillBackground()


def test_unknown_kind_creates_nothing(foo_world):
    services = foo_world.services()
    card = foo_world.host.find_screen("Main").current_card()

    with pytest.raises(TemplateNotFound):
        services.factory.create_instance("Missing", card)

    assert foo_world.host.child_groups(card) == []


def test_failed_population_leaves_tagged_empty_instance(world):
    def explode(card):
        raise RuntimeError("disk on fire")

    world.template("Broken", explode, resident=False)
    world.app_screen("Main")
    services = world.services()
    card = world.host.find_screen("Main").current_card()

    with pytest.raises(HostMutationFailure) as excinfo:
        services.factory.create_instance("Broken", card, Rect(0, 0, 100, 100))

    assert "disk on fire" in str(excinfo.value)
    groups = world.host.child_groups(card)
    assert len(groups) == 1
    assert groups[0].property("kind") == "Broken"
    assert world.host.child_controls(groups[0]) == []
