"""Tests for topmost-instance discovery."""

from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.core.nodes import InstanceNode, Leaf, PlainGroup, classify
from pyqt_embedview.services import InstanceDiscovery


def handles(nodes):
    return [node.handle for node in nodes]


def test_classify_variants(world):
    screen = world.app_screen("Main")
    card = screen.current_card()
    tagged = world.group(card, Rect(0, 0, 10, 10), kind="Foo")
    plain = world.group(card, Rect(0, 0, 10, 10))
    label = world.label(card, "leaf", Rect(0, 0, 10, 10))

    assert isinstance(classify(world.host, tagged), InstanceNode)
    assert classify(world.host, tagged).kind == "Foo"
    assert isinstance(classify(world.host, plain), PlainGroup)
    assert isinstance(classify(world.host, label), Leaf)


def test_does_not_descend_into_instances(world):
    screen = world.app_screen("Main")
    outer = world.group(screen.current_card(), Rect(0, 0, 200, 200), kind="A")
    world.group(outer, Rect(10, 10, 50, 50), kind="B")

    found = InstanceDiscovery(world.host).find_top_instances(screen)

    assert handles(found) == [outer]


def test_descends_through_plain_groups(world):
    screen = world.app_screen("Main")
    scaffold = world.group(screen.current_card(), Rect(0, 0, 300, 300))
    inner_scaffold = world.group(scaffold, Rect(0, 0, 200, 200))
    deep = world.group(inner_scaffold, Rect(0, 0, 50, 50), kind="Foo")
    shallow = world.group(scaffold, Rect(100, 100, 50, 50), kind="Foo")

    found = InstanceDiscovery(world.host).find_top_instances(screen)

    # Breadth-first: the shallower instance is reached first
    assert handles(found) == [shallow, deep]


def test_kind_filter(world):
    screen = world.app_screen("Main")
    card = screen.current_card()
    foo = world.group(card, Rect(0, 0, 50, 50), kind="Foo")
    world.group(card, Rect(60, 0, 50, 50), kind="Bar")

    discovery = InstanceDiscovery(world.host)

    assert handles(discovery.find_top_instances(screen, "Foo")) == [foo]
    assert len(discovery.find_top_instances(screen, "")) == 2
    assert len(discovery.find_top_instances(screen, None)) == 2


def test_non_matching_instance_is_a_boundary(world):
    screen = world.app_screen("Main")
    bar = world.group(screen.current_card(), Rect(0, 0, 200, 200), kind="Bar")
    world.group(bar, Rect(0, 0, 50, 50), kind="Foo")

    found = InstanceDiscovery(world.host).find_top_instances(screen, "Foo")

    assert found == []


def test_scans_background_and_every_card(world):
    screen = world.app_screen("Main")
    second_card = screen.add_card("Main.card2")
    background = world.group(screen.background, Rect(0, 0, 50, 50), kind="Foo")
    first = world.group(screen.cards()[0], Rect(0, 0, 50, 50), kind="Foo")
    second = world.group(second_card, Rect(0, 0, 50, 50), kind="Foo")

    found = InstanceDiscovery(world.host).find_top_instances(screen)

    assert handles(found) == [background, first, second]


def test_group_as_container(world):
    screen = world.app_screen("Main")
    holder = world.group(screen.current_card(), Rect(0, 0, 300, 300))
    world.label(holder, "leaf", Rect(0, 0, 10, 10))
    inside = world.group(holder, Rect(10, 10, 50, 50), kind="Foo")
    world.group(screen.current_card(), Rect(400, 0, 50, 50), kind="Foo")

    found = InstanceDiscovery(world.host).find_top_instances(holder)

    assert handles(found) == [inside]


def test_card_as_container_ignores_leaves(world):
    screen = world.app_screen("Main")
    card = screen.current_card()
    world.label(card, "leaf", Rect(0, 0, 10, 10))

    assert InstanceDiscovery(world.host).find_top_instances(card) == []
