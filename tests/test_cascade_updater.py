"""Tests for cascading updates across screens and templates."""

import pytest

from pyqt_embedview.core.exceptions import CascadeAborted, HostMutationFailure, TemplateNotFound
from pyqt_embedview.core.geometry import Rect
from pyqt_embedview.core.properties import BACKGROUND_COLOR


def names(world, mutated):
    return [world.host.screen_name(container) for container in mutated]


def labels_in(world, instance):
    return [child.objectName() for child in world.host.child_controls(instance)]


def test_updates_screen_instances(world):
    foo = world.template("Foo", lambda card: world.label(card, "v1", Rect(0, 0, 40, 20)))
    holders = {}

    def build_main(card):
        holders["foo"] = world.group(card, Rect(10, 10, 100, 100), kind="Foo")

    main = world.app_screen("Main", build_main)
    world.app_screen("Settings")
    services = world.services()

    world.label(foo.current_card(), "v2", Rect(0, 30, 40, 20))
    mutated = services.updater.cascade_update("Foo")

    assert list(mutated) == [main]
    assert labels_in(world, holders["foo"]) == ["v1", "v2"]


def test_cascade_never_targets_own_template(world):
    holders = {}

    def build_foo(card):
        world.label(card, "v1", Rect(0, 0, 40, 20))
        holders["self"] = world.group(card, Rect(50, 50, 40, 40), kind="Foo")

    foo = world.template("Foo", build_foo)
    services = world.services()

    mutated = services.updater.cascade_update("Foo")

    assert foo not in mutated
    assert len(mutated) == 0
    assert world.host.child_controls(holders["self"]) == []


def test_nested_template_cascades_to_screens(world):
    holders = {}

    world.template("Inner", lambda card: world.label(card, "inner", Rect(0, 0, 40, 20)))

    def build_outer(card):
        world.label(card, "outer", Rect(0, 0, 40, 20))
        holders["inner"] = world.group(card, Rect(0, 30, 60, 60), kind="Inner")

    outer = world.template("Outer", build_outer)

    def build_main(card):
        holders["outer"] = world.group(card, Rect(100, 100, 200, 200), kind="Outer")

    main = world.app_screen("Main", build_main)
    services = world.services()

    mutated = services.updater.cascade_update("Inner")

    assert list(mutated) == [outer, main]
    assert labels_in(world, holders["inner"]) == ["inner"]
    # Instances copy only leaf controls from their template's root
    assert labels_in(world, holders["outer"]) == ["outer"]


def test_container_reached_twice_is_reported_once(world):
    world.template("Foo", lambda card: world.label(card, "foo", Rect(0, 0, 40, 20)))

    def build_outer(card):
        world.label(card, "outer", Rect(0, 0, 40, 20))
        world.group(card, Rect(0, 30, 60, 60), kind="Foo")

    outer = world.template("Outer", build_outer)

    def build_main(card):
        world.group(card, Rect(0, 0, 100, 100), kind="Foo")
        world.group(card, Rect(200, 0, 100, 100), kind="Outer")

    main = world.app_screen("Main", build_main)
    services = world.services()

    mutated = services.updater.cascade_update("Foo")

    # Templates are rebuilt before the screens embedding them
    assert len(mutated) == 2
    assert list(mutated) == [outer, main]


def test_diamond_containment_syncs_each_instance_once(world, monkeypatch):
    world.template("A", lambda card: world.label(card, "a", Rect(0, 0, 40, 20)))
    b = world.template("B", lambda card: world.group(card, Rect(0, 0, 60, 60), kind="A"))
    c = world.template("C", lambda card: world.group(card, Rect(0, 0, 60, 60), kind="A"))

    def build_d(card):
        world.group(card, Rect(0, 0, 60, 60), kind="B")
        world.group(card, Rect(100, 0, 60, 60), kind="C")

    d = world.template("D", build_d)
    main = world.app_screen("Main", lambda card: world.group(card, Rect(0, 0, 200, 200), kind="D"))
    services = world.services()

    synced = []
    real_sync = services.synchronizer.sync

    def recording_sync(kind, instance):
        synced.append((kind, id(instance)))
        return real_sync(kind, instance)

    monkeypatch.setattr(services.synchronizer, "sync", recording_sync)

    mutated = services.updater.cascade_update("A")

    assert list(mutated) == [b, c, d, main]
    assert len(synced) == len(set(synced)) == 5
    assert [kind for kind, _ in synced] == ["A", "A", "B", "C", "D"]


def test_mutually_embedding_templates_terminate(world):
    def build_a(card):
        world.label(card, "a", Rect(0, 0, 40, 20))
        world.group(card, Rect(0, 30, 60, 60), kind="B")

    def build_b(card):
        world.label(card, "b", Rect(0, 0, 40, 20))
        world.group(card, Rect(0, 30, 60, 60), kind="A")

    world.template("A", build_a)
    b = world.template("B", build_b)
    services = world.services()

    mutated = services.updater.cascade_update("A")

    assert list(mutated) == [b]


def test_untouched_loaded_screens_are_unloaded(world):
    world.template("Foo", lambda card: world.label(card, "foo", Rect(0, 0, 40, 20)))
    world.app_screen("Empty", resident=False)
    world.app_screen(
        "Uses",
        lambda card: world.group(card, Rect(0, 0, 100, 100), kind="Foo"),
        resident=False,
    )
    services = world.services()

    mutated = services.updater.cascade_update("Foo")

    assert world.loads == ["Empty", "Uses"]
    assert world.host.find_screen("Empty") is None
    assert names(world, mutated) == ["Uses"]
    assert world.host.find_screen("Uses") is not None


def test_mutated_lazy_template_stays_resident(world):
    world.template("Foo", lambda card: world.label(card, "foo", Rect(0, 0, 40, 20)))
    world.template(
        "Holder",
        lambda card: world.group(card, Rect(0, 0, 100, 100), kind="Foo"),
        resident=False,
    )
    world.template("Unrelated", resident=False)
    services = world.services()

    mutated = services.updater.cascade_update("Foo")

    assert names(world, mutated) == ["Holder"]
    assert world.host.find_screen("Holder") is not None
    assert world.host.find_screen("Unrelated") is None


def test_template_list_and_template_screens_skipped(world):
    world.template("Foo", lambda card: world.label(card, "foo", Rect(0, 0, 40, 20)))
    world.app_screen("TemplateList", resident=False, key="templates")
    world.app_screen("Main")
    services = world.services()

    assert [entry.name for entry in services.updater.application_screens()] == ["Main"]
    services.updater.cascade_update("Foo")
    assert "TemplateList" not in world.loads


def test_scan_failure_aborts_before_any_change(world):
    world.template("Foo", lambda card: world.label(card, "foo", Rect(0, 0, 40, 20)))
    holders = {}

    def build_main(card):
        holders["foo"] = world.group(card, Rect(0, 0, 100, 100), kind="Foo")
        world.label(holders["foo"], "stale", Rect(0, 0, 10, 10))

    world.app_screen("Main", build_main)

    def explode(card):
        raise RuntimeError("unreadable")

    world.app_screen("Broken", explode, resident=False)
    world.app_screen("Never", resident=False)
    services = world.services()

    with pytest.raises(CascadeAborted) as excinfo:
        services.updater.cascade_update("Foo")

    error = excinfo.value
    assert error.kind == "Foo"
    assert isinstance(error.origin, HostMutationFailure)
    assert error.origin.operation == "load"
    assert error.__cause__ is error.origin
    assert len(error.mutated) == 0
    assert "Never" not in world.loads
    assert labels_in(world, holders["foo"]) == ["stale"]


def test_bad_cosmetic_aborts_with_partial_result(world):
    world.template("Inner", lambda card: world.label(card, "inner", Rect(0, 0, 40, 20)))

    def build_outer(card):
        card.setProperty(BACKGROUND_COLOR, "not-a-colour")
        world.label(card, "outer", Rect(0, 0, 40, 20))
        world.group(card, Rect(0, 30, 60, 60), kind="Inner")

    outer = world.template("Outer", build_outer)
    world.app_screen("Main", lambda card: world.group(card, Rect(0, 0, 200, 200), kind="Outer"))
    services = world.services()

    with pytest.raises(CascadeAborted) as excinfo:
        services.updater.cascade_update("Inner")

    error = excinfo.value
    assert isinstance(error.origin, HostMutationFailure)
    assert error.origin.operation == "set_property"
    assert isinstance(error.origin.__cause__, ValueError)
    assert list(error.mutated) == [outer]


def test_unknown_kind(world):
    services = world.services()
    with pytest.raises(TemplateNotFound):
        services.updater.cascade_update("Ghost")
