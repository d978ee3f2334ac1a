from types import SimpleNamespace

import pytest

from listen_up import (
    Emitter,
    ExactKey,
    InvalidArgument,
    configure,
    emitter,
    get_listeners,
    get_settings,
    proto,
)


def noop(*_):
    pass


def _public_names(obj):
    return [name for name in vars(obj) if not name.startswith("_")]


def test_factory_returns_new_emitter():
    first, second = emitter(), emitter()
    assert isinstance(first, Emitter)
    assert first is not second


def test_factory_mixes_into_host_and_returns_it():
    host = SimpleNamespace(foo="bar")
    assert emitter(host) is host
    assert host.foo == "bar"
    assert host.attach("x", noop) is host


def test_factory_rejects_hosts_without_attributes():
    with pytest.raises(InvalidArgument):
        emitter({"foo": "bar"})


def test_subclass_embeds_emitter():
    class Player(Emitter):
        def __init__(self):
            self.hits = 0

    player = Player()
    player.attach("hit", lambda host, *_: setattr(host, "hits", host.hits + 1)).dispatch("hit")
    assert player.hits == 1


def test_registry_is_created_lazily():
    instance = emitter()
    assert get_settings().event_data_property not in vars(instance)
    instance.dispatch("x").detach("x").detach_group("g")
    assert get_settings().event_data_property not in vars(instance)
    instance.attach("x", noop)
    assert get_settings().event_data_property in vars(instance)


def test_registry_not_in_public_attributes():
    instance = emitter().attach("test", noop)
    assert _public_names(instance) == []


def test_get_listeners_without_registry_returns_empty_mapping():
    host = SimpleNamespace()
    assert get_listeners(host) == {}
    assert vars(host) == {}


def test_get_listeners_returns_registry():
    instance = emitter().attach("test", "group", noop)
    registry = get_listeners(instance)
    (listener,) = registry[ExactKey("test")]
    assert listener.callback is noop
    assert listener.group == "group"
    assert listener.once is False


def test_configured_property_name_moves_storage():
    configure(event_data_property="_test_event_key")
    instance = emitter().attach("test", noop)
    assert "_test_event_key" in vars(instance)
    assert "_event_listener_data" not in vars(instance)
    assert _public_names(instance) == []
    assert instance.listeners("test") == (noop,)


def test_proto_changes_reach_existing_instances():
    instance = emitter()
    proto.describe = lambda self: "Ima mitter!"
    try:
        assert instance.describe() == "Ima mitter!"
    finally:
        del proto.describe


def test_proto_changes_do_not_reach_mixed_in_hosts():
    host = emitter(SimpleNamespace())
    proto.describe = lambda self: "Ima mitter!"
    try:
        assert not hasattr(host, "describe")
        assert emitter(SimpleNamespace()).describe() == "Ima mitter!"
    finally:
        del proto.describe


def test_mixed_in_hosts_have_separate_registries():
    first = emitter(SimpleNamespace(called=0))
    second = emitter(SimpleNamespace(called=0))
    first.attach("x", lambda host, *_: setattr(host, "called", host.called + 1))
    second.dispatch("x")
    first.dispatch("x")
    assert (first.called, second.called) == (1, 0)
