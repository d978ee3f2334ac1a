"""Event emitter that can stand alone or be mixed into an existing object.

Usage::

    from listen_up import emitter

    # Basic emitter
    bus = emitter()

    # Extending an object
    thing = emitter(SimpleNamespace(foo="bar"))

Listeners are called as ``callback(host, event_id, *args)``; the host plays the
role of ``self`` for plain functions registered from outside the object.
"""

from __future__ import annotations

import functools
import types
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from .config import get_settings
from .exceptions import InvalidArgument
from .keys import Callback, EventKey, Listener, PatternKey, as_event_key
from .logging import get_logger

LOGGER = get_logger("emitter")

Registry = Dict[EventKey, List[Listener]]
E = TypeVar("E")


def _event_data(host: Any) -> Registry:
    """Return the registry stored on ``host``, creating it on first use."""

    name = get_settings().event_data_property
    data = getattr(host, name, None)
    if data is None:
        data = {}
        setattr(host, name, data)
    return data


def get_listeners(host: Any) -> Registry:
    """Return the listener registry of ``host`` without creating one."""

    data = getattr(host, get_settings().event_data_property, None)
    return data if data is not None else {}


def _registration_key(event: Any) -> EventKey:
    key = as_event_key(event)
    if isinstance(key, PatternKey) and not isinstance(key.pattern.pattern, str):
        raise InvalidArgument("Event patterns must be compiled from str, not bytes.")
    return key


def _resolve_callback(group: Any, callback: Optional[Callback]) -> Tuple[Any, Callback]:
    if callable(group):
        if callback is not None:
            raise InvalidArgument("A callable was passed as the group; pass the callback only once.")
        return None, group
    if not callable(callback):
        raise InvalidArgument("You must provide a callback when adding an event listener.")
    return group, callback


def _add_listener(host: E, listener: Listener) -> E:
    _event_data(host).setdefault(listener.key, []).append(listener)
    LOGGER.debug(
        "listener added",
        extra={"key": str(listener.key), "group": listener.group, "event": "attach_once" if listener.once else "attach"},
    )
    return host


def _filter_bucket(host: Any, key: EventKey, keep: Callable[[Listener], bool]) -> None:
    registry = get_listeners(host)
    bucket = registry.get(key)
    if bucket is None:
        return
    # Replace rather than mutate so an in-progress dispatch keeps its view
    survivors = [listener for listener in bucket if keep(listener)]
    if survivors:
        registry[key] = survivors
    else:
        del registry[key]


class Emitter:
    """Synchronous publish/subscribe for a single host object.

    Every mutating method returns the host so calls can be chained::

        bus.attach("ping", on_ping).dispatch("ping")
    """

    def attach(self: E, event: Any, group: Any = None, callback: Optional[Callback] = None) -> E:
        """Register ``callback`` for ``event``.

        ``event`` is an exact identifier or a compiled regular expression. The
        optional ``group`` tags the listener for :meth:`detach_group`; when
        only two arguments are given the second one is the callback.
        """

        group, callback = _resolve_callback(group, callback)
        return _add_listener(self, Listener(_registration_key(event), callback, group))

    def attach_once(self: E, event: Any, group: Any = None, callback: Optional[Callback] = None) -> E:
        """Register ``callback`` to run on the first matching dispatch only."""

        group, callback = _resolve_callback(group, callback)
        key = _registration_key(event)
        fired = False

        @functools.wraps(callback)
        def once_callback(host: Any, *args: Any) -> Any:
            nonlocal fired
            _filter_bucket(host, key, lambda listener: listener.callback is not once_callback)
            if fired:
                return None
            fired = True
            return callback(host, *args)

        return _add_listener(self, Listener(key, once_callback, group, original=callback, once=True))

    def detach(self: E, event: Any, callback: Optional[Callback] = None) -> E:
        """Remove listeners registered under exactly ``event``.

        With ``callback`` only listeners for that callback (including one-shot
        wrappers around it) are removed; otherwise the whole key goes.
        """

        key = as_event_key(event)
        registry = get_listeners(self)
        if key not in registry:
            return self

        if callback is not None:
            _filter_bucket(self, key, lambda listener: listener.target != callback)
        else:
            del registry[key]
        LOGGER.debug("listeners removed", extra={"key": str(key), "event": "detach"})
        return self

    def detach_group(self: E, group: Any) -> E:
        """Remove every listener tagged with ``group``, whatever its key."""

        if group is None:
            return self
        registry = get_listeners(self)
        for key in list(registry):
            _filter_bucket(self, key, lambda listener: listener.group != group)
        LOGGER.debug("group released", extra={"group": group, "event": "detach_group"})
        return self

    def dispatch(self: E, event_id: Any, *args: Any) -> E:
        """Call every listener whose key matches ``event_id``.

        Listeners run in registration order within a key, keys in the order
        they were registered (a key emptied by removal starts over at the
        end). The registry is snapshotted first:
        listeners attached by a handler wait for the next dispatch. Exceptions
        raised by a handler propagate and stop the remaining calls.
        """

        event_id = str(event_id)
        snapshot = [(key, tuple(bucket)) for key, bucket in get_listeners(self).items()]
        count = 0
        for key, bucket in snapshot:
            if not key.matches(event_id):
                continue
            for listener in bucket:
                count += 1
                listener.callback(self, event_id, *args)
        LOGGER.debug("event dispatched", extra={"event": event_id, "count": count})
        return self

    def listeners(self, event: Any) -> Tuple[Callback, ...]:
        """Return the user callbacks registered under exactly ``event``."""

        bucket = get_listeners(self).get(as_event_key(event), ())
        return tuple(listener.target for listener in bucket)

    on = attach
    once = attach_once
    off = detach
    release_group = detach_group
    emit = dispatch


# Shared capability table: functions added here show up on every Emitter
proto = Emitter


def _capabilities() -> Dict[str, Callable[..., Any]]:
    return {
        name: member
        for name, member in vars(proto).items()
        if not name.startswith("_") and isinstance(member, types.FunctionType)
    }


def emitter(host: Any = None) -> Any:
    """Create a new emitter, or turn ``host`` into one and return it.

    Mixed-in hosts receive bound copies of the methods present on
    :data:`proto` at call time.
    """

    if host is None:
        return Emitter()
    try:
        for name, member in _capabilities().items():
            setattr(host, name, types.MethodType(member, host))
    except AttributeError as exc:
        raise InvalidArgument(f"Cannot mix emitter methods into {type(host).__name__!r} objects.") from exc
    return host


__all__ = ["Emitter", "Registry", "emitter", "get_listeners", "proto"]
