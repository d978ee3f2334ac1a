"""listen-up: a small synchronous event emitter mixin."""

from .config import EmitterSettings, configure, get_settings, reset_settings
from .emitter import Emitter, emitter, get_listeners, proto
from .exceptions import ConfigurationError, EmitterError, InvalidArgument
from .keys import EventKey, ExactKey, Listener, PatternKey, as_event_key

__all__ = [
    "ConfigurationError",
    "Emitter",
    "EmitterError",
    "EmitterSettings",
    "EventKey",
    "ExactKey",
    "InvalidArgument",
    "Listener",
    "PatternKey",
    "as_event_key",
    "configure",
    "emitter",
    "get_listeners",
    "get_settings",
    "proto",
    "reset_settings",
]
