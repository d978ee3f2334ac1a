"""Event keys and listener records stored in an emitter's registry."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

Callback = Callable[..., Any]


@dataclass(frozen=True)
class ExactKey:
    """Matches an event identifier equal to ``name``."""

    name: str

    def matches(self, event_id: str) -> bool:
        return self.name == event_id

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PatternKey:
    """Matches any event identifier the compiled ``pattern`` finds a match in."""

    pattern: "re.Pattern[str]"

    def matches(self, event_id: str) -> bool:
        return self.pattern.search(event_id) is not None

    def __str__(self) -> str:
        return f"/{self.pattern.pattern}/"


EventKey = Union[ExactKey, PatternKey]


def as_event_key(value: Any) -> EventKey:
    """Build the registry key for ``value``.

    Compiled regular expressions become :class:`PatternKey`; any other value is
    keyed by its string form.
    """

    if isinstance(value, (ExactKey, PatternKey)):
        return value
    if isinstance(value, re.Pattern):
        return PatternKey(value)
    return ExactKey(str(value))


@dataclass(frozen=True)
class Listener:
    """A registered callback.

    ``original`` is set when ``callback`` wraps a user callback (one-shot
    listeners); removal by reference compares against it.
    """

    key: EventKey
    callback: Callback
    group: Any = None
    original: Optional[Callback] = None
    once: bool = False

    @property
    def target(self) -> Callback:
        return self.original if self.original is not None else self.callback


__all__ = ["Callback", "EventKey", "ExactKey", "Listener", "PatternKey", "as_event_key"]
