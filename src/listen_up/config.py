"""Configuration for where emitters keep their listener registry."""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

DEFAULT_EVENT_DATA_PROPERTY = "_event_listener_data"


class EmitterSettings(BaseModel):
    """Settings shared by every emitter in the process."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    event_data_property: str = Field(
        default=DEFAULT_EVENT_DATA_PROPERTY,
        description="Attribute name used to store the listener registry on a host object",
    )

    @field_validator("event_data_property")
    @classmethod
    def validate_private_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError("event_data_property must be a valid attribute name")
        if not value.startswith("_"):
            raise ValueError("event_data_property must start with an underscore")
        return value


_SETTINGS = EmitterSettings()


def get_settings() -> EmitterSettings:
    """Return the active settings."""

    return _SETTINGS


def build_settings_from_dict(raw: Dict[str, Any]) -> EmitterSettings:
    """Utility helper to build :class:`EmitterSettings` from a plain dictionary."""

    try:
        return EmitterSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def configure(**overrides: Any) -> EmitterSettings:
    """Validate ``overrides`` on top of the active settings and make them current.

    Registries already stored under a previous attribute name are not moved.
    """

    global _SETTINGS
    _SETTINGS = build_settings_from_dict({**_SETTINGS.model_dump(), **overrides})
    return _SETTINGS


def reset_settings() -> EmitterSettings:
    global _SETTINGS
    _SETTINGS = EmitterSettings()
    return _SETTINGS


__all__ = [
    "DEFAULT_EVENT_DATA_PROPERTY",
    "EmitterSettings",
    "build_settings_from_dict",
    "configure",
    "get_settings",
    "reset_settings",
]
