"""Custom exceptions raised by listen-up."""


class EmitterError(RuntimeError):
    """Base error for all emitter related exceptions."""


class InvalidArgument(EmitterError, TypeError):
    """Raised when a listener is registered without a usable callback or key."""


class ConfigurationError(EmitterError, ValueError):
    """Raised when configuration values are invalid or missing."""
