"""Structured JSON logging helpers for listen-up."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging import Logger
from typing import Any, Dict

_LOGGER_NAME = "listen_up"

# Emitter context accepted through ``extra``
EMITTER_FIELDS = ("event", "key", "group", "count")


def emitter_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Collect the emitter fields attached to ``record``."""

    return {name: getattr(record, name) for name in EMITTER_FIELDS if hasattr(record, name)}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record; emitter fields are nested under ``emitter``."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = emitter_context(record)
        if context:
            payload["emitter"] = context
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # Groups may be any comparable value, not just JSON types
        return json.dumps(payload, ensure_ascii=False, default=repr)


def _level_from_env() -> int:
    level = os.environ.get("LISTEN_UP_LOG_LEVEL") or os.environ.get("LOG_LEVEL", "INFO")
    return getattr(logging, level.upper(), logging.INFO)


def get_logger(name: str | None = None) -> Logger:
    """Return a ``listen_up`` logger writing JSON to stderr.

    The level comes from ``LISTEN_UP_LOG_LEVEL``, then ``LOG_LEVEL``; INFO otherwise.
    """

    logger_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
    return logger
