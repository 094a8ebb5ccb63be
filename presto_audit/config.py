"""Listener configuration.

The engine reads ``etc/event-listener.properties`` and hands the listener its
settings as plain string pairs:

    event-listener.name=presto-audit-log
    event-listener.audit-log-path=/var/log/presto/
    event-listener.audit-log-filename=presto-auditlog.log
    event-listener.audit-log-full-filename=presto-auditlog-full.log

Keys are accepted with or without the ``event-listener.`` prefix.
"""

from __future__ import annotations

from typing import Mapping, Optional

from pydantic import BaseModel

from .errors import ConfigurationError

KEY_PREFIX = "event-listener."

LOG_PATH_KEY = "audit-log-path"
LOG_FILENAME_KEY = "audit-log-filename"
FULL_LOG_FILENAME_KEY = "audit-log-full-filename"


class AuditLogConfig(BaseModel):
    log_path: str
    log_filename: str
    full_log_filename: Optional[str] = None

    model_config = {"frozen": True}


def load_listener_config(values: Mapping[str, str]) -> AuditLogConfig:
    """Build the listener configuration, failing fast on missing required keys."""
    settings = _strip_prefix(values)
    return AuditLogConfig(
        log_path=_require(settings, LOG_PATH_KEY),
        log_filename=_require(settings, LOG_FILENAME_KEY),
        full_log_filename=settings.get(FULL_LOG_FILENAME_KEY) or None,
    )


def _strip_prefix(values: Mapping[str, str]) -> dict[str, str]:
    settings: dict[str, str] = {}
    for key, value in values.items():
        if key.startswith(KEY_PREFIX):
            key = key[len(KEY_PREFIX) :]
        settings[key] = value
    return settings


def _require(settings: Mapping[str, str], key: str) -> str:
    value = settings.get(key)
    if value is None or not value.strip():
        raise ConfigurationError(f"{KEY_PREFIX}{key} is null")
    return value
