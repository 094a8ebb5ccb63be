"""Factory the engine uses to create the listener by name.

Selected in ``etc/event-listener.properties`` with
``event-listener.name=presto-audit-log``.
"""

from __future__ import annotations

from typing import Mapping

from .listener import AuditLogListener

LISTENER_NAME = "presto-audit-log"


class AuditLogListenerFactory:
    @property
    def name(self) -> str:
        return LISTENER_NAME

    def create(self, config: Mapping[str, str]) -> AuditLogListener:
        return AuditLogListener(config)
