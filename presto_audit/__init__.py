"""Audit log event listener for the Presto query engine.

Completed queries are appended as newline-delimited JSON to a summary log and,
optionally, to a full log holding the whole event.
"""

from .config import AuditLogConfig, load_listener_config
from .errors import AuditLogError, ConfigurationError, SerializationError
from .factory import AuditLogListenerFactory
from .listener import AuditLogListener
from .models import AuditRecord, QueryCompletedEvent, QueryCreatedEvent
from .record_builder import build_audit_record
from .serializers import serialize_full_log

__all__ = [
    "AuditLogConfig",
    "AuditLogError",
    "AuditLogListener",
    "AuditLogListenerFactory",
    "AuditRecord",
    "ConfigurationError",
    "QueryCompletedEvent",
    "QueryCreatedEvent",
    "SerializationError",
    "build_audit_record",
    "load_listener_config",
    "serialize_full_log",
]
