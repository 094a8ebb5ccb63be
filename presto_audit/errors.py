"""Exceptions raised by the audit log listener."""


class AuditLogError(Exception):
    """Base class for audit log errors."""


class ConfigurationError(AuditLogError, ValueError):
    """A required listener setting is missing or blank."""


class SerializationError(AuditLogError):
    """The full audit log cannot represent part of a query event."""
