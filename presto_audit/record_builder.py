"""Flattens a completed-query event into an AuditRecord.

Timestamps are written twice: once as local wall-clock text
(``yyyyMMddHHmmss.SSS``) for people reading the log, and once as float epoch
seconds for machines.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

from .models import AuditRecord, QueryCompletedEvent

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_timestamp(instant: datetime, tz: tzinfo | None = None) -> str:
    """Render an instant as ``yyyyMMddHHmmss.SSS`` in ``tz`` (default: local zone)."""
    local = instant.astimezone(tz)
    return local.strftime("%Y%m%d%H%M%S") + f".{local.microsecond // 1000:03d}"


def epoch_millis(instant: datetime) -> int:
    return (instant - _EPOCH) // timedelta(milliseconds=1)


def epoch_seconds(instant: datetime) -> float:
    """Epoch milliseconds divided by 1000.0; sub-millisecond precision is dropped."""
    return epoch_millis(instant) / 1000.0


def build_audit_record(event: QueryCompletedEvent, tz: tzinfo | None = None) -> AuditRecord:
    """Map one completed-query event to its summary record. No side effects."""
    metadata = event.metadata
    stats = event.statistics
    context = event.context

    fields = {
        "query_id": metadata.query_id,
        "query": metadata.query,
        "uri": metadata.uri,
        "state": metadata.query_state,
        "cpu_time": stats.cpu_time_ms / 1000.0,
        "wall_time": stats.wall_time_ms / 1000.0,
        "queued_time": stats.queued_time_ms / 1000.0,
        "peak_memory_bytes": stats.peak_memory_bytes,
        "total_bytes": stats.total_bytes,
        "total_rows": stats.total_rows,
        "completed_splits": stats.completed_splits,
        "create_time": format_timestamp(event.create_time, tz),
        "execution_start_time": format_timestamp(event.execution_start_time, tz),
        "end_time": format_timestamp(event.end_time, tz),
        "create_timestamp": epoch_seconds(event.create_time),
        "execution_start_timestamp": epoch_seconds(event.execution_start_time),
        "end_timestamp": epoch_seconds(event.end_time),
        "client_user": context.user,
    }

    failure = event.failure_info
    if failure is not None:
        fields["error_code"] = failure.error_code.code
        fields["error_name"] = failure.error_code.name
        if failure.failure_type is not None:
            fields["failure_type"] = failure.failure_type
        if failure.failure_message is not None:
            fields["failure_message"] = failure.failure_message
        fields["failures_json"] = failure.failures_json

    fields["remote_client_address"] = _or_empty(context.remote_client_address)
    fields["user_agent"] = _or_empty(context.user_agent)
    fields["source"] = _or_empty(context.source)

    return AuditRecord(**fields)


def _or_empty(value: str | None) -> str:
    if value is None:
        return ""
    return value
