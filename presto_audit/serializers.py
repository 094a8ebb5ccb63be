"""Full audit log: the whole completed-query event as one JSON document.

Each field group of the event has its own encoder in ``FIELD_GROUP_ENCODERS``.
An encoder takes the event and returns the top-level keys it owns, so groups
can be added or changed without touching each other's output.

Usage:
    @register_encoder("routines")
    def _encode_routines(event):
        return {"routines": [...]}
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable

from .errors import SerializationError
from .models import QueryCompletedEvent

Encoder = Callable[[QueryCompletedEvent], dict[str, Any]]

FIELD_GROUP_ENCODERS: dict[str, Encoder] = {}


def register_encoder(group: str) -> Callable[[Encoder], Encoder]:
    """Register ``fn`` as the encoder for one field group."""

    def decorator(fn: Encoder) -> Encoder:
        if group in FIELD_GROUP_ENCODERS:
            raise ValueError(f"Encoder already registered for field group: {group}")
        FIELD_GROUP_ENCODERS[group] = fn
        return fn

    return decorator


def serialize_full_log(event: QueryCompletedEvent) -> str:
    """Serialize ``event`` to single-line JSON. Raises SerializationError."""
    document: dict[str, Any] = {}
    for group, encode in FIELD_GROUP_ENCODERS.items():
        try:
            document.update(encode(event))
        except (TypeError, ValueError, RecursionError) as exc:
            raise SerializationError(f"Cannot encode {group} of query {event.metadata.query_id}: {exc}") from exc

    try:
        return json.dumps(document, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"Cannot encode query {event.metadata.query_id}: {exc}") from exc


def _decode_embedded_json(text: str) -> Any:
    # The engine hands some nested structures over already serialized.
    return json.loads(text)


def _iso(instant: datetime) -> str:
    return instant.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Field Group Encoders
# =============================================================================


@register_encoder("metadata")
def _encode_metadata(event: QueryCompletedEvent) -> dict[str, Any]:
    metadata = event.metadata
    return {
        "metadata": {
            "queryId": metadata.query_id,
            "transactionId": metadata.transaction_id,
            "query": metadata.query,
            "uri": metadata.uri,
            "queryState": metadata.query_state,
            "plan": metadata.plan,
        }
    }


@register_encoder("statistics")
def _encode_statistics(event: QueryCompletedEvent) -> dict[str, Any]:
    stats = event.statistics
    return {
        "statistics": {
            "cpuTimeMs": stats.cpu_time_ms,
            "wallTimeMs": stats.wall_time_ms,
            "queuedTimeMs": stats.queued_time_ms,
            "analysisTimeMs": stats.analysis_time_ms,
            "distributedPlanningTimeMs": stats.distributed_planning_time_ms,
            "peakMemoryBytes": stats.peak_memory_bytes,
            "totalBytes": stats.total_bytes,
            "totalRows": stats.total_rows,
            "outputBytes": stats.output_bytes,
            "outputRows": stats.output_rows,
            "completedSplits": stats.completed_splits,
            "complete": stats.complete,
            "operatorSummaries": [_decode_embedded_json(s) for s in stats.operator_summaries],
        }
    }


@register_encoder("context")
def _encode_context(event: QueryCompletedEvent) -> dict[str, Any]:
    return {"context": event.context.model_dump(mode="json", by_alias=True)}


@register_encoder("ioMetadata")
def _encode_io_metadata(event: QueryCompletedEvent) -> dict[str, Any]:
    io = event.io_metadata
    inputs = [
        {
            "catalogName": i.catalog_name,
            "schema": i.schema_name,
            "table": i.table,
            "columns": list(i.columns),
            "connectorInfo": i.connector_info,
        }
        for i in io.inputs
    ]
    output = None
    if io.output is not None:
        output = {
            "catalogName": io.output.catalog_name,
            "schema": io.output.schema_name,
            "table": io.output.table,
        }
    return {"ioMetadata": {"inputs": inputs, "output": output}}


@register_encoder("failureInfo")
def _encode_failure_info(event: QueryCompletedEvent) -> dict[str, Any]:
    failure = event.failure_info
    if failure is None:
        return {}
    return {
        "failureInfo": {
            "errorCode": {
                "code": failure.error_code.code,
                "name": failure.error_code.name,
                "type": failure.error_code.type,
            },
            "failureType": failure.failure_type,
            "failureMessage": failure.failure_message,
            "failureTask": failure.failure_task,
            "failureHost": failure.failure_host,
            "failures": _decode_embedded_json(failure.failures_json),
        }
    }


@register_encoder("timestamps")
def _encode_timestamps(event: QueryCompletedEvent) -> dict[str, Any]:
    return {
        "createTime": _iso(event.create_time),
        "executionStartTime": _iso(event.execution_start_time),
        "endTime": _iso(event.end_time),
    }
