"""Shared fixtures for audit log listener tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from presto_audit.models import QueryCompletedEvent, QueryCreatedEvent

CREATE_TIME = datetime(2026, 3, 1, 12, 34, 56, 789000, tzinfo=timezone.utc)
EXECUTION_START_TIME = datetime(2026, 3, 1, 12, 34, 57, 1000, tzinfo=timezone.utc)
END_TIME = datetime(2026, 3, 1, 12, 35, 10, 250000, tzinfo=timezone.utc)

FAILURES_JSON = (
    '[{"type":"com.facebook.presto.spi.PrestoException","message":"Table not found",'
    '"cause":{"type":"java.io.IOException","message":"no such table"}}]'
)


def completed_event_data(**overrides) -> dict:
    """Wire-format (camelCase) completed-query event; top-level keys can be overridden."""
    data = {
        "metadata": {
            "queryId": "Q1",
            "transactionId": "tx-1",
            "query": "SELECT * FROM orders WHERE price < 10 AND qty > 2",
            "uri": "http://coordinator:8080/v1/query/Q1",
            "queryState": "FINISHED",
        },
        "statistics": {
            "cpuTimeMs": 1500,
            "wallTimeMs": 2250,
            "queuedTimeMs": 5,
            "analysisTimeMs": 12,
            "peakMemoryBytes": 2048,
            "totalBytes": 4096,
            "totalRows": 100,
            "outputBytes": 512,
            "outputRows": 10,
            "completedSplits": 7,
            "operatorSummaries": ['{"operatorType":"TableScanOperator","inputPositions":100}'],
        },
        "context": {
            "user": "alice",
            "remoteClientAddress": "10.0.0.5",
            "userAgent": "presto-cli",
            "source": "presto-cli",
            "catalog": "hive",
            "schema": "sales",
            "sessionProperties": {"query_max_run_time": "1h"},
            "serverAddress": "coordinator",
            "serverVersion": "0.215",
            "environment": "production",
        },
        "ioMetadata": {
            "inputs": [
                {"catalogName": "hive", "schema": "sales", "table": "orders", "columns": ["price", "qty"]}
            ],
        },
        "createTime": CREATE_TIME,
        "executionStartTime": EXECUTION_START_TIME,
        "endTime": END_TIME,
    }
    data.update(overrides)
    return data


def failure_info_data(**overrides) -> dict:
    data = {
        "errorCode": {"code": 46, "name": "TABLE_NOT_FOUND", "type": "USER_ERROR"},
        "failureType": "com.facebook.presto.spi.PrestoException",
        "failureMessage": "Table hive.sales.missing does not exist",
        "failuresJson": FAILURES_JSON,
    }
    data.update(overrides)
    return data


@pytest.fixture
def completed_event() -> QueryCompletedEvent:
    return QueryCompletedEvent.model_validate(completed_event_data())


@pytest.fixture
def failed_event() -> QueryCompletedEvent:
    metadata = dict(completed_event_data()["metadata"], queryState="FAILED")
    return QueryCompletedEvent.model_validate(
        completed_event_data(metadata=metadata, failureInfo=failure_info_data())
    )


@pytest.fixture
def created_event() -> QueryCreatedEvent:
    data = completed_event_data()
    return QueryCreatedEvent.model_validate(
        {"createTime": data["createTime"], "context": data["context"], "metadata": data["metadata"]}
    )
