"""Pydantic models for query lifecycle events and the flattened audit record."""

import json
from typing import Optional

from pydantic import AwareDatetime, BaseModel, Field, NonNegativeInt

# Events arrive with the engine's camelCase names; both spellings construct them.
_EVENT_CONFIG = {"populate_by_name": True, "frozen": True}


# =============================================================================
# Inbound Event Models (read-only, owned by the query engine)
# =============================================================================


class QueryMetadata(BaseModel):
    query_id: str = Field(alias="queryId")
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    query: str
    uri: str
    query_state: str = Field(alias="queryState")
    plan: Optional[str] = None

    model_config = _EVENT_CONFIG


class QueryStatistics(BaseModel):
    """Resource usage of a finished query. Times are milliseconds."""

    cpu_time_ms: NonNegativeInt = Field(alias="cpuTimeMs")
    wall_time_ms: NonNegativeInt = Field(alias="wallTimeMs")
    queued_time_ms: NonNegativeInt = Field(alias="queuedTimeMs")
    analysis_time_ms: Optional[NonNegativeInt] = Field(default=None, alias="analysisTimeMs")
    distributed_planning_time_ms: Optional[NonNegativeInt] = Field(
        default=None, alias="distributedPlanningTimeMs"
    )
    peak_memory_bytes: NonNegativeInt = Field(alias="peakMemoryBytes")
    total_bytes: NonNegativeInt = Field(alias="totalBytes")
    total_rows: NonNegativeInt = Field(alias="totalRows")
    output_bytes: NonNegativeInt = Field(default=0, alias="outputBytes")
    output_rows: NonNegativeInt = Field(default=0, alias="outputRows")
    completed_splits: NonNegativeInt = Field(alias="completedSplits")
    complete: bool = True
    operator_summaries: list[str] = Field(default_factory=list, alias="operatorSummaries")  # JSON strings

    model_config = _EVENT_CONFIG


class QueryContext(BaseModel):
    user: str
    principal: Optional[str] = None
    remote_client_address: Optional[str] = Field(default=None, alias="remoteClientAddress")
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    client_info: Optional[str] = Field(default=None, alias="clientInfo")
    source: Optional[str] = None
    catalog: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    session_properties: dict[str, str] = Field(default_factory=dict, alias="sessionProperties")
    server_address: str = Field(default="", alias="serverAddress")
    server_version: str = Field(default="", alias="serverVersion")
    environment: str = ""

    model_config = _EVENT_CONFIG


class QueryInputMetadata(BaseModel):
    catalog_name: str = Field(alias="catalogName")
    schema_name: str = Field(alias="schema")
    table: str
    columns: list[str] = Field(default_factory=list)
    connector_info: Optional[dict] = Field(default=None, alias="connectorInfo")

    model_config = _EVENT_CONFIG


class QueryOutputMetadata(BaseModel):
    catalog_name: str = Field(alias="catalogName")
    schema_name: str = Field(alias="schema")
    table: str

    model_config = _EVENT_CONFIG


class QueryIOMetadata(BaseModel):
    inputs: list[QueryInputMetadata] = Field(default_factory=list)
    output: Optional[QueryOutputMetadata] = None

    model_config = _EVENT_CONFIG


class ErrorCode(BaseModel):
    code: int
    name: str
    type: str = "INTERNAL_ERROR"

    model_config = _EVENT_CONFIG


class QueryFailureInfo(BaseModel):
    error_code: ErrorCode = Field(alias="errorCode")
    failure_type: Optional[str] = Field(default=None, alias="failureType")
    failure_message: Optional[str] = Field(default=None, alias="failureMessage")
    failure_task: Optional[str] = Field(default=None, alias="failureTask")
    failure_host: Optional[str] = Field(default=None, alias="failureHost")
    failures_json: str = Field(alias="failuresJson")  # pre-serialized failure chain

    model_config = _EVENT_CONFIG


class QueryCreatedEvent(BaseModel):
    create_time: AwareDatetime = Field(alias="createTime")
    context: QueryContext
    metadata: QueryMetadata

    model_config = _EVENT_CONFIG


class QueryCompletedEvent(BaseModel):
    metadata: QueryMetadata
    statistics: QueryStatistics
    context: QueryContext
    io_metadata: QueryIOMetadata = Field(default_factory=QueryIOMetadata, alias="ioMetadata")
    failure_info: Optional[QueryFailureInfo] = Field(default=None, alias="failureInfo")
    create_time: AwareDatetime = Field(alias="createTime")
    execution_start_time: AwareDatetime = Field(alias="executionStartTime")
    end_time: AwareDatetime = Field(alias="endTime")

    model_config = _EVENT_CONFIG


# =============================================================================
# Audit Record (summary log line)
# =============================================================================


class AuditRecord(BaseModel):
    """Flat summary of one completed query, written as one line of the audit log.

    Field order is the order of keys in the written JSON. Failure fields stay
    ``None`` when the query did not fail and are left out of the output.
    """

    event_type: str = Field(default="QueryCompletedEvent", alias="eventType")
    query_id: str = Field(alias="queryId")
    query: str
    uri: str
    state: str

    cpu_time: float = Field(alias="cpuTime")
    wall_time: float = Field(alias="wallTime")
    queued_time: float = Field(alias="queuedTime")
    peak_memory_bytes: int = Field(alias="peakMemoryBytes")
    total_bytes: int = Field(alias="totalBytes")
    total_rows: int = Field(alias="totalRows")
    completed_splits: int = Field(alias="completedSplits")

    create_time: str = Field(alias="createTime")
    execution_start_time: str = Field(alias="executionStartTime")
    end_time: str = Field(alias="endTime")
    create_timestamp: float = Field(alias="createTimestamp")
    execution_start_timestamp: float = Field(alias="executionStartTimestamp")
    end_timestamp: float = Field(alias="endTimestamp")

    error_code: Optional[int] = Field(default=None, alias="errorCode")
    error_name: Optional[str] = Field(default=None, alias="errorName")
    failure_type: Optional[str] = Field(default=None, alias="failureType")
    failure_message: Optional[str] = Field(default=None, alias="failureMessage")
    failures_json: Optional[str] = Field(default=None, alias="failuresJson")

    remote_client_address: str = Field(default="", alias="remoteClientAddress")
    client_user: str = Field(alias="clientUser")
    user_agent: str = Field(default="", alias="userAgent")
    source: str = ""

    model_config = {"populate_by_name": True, "frozen": True}

    def to_json(self) -> str:
        """Single-line JSON with unset fields omitted and no ASCII/HTML escaping."""
        return json.dumps(
            self.model_dump(by_alias=True, exclude_none=True),
            ensure_ascii=False,
            separators=(",", ":"),
        )
