"""Event listener that appends query audit records to log files.

Every completed query produces one line in the summary log and, when a full
log file name is configured, one line in the full log. The two writes fail
independently and never raise into the engine's event dispatch: a failed
write is reported on this module's logger together with the payload that
could not be persisted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .config import AuditLogConfig, load_listener_config
from .errors import SerializationError
from .models import QueryCompletedEvent, QueryCreatedEvent
from .record_builder import build_audit_record
from .serializers import serialize_full_log

logger = logging.getLogger(__name__)


class AuditLogListener:
    """Receives query lifecycle events from the engine. Safe to call from many threads."""

    def __init__(self, config: Mapping[str, str]) -> None:
        self.config: AuditLogConfig = load_listener_config(config)

    @property
    def summary_log_file(self) -> Path:
        return Path(self.config.log_path) / self.config.log_filename

    @property
    def full_log_file(self) -> Optional[Path]:
        if self.config.full_log_filename is None:
            return None
        return Path(self.config.log_path) / self.config.full_log_filename

    def query_created(self, event: QueryCreatedEvent) -> None:
        logger.debug("QUERY SQL : [ %s ]", event.metadata.query)

    def query_completed(self, event: QueryCompletedEvent) -> None:
        """Write the summary line, then the full line. Never raises."""
        record_json = ""

        # Summary log
        try:
            record = build_audit_record(event)
            record_json = record.to_json()
            with open(self.summary_log_file, "a", encoding="utf-8", newline="") as f:
                f.write(record_json + os.linesep)
            logger.debug("Audit record written for query %s", event.metadata.query_id)
        except Exception as exc:
            logger.error("Error writing event log to file. ErrorMessage: %s", exc)
            logger.error("EventLog write failed: %s", record_json or event.metadata.query_id)

        # Full log
        full_log_file = self.full_log_file
        if full_log_file is None:
            return
        full_json = ""
        try:
            full_json = serialize_full_log(event)
            with open(full_log_file, "a", encoding="utf-8", newline="") as f:
                f.write(full_json + os.linesep)
            logger.debug("Full audit log written for query %s", event.metadata.query_id)
        except SerializationError as exc:
            logger.error("Error serializing full event log for query %s: %s", event.metadata.query_id, exc)
            logger.error(
                "Full event log not written for query %s; summary record was: %s",
                event.metadata.query_id,
                record_json or "<not built>",
            )
        except Exception as exc:
            logger.error("Error writing full event log to file. ErrorMessage: %s", exc)
            logger.error("EventLog write failed: %s", full_json or record_json or event.metadata.query_id)
