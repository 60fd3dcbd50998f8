"""
services/dual_sink_writer.py
----------------------------
Write path of the logger: every event goes to the log file first and is
then, best-effort, inserted into PostgreSQL.

Workflow:
    1. Format the human-readable line and append it to the file.
    2. Skip the database when no pool is available.
    3. Normalize and validate the record.
    4. Serialize metadata.
    5. Insert with a bounded timeout.

Anything that goes wrong after step 1 becomes a single diagnostic line in
the file and a WriteOutcome; nothing is raised to the caller.
"""

import logging
from typing import Any, Optional

from models.log_record import LogRecord, ProcessIdentity, WriteOutcome
from repositories.device_log_repo import DeviceLogRepository, serialize_metadata
from services.stack_trace import capture_stack_trace
from services.validator import InvalidRecordError, validate_record

NO_POOL_MESSAGE = "DB logging skipped: No database connection"


def format_event_line(
    log_level: str, device_id: str, file_id: str, status: str, error_details: str = ""
) -> str:
    """Human-readable file line for one event."""
    line = f"[{log_level}] Device: {device_id}, File: {file_id}, Status: {status}"
    if error_details:
        line += f" | {error_details}"
    return line


def _one_line(err: BaseException) -> str:
    return " ".join(str(err).split())


class DualSinkWriter:
    """
    Records events in the file sink and the log table.

    Args:
        sink: Logger returned by `utils.file_sink.open_file_sink`.
        identity: Process identity stamped on every row.
        repo: Repository for the log table, or None for file-only logging.
        caller_depth: Frames between `write` and the code that should appear
            as the source of the event (1 when `write` is called directly,
            2 when called through `DeviceLogger.log`).
    """

    def __init__(
        self,
        sink: logging.Logger,
        identity: ProcessIdentity,
        repo: Optional[DeviceLogRepository] = None,
        caller_depth: int = 1,
    ):
        self.sink = sink
        self.identity = identity
        self.repo = repo
        self.caller_depth = caller_depth

    def write(
        self,
        device_id: str,
        file_id: str,
        log_level: str,
        status: str,
        metadata: Optional[Any] = None,
        err: Optional[BaseException] = None,
    ) -> WriteOutcome:
        """
        Log one event to both sinks.

        Returns:
            The WriteOutcome of the database half; the file line is always written.
        """
        error_details = capture_stack_trace(err, depth=self.caller_depth)
        self._emit(logging.INFO, format_event_line(log_level, device_id, file_id, status, error_details))

        record = LogRecord.for_identity(
            self.identity,
            device_id=device_id,
            file_id=file_id,
            log_level=log_level,
            status=status,
            error_details=error_details,
            metadata=metadata,
        )
        outcome, diagnostic = self._persist(record)
        if diagnostic:
            self._emit(logging.WARNING, diagnostic)
        return outcome

    def _persist(self, record: LogRecord) -> tuple[WriteOutcome, Optional[str]]:
        if self.repo is None or not self.repo.available:
            return WriteOutcome.SKIPPED_NO_POOL, NO_POOL_MESSAGE

        record = record.normalized()
        try:
            validate_record(record)
        except InvalidRecordError as e:
            return WriteOutcome.INVALID_RECORD, str(e)

        try:
            metadata_json = serialize_metadata(record.metadata)
        except (TypeError, ValueError) as e:
            return WriteOutcome.SERIALIZATION_FAILED, f"Failed to serialize metadata: {_one_line(e)}"

        try:
            self.repo.add(record, metadata_json)
        except Exception as e:
            return WriteOutcome.INSERT_FAILED, f"Failed to insert log into DB: {_one_line(e)}"
        return WriteOutcome.PERSISTED, None

    def _emit(self, level: int, message: str) -> None:
        # stacklevel 1 is this method, 2 is write(), the caller sits caller_depth above that.
        self.sink.log(level, message, stacklevel=2 + self.caller_depth)
