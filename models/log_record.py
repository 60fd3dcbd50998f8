"""
models/log_record.py
--------------------
Domain model for a FOTA device log event, the identity of the process
that writes it, and the outcome of a write.
"""

import enum
from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class ProcessIdentity:
    """
    Fields fixed when the logger starts and stamped on every row.

    Attributes:
        process_id: OS process id, as a string.
        process_name: Logical component writing the logs.
        created_by: User or service that started the logger.
        schema: Database schema holding the log table.
    """
    process_id: str
    process_name: str
    created_by: str
    schema: str


@dataclass
class LogRecord:
    """
    One FOTA device log event, as it is persisted.

    Attributes:
        process_id: See ProcessIdentity.
        process_name: See ProcessIdentity.
        device_id: Device identifier (16 characters).
        file_id: Firmware file identifier, e.g. a SHA-256 hex digest (64 characters).
        log_level: 'info' | 'warn' | 'error' | 'debug'.
        status: Free-text status, lowercased.
        created_by: See ProcessIdentity.
        error_details: Error message and caller location, or "".
        metadata: Optional structured document; None is stored as {}.

    `createdat` is assigned by the database and is not part of the record.
    """
    process_id: str
    process_name: str
    device_id: str
    file_id: str
    log_level: str
    status: str
    created_by: str
    error_details: str = ""
    metadata: Optional[Any] = None

    @classmethod
    def for_identity(cls, identity: ProcessIdentity, **fields) -> "LogRecord":
        """Build a record stamped with the process identity."""
        return cls(
            process_id=identity.process_id,
            process_name=identity.process_name,
            created_by=identity.created_by,
            **fields,
        )

    def normalized(self) -> "LogRecord":
        """Copy with log_level and status lowercased."""
        return replace(self, log_level=self.log_level.lower(), status=self.status.lower())


class WriteOutcome(enum.Enum):
    """What happened to a record after its line reached the log file."""
    PERSISTED = "persisted"
    SKIPPED_NO_POOL = "skipped_no_pool"
    INVALID_RECORD = "invalid_record"
    SERIALIZATION_FAILED = "serialization_failed"
    INSERT_FAILED = "insert_failed"

    @property
    def persisted(self) -> bool:
        return self is WriteOutcome.PERSISTED
