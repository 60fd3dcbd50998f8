"""
services/validator.py
---------------------
Checks a normalized LogRecord before it is allowed to reach the database.
"""

from config import DEVICE_ID_LENGTH, FILE_ID_LENGTH, VALID_LOG_LEVELS
from models.log_record import LogRecord


class InvalidRecordError(ValueError):
    """A record broke one of the persistence constraints."""


def validate_record(record: LogRecord) -> None:
    """
    Enforce identifier lengths and the log level enumeration.

    The record is expected to be normalized already (lowercase level).

    Raises:
        InvalidRecordError: Naming the first constraint that failed.
    """
    if len(record.device_id) != DEVICE_ID_LENGTH:
        raise InvalidRecordError(
            f"Invalid log: Device ID must be {DEVICE_ID_LENGTH} characters, "
            f"got {len(record.device_id)}"
        )
    if len(record.file_id) != FILE_ID_LENGTH:
        raise InvalidRecordError(
            f"Invalid log: File ID must be {FILE_ID_LENGTH} characters, "
            f"got {len(record.file_id)}"
        )
    if record.log_level not in VALID_LOG_LEVELS:
        raise InvalidRecordError(
            f"Invalid log: Log level must be one of: "
            f"{', '.join(sorted(VALID_LOG_LEVELS))}, got {record.log_level!r}"
        )
