"""
services/device_logger.py
-------------------------
Public entry point of the library.

`init_logger()` opens the pool, checks the database is reachable,
provisions the log table and opens the rotating file. The returned
DeviceLogger is meant to live as long as the process:

    device_log = init_logger(db_url, "fota-dispatcher", "ops", "logs/", "fotalogs")
    device_log.log(device_id, file_id, "INFO", "download started", {"attempt": 1})
    ...
    device_log.close()
"""

import os
from typing import Any, Optional

import psycopg2

from config import INSERT_TIMEOUT_SECONDS, LOG_FILE_NAME, LOG_FILE_SUFFIX
from db.connection import ConnectionPool
from db.init_db import create_tables, resolve_schema
from exceptions import ConnectivityError, InitError, LogFileError, PoolConnectionError
from models.log_record import ProcessIdentity
from repositories.device_log_repo import DeviceLogRepository
from services.dual_sink_writer import DualSinkWriter
from utils.file_sink import open_file_sink
from utils.logger import get_logger

logger = get_logger(__name__)


def resolve_log_file_path(path: str) -> str:
    """
    Work out which file the events go to.

    - "" → `applogs.log` in the current working directory.
    - A path without the `.log` suffix is a directory → `<path>/applogs.log`.
    - Anything else is used as is.

    Raises:
        LogFileError: If the working directory cannot be determined.
    """
    if not path:
        try:
            cwd = os.getcwd()
        except OSError as e:
            raise LogFileError(f"failed to get current directory: {e}") from e
        return os.path.join(cwd, LOG_FILE_NAME)
    if not path.endswith(LOG_FILE_SUFFIX):
        return os.path.join(path, LOG_FILE_NAME)
    return path


class DeviceLogger:
    """
    Process-scoped logger handle.

    Owns one connection pool (which may be None for file-only logging)
    and one file sink. `log` never raises; `close` releases the pool.
    """

    def __init__(
        self,
        identity: ProcessIdentity,
        sink,
        pool: Optional[ConnectionPool] = None,
        insert_timeout: float = INSERT_TIMEOUT_SECONDS,
    ):
        self.identity = identity
        self.sink = sink
        self._pool = pool
        repo = DeviceLogRepository(pool, identity.schema, insert_timeout) if pool is not None else None
        self._writer = DualSinkWriter(sink, identity, repo, caller_depth=2)

    def log(
        self,
        device_id: str,
        file_id: str,
        log_level: str,
        status: str,
        metadata: Optional[Any] = None,
        err: Optional[BaseException] = None,
    ) -> None:
        """
        Write a log event to the file and, best-effort, to the database.

        Args:
            device_id: Device identifier, exactly 16 characters.
            file_id: Firmware file identifier, exactly 64 characters.
            log_level: "info", "warn", "error" or "debug" (any casing).
            status: Status message; stored lowercased.
            metadata: Optional JSON-serializable document.
            err: Optional error; its message and the caller's location
                are appended to the line and stored in `errormessage`.
        """
        self._writer.write(device_id, file_id, log_level, status, metadata, err)

    def close(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        if self._pool is not None:
            self._pool.close()

    def __enter__(self) -> "DeviceLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def init_logger(
    db_url: str,
    process_name: str,
    created_by: str,
    log_file_path: str = "",
    schema: Optional[str] = None,
    insert_timeout: float = INSERT_TIMEOUT_SECONDS,
) -> DeviceLogger:
    """
    Start the logger.

    Args:
        db_url: PostgreSQL connection string.
        process_name: Name of the component writing logs.
        created_by: User or service starting the logger.
        log_file_path: Log file, or a directory to put `applogs.log` in.
        schema: Schema for the log table; defaults to "public".
        insert_timeout: Seconds allowed for each insert.

    Returns:
        A ready DeviceLogger.

    Raises:
        LogFileError: The log file location is unusable.
        PoolConnectionError: The pool could not be built (e.g. malformed DSN).
        ConnectivityError: The database did not answer the ping.
        SchemaError: The schema or table could not be created.
    """
    effective_schema = resolve_schema(schema)
    path = resolve_log_file_path(log_file_path)

    try:
        pool = ConnectionPool(db_url, io_timeout=insert_timeout)
    except psycopg2.Error as e:
        raise PoolConnectionError(f"database connection failed: {e}") from e

    try:
        try:
            pool.ping()
        except psycopg2.Error as e:
            logger.error(f"Database ping failed: {e}")
            raise ConnectivityError(f"database ping failed: {e}") from e

        create_tables(pool, effective_schema)

        try:
            sink = open_file_sink(path)
        except OSError as e:
            logger.error(f"Failed to open log file {path}: {e}")
            raise LogFileError(f"failed to open log file: {e}", path=path) from e
    except InitError:
        pool.close()
        raise

    identity = ProcessIdentity(
        process_id=str(os.getpid()),
        process_name=process_name,
        created_by=created_by,
        schema=effective_schema,
    )
    logger.info(f"Device logger started for {process_name} (pid {identity.process_id}), file {path}")
    return DeviceLogger(identity, sink, pool, insert_timeout)
