"""
repositories/device_log_repo.py
-------------------------------
Data access layer for FOTA device logs.
All SQL touching the `fotadevicelogs` table at write time lives here.
"""

import json

from psycopg2 import sql

from config import INSERT_TIMEOUT_SECONDS
from db.connection import ConnectionPool
from db.init_db import log_table
from models.log_record import LogRecord

INSERT_SQL = sql.SQL("""
    INSERT INTO {table} (processid, processname, deviceid, fileid, loglevel, status, createdby, errormessage, metadata)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s::jsonb);
""")


def serialize_metadata(metadata) -> str:
    """
    Encode metadata as a JSON document.

    None becomes "{}" so the column never holds a JSON null.

    Raises:
        TypeError, ValueError: If the metadata is not JSON serializable.
    """
    if metadata is None:
        return "{}"
    return json.dumps(metadata)


class DeviceLogRepository:
    """
    Writes log rows into `<schema>.fotadevicelogs`.

    The schema comes from logger initialization and is only ever
    composed in as a quoted identifier; all values are bound parameters.
    """

    def __init__(self, pool: ConnectionPool, schema: str, timeout: float = INSERT_TIMEOUT_SECONDS):
        self.pool = pool
        self.schema = schema
        self.timeout = timeout
        self._insert = INSERT_SQL.format(table=log_table(schema))

    @property
    def available(self) -> bool:
        return self.pool is not None and not self.pool.closed

    def add(self, record: LogRecord, metadata_json: str) -> None:
        """
        Insert one row.

        Args:
            record: Normalized, validated record.
            metadata_json: Output of `serialize_metadata(record.metadata)`.

        Raises:
            psycopg2.Error: On connection failure, timeout or constraint violation.
        """
        self.pool.execute(
            self._insert,
            (
                record.process_id, record.process_name, record.device_id,
                record.file_id, record.log_level, record.status,
                record.created_by, record.error_details, metadata_json,
            ),
            timeout=self.timeout,
        )
