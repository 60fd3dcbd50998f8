"""
db/init_db.py
-------------
Creates the log schema and the `fotadevicelogs` table if they do not
already exist. Safe to run on every start-up (uses IF NOT EXISTS).
"""

from psycopg2 import sql

from config import BOOTSTRAP_TIMEOUT_SECONDS, DEFAULT_SCHEMA, LOG_TABLE
from db.connection import ConnectionPool
from exceptions import SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)

CREATE_SCHEMA_SQL = sql.SQL("CREATE SCHEMA IF NOT EXISTS {schema};")

# createdat is assigned by the server in epoch milliseconds. Two rows with the
# same process/device/file inside one millisecond collide on the primary key.
CREATE_TABLE_SQL = sql.SQL("""
CREATE TABLE IF NOT EXISTS {table} (
    processid       TEXT NOT NULL,
    processname     TEXT NOT NULL,
    deviceid        TEXT NOT NULL,
    fileid          TEXT NOT NULL,
    loglevel        TEXT NOT NULL,
    status          TEXT NOT NULL,
    errormessage    TEXT,
    metadata        JSONB DEFAULT '{{}}',
    createdby       TEXT NOT NULL,
    createdat       BIGINT DEFAULT CAST(extract(epoch FROM NOW()) * 1000 AS BIGINT) NOT NULL,
    PRIMARY KEY (processid, deviceid, fileid, processname, createdat)
);
""")


def resolve_schema(schema: str | None) -> str:
    """
    Pick the schema the log table lives in.

    Returns:
        `schema` verbatim when one is given, otherwise the default ("public").
    """
    if schema is None or not schema.strip():
        return DEFAULT_SCHEMA
    return schema


def log_table(schema: str) -> sql.Identifier:
    """Qualified identifier of the log table inside `schema`."""
    return sql.Identifier(schema, LOG_TABLE)


def create_tables(
    pool: ConnectionPool, schema: str, timeout: float = BOOTSTRAP_TIMEOUT_SECONDS
) -> None:
    """
    Create the schema, then the log table.

    Args:
        pool: Open connection pool.
        schema: Resolved schema name.
        timeout: Statement timeout in seconds for each DDL statement.

    Raises:
        SchemaError: If either statement fails.
    """
    try:
        pool.execute(CREATE_SCHEMA_SQL.format(schema=sql.Identifier(schema)), timeout=timeout)
    except Exception as e:
        logger.error(f"Failed to create schema {schema!r}: {e}")
        raise SchemaError(f"failed to create schema: {e}", schema=schema) from e

    try:
        pool.execute(CREATE_TABLE_SQL.format(table=log_table(schema)), timeout=timeout)
    except Exception as e:
        logger.error(f"Failed to create log table in {schema!r}: {e}")
        raise SchemaError(f"failed to create log table: {e}", schema=schema) from e

    logger.info(f"Log table {schema}.{LOG_TABLE} is ready.")
