"""
db/connection.py
----------------
Manages the PostgreSQL connection pool used by the logger.
Uses psycopg2's ThreadedConnectionPool so several threads can log
through the same pool at once.

psycopg2 raises "connection pool exhausted" as soon as every connection
is checked out, so checkout is gated by a semaphore: callers beyond
`max_conn` wait (up to `checkout_timeout`) for a connection to come back.

Every statement runs in its own transaction under a `statement_timeout`.
TCP keepalives and `tcp_user_timeout` bound the wait on the client side
when the server or the network stops answering mid-statement.
"""

import threading

import psycopg2
from psycopg2 import extensions, pool

from config import (
    CHECKOUT_TIMEOUT_SECONDS,
    CONNECT_TIMEOUT_SECONDS,
    INSERT_TIMEOUT_SECONDS,
    KEEPALIVES_COUNT,
    KEEPALIVES_IDLE_SECONDS,
    KEEPALIVES_INTERVAL_SECONDS,
    PING_TIMEOUT_SECONDS,
    POOL_MAX_CONN,
    POOL_MIN_CONN,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """
    Thread-safe pool exposing the two operations the logger needs:
    `execute` and `ping`.

    Args:
        dsn: libpq connection string or ``postgresql://`` URL.
        min_conn: Connections opened eagerly (0 keeps construction offline).
        max_conn: Maximum number of connections allowed.
        connect_timeout: Seconds allowed to establish a new connection.
        io_timeout: Seconds sent data may stay unacknowledged before the
            connection is dropped (libpq ``tcp_user_timeout``).
        checkout_timeout: Seconds a caller waits for a free connection.

    Raises:
        psycopg2.Error: If the DSN is malformed or the pool cannot be built.
    """

    def __init__(
        self,
        dsn: str,
        min_conn: int = POOL_MIN_CONN,
        max_conn: int = POOL_MAX_CONN,
        connect_timeout: int = CONNECT_TIMEOUT_SECONDS,
        io_timeout: float = INSERT_TIMEOUT_SECONDS,
        checkout_timeout: float = CHECKOUT_TIMEOUT_SECONDS,
    ):
        try:
            extensions.parse_dsn(dsn)
            self._pool = pool.ThreadedConnectionPool(
                min_conn,
                max_conn,
                dsn,
                connect_timeout=connect_timeout,
                keepalives=1,
                keepalives_idle=KEEPALIVES_IDLE_SECONDS,
                keepalives_interval=KEEPALIVES_INTERVAL_SECONDS,
                keepalives_count=KEEPALIVES_COUNT,
                tcp_user_timeout=int(io_timeout * 1000),
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise
        self._slots = threading.BoundedSemaphore(max_conn)
        self.checkout_timeout = checkout_timeout
        logger.info("Database connection pool initialized successfully.")

    @property
    def closed(self) -> bool:
        return bool(self._pool.closed)

    def get_connection(self, timeout: float | None = None):
        """
        Check a connection out of the pool, waiting for one to be released
        if all of them are in use.

        Raises:
            psycopg2.pool.PoolError: If none is free within the timeout.
        """
        wait = self.checkout_timeout if timeout is None else timeout
        if not self._slots.acquire(timeout=wait):
            raise pool.PoolError(f"no free connection within {wait:g}s")
        try:
            return self._pool.getconn()
        except Exception:
            self._slots.release()
            raise

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.
        Broken connections are discarded instead of being reused.
        """
        try:
            if self._pool.closed:
                conn.close()
            else:
                self._pool.putconn(conn, close=bool(conn.closed))
        finally:
            self._slots.release()

    def execute(self, query, params=None, timeout: float = INSERT_TIMEOUT_SECONDS) -> None:
        """
        Run one statement in its own transaction.

        Args:
            query: SQL string or psycopg2.sql.Composed.
            params: Query parameters, never interpolated into the SQL text.
            timeout: Server-side statement timeout in seconds.

        Raises:
            psycopg2.Error: On connection failure, timeout or SQL error.
        """
        conn = self.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SET LOCAL statement_timeout = %s", (int(timeout * 1000),))
                cur.execute(query, params)
            conn.commit()
        except Exception:
            if not conn.closed:
                conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    def ping(self, timeout: float = PING_TIMEOUT_SECONDS) -> None:
        """Round-trip a trivial query; raises if the database does not answer in time."""
        self.execute("SELECT 1", timeout=timeout)

    def close(self) -> None:
        """Close all connections in the pool. Safe to call more than once."""
        if self._pool.closed:
            return
        self._pool.closeall()
        logger.info("Database connection pool closed.")
