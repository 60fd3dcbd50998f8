"""
exceptions.py
-------------
Error hierarchy raised while bringing the logger up.

Only initialization raises. Once a DeviceLogger exists, write-time
failures are recorded in the log file and never propagate.
"""


class FotaLoggerError(Exception):
    """Base exception for all logger errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InitError(FotaLoggerError):
    """The logger could not be started."""


class LogFileError(InitError):
    """The log file location could not be resolved."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class PoolConnectionError(InitError):
    """The connection pool could not be constructed."""


class ConnectivityError(InitError):
    """The database did not answer the startup ping."""


class SchemaError(InitError):
    """The schema or the log table could not be provisioned."""

    def __init__(self, message: str, schema: str | None = None):
        self.schema = schema
        super().__init__(message)
