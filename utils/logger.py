"""
utils/logger.py
---------------
Logging for the library's own diagnostics (pool lifecycle, schema
bootstrap, startup failures). FOTA device events never go through
here; they are written by the file sink in `utils/file_sink.py`.

Everything hangs off the ``fotalog`` logger so a host application's
root logger configuration is left alone.

All modules should use `get_logger(__name__)` to obtain a logger instance.
"""

import logging
import sys

LIBRARY_LOGGER = "fotalog"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _init_logging() -> None:
    """Attach a stdout handler to the library logger once."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    base = logging.getLogger(LIBRARY_LOGGER)
    base.setLevel(logging.INFO)
    base.addHandler(handler)
    base.propagate = False
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger under the library namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger named ``fotalog.<name>``.
    """
    _init_logging()
    return logging.getLogger(f"{LIBRARY_LOGGER}.{name}")


def set_level(level: int | str) -> None:
    """Change the verbosity of the library diagnostics (e.g. "DEBUG")."""
    _init_logging()
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(LIBRARY_LOGGER).setLevel(level)
