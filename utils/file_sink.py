"""
utils/file_sink.py
------------------
Local rotating log file for FOTA device events.

The sink is a dedicated stdlib logger that does not propagate, backed by
a RotatingFileHandler that gzips retired generations and drops generations
older than a maximum age. Each line is flushed as it is written, and the
handler lock keeps concurrent lines from interleaving.
"""

import gzip
import logging
import os
import shutil
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import (
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_COMPRESS,
    LOG_FILE_MAX_AGE_DAYS,
    LOG_FILE_MAX_MB,
)
from utils.logger import LIBRARY_LOGGER

SINK_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"
SINK_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

_SECONDS_PER_DAY = 24 * 60 * 60


def _gzip_namer(name: str) -> str:
    return name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    """Compress the retired log file into `dest` and remove the original."""
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


class CompressingRotatingFileHandler(RotatingFileHandler):
    """
    Size-based rotation with gzip compression and age-based retention.

    Args:
        filename: Active log file path.
        max_bytes: Size at which the active file is rotated.
        backup_count: Number of retired generations to keep.
        max_age_days: Retired generations older than this are deleted
            after each rollover (0 disables the age check).
        compress: Gzip retired generations (``applogs.log.1.gz``).
    """

    def __init__(
        self,
        filename: str,
        max_bytes: int,
        backup_count: int,
        max_age_days: int = LOG_FILE_MAX_AGE_DAYS,
        compress: bool = LOG_FILE_COMPRESS,
    ):
        super().__init__(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        self.max_age_days = max_age_days
        self.compress = compress
        if compress:
            self.namer = _gzip_namer
            self.rotator = _gzip_rotator

    def doRollover(self) -> None:
        super().doRollover()
        self.purge_expired()

    def purge_expired(self, now: float | None = None) -> list[Path]:
        """
        Delete retired generations whose modification time is past the age limit.

        Returns:
            The paths that were removed.
        """
        if self.max_age_days <= 0:
            return []
        cutoff = (now if now is not None else time.time()) - self.max_age_days * _SECONDS_PER_DAY
        active = Path(self.baseFilename)
        removed = []
        for backup in active.parent.glob(active.name + ".*"):
            try:
                if backup.stat().st_mtime < cutoff:
                    backup.unlink()
                    removed.append(backup)
            except FileNotFoundError:
                continue
        return removed


def open_file_sink(
    path: str,
    max_mb: int = LOG_FILE_MAX_MB,
    backup_count: int = LOG_FILE_BACKUP_COUNT,
    max_age_days: int = LOG_FILE_MAX_AGE_DAYS,
    compress: bool = LOG_FILE_COMPRESS,
) -> logging.Logger:
    """
    Open (or reuse) the rotating sink for a log file.

    Args:
        path: Log file path; missing parent directories are created.
        max_mb: Rotation threshold in megabytes.
        backup_count: Retired generations to keep.
        max_age_days: Maximum age of a retired generation.
        compress: Gzip retired generations.

    Returns:
        A non-propagating logging.Logger writing one line per call.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    path = os.path.abspath(path)
    sink = logging.getLogger(f"{LIBRARY_LOGGER}.sink[{path}]")
    if sink.handlers:
        return sink

    os.makedirs(os.path.dirname(path), exist_ok=True)
    handler = CompressingRotatingFileHandler(
        path,
        max_bytes=max_mb * 1024 * 1024,
        backup_count=backup_count,
        max_age_days=max_age_days,
        compress=compress,
    )
    handler.setFormatter(logging.Formatter(SINK_FORMAT, SINK_DATE_FORMAT))
    sink.addHandler(handler)
    sink.setLevel(logging.DEBUG)
    sink.propagate = False
    return sink
