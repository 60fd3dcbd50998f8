"""
config.py
---------
Central configuration module. Exposes the fixed limits and defaults
used by the logger as typed constants.

The logger itself never reads the environment: connection string,
process name, creator, file path and schema are passed to `init_logger()`.
"""


# ── Database ──────────────────────────────────────────────
DEFAULT_SCHEMA: str = "public"
LOG_TABLE: str = "fotadevicelogs"

POOL_MIN_CONN: int = 0
POOL_MAX_CONN: int = 5

CONNECT_TIMEOUT_SECONDS: int = 5
PING_TIMEOUT_SECONDS: float = 5.0
BOOTSTRAP_TIMEOUT_SECONDS: float = 5.0
INSERT_TIMEOUT_SECONDS: float = 30.0
CHECKOUT_TIMEOUT_SECONDS: float = 10.0

# Client-side limits for an open connection whose server stops answering.
KEEPALIVES_IDLE_SECONDS: int = 10
KEEPALIVES_INTERVAL_SECONDS: int = 5
KEEPALIVES_COUNT: int = 3

# ── Log file ──────────────────────────────────────────────
LOG_FILE_NAME: str = "applogs.log"
LOG_FILE_SUFFIX: str = ".log"

LOG_FILE_MAX_MB: int = 10
LOG_FILE_BACKUP_COUNT: int = 5
LOG_FILE_MAX_AGE_DAYS: int = 30
LOG_FILE_COMPRESS: bool = True

# ── Record validation ─────────────────────────────────────
DEVICE_ID_LENGTH: int = 16
FILE_ID_LENGTH: int = 64
VALID_LOG_LEVELS: frozenset[str] = frozenset({"info", "warn", "error", "debug"})
