"""
main.py
-------
Demo runner for the FOTA device logger.

Reads its connection settings from the environment (or a .env file),
starts the logger, writes one event per log level and closes it again.
Check the log file and the `fotadevicelogs` table afterwards.

    python main.py
"""

import os

from dotenv import load_dotenv

from exceptions import InitError
from services.device_logger import init_logger
from utils.logger import get_logger, set_level

logger = get_logger(__name__)

DEMO_FILE_ID = "00064467DD629E36C838C3E94F20A490A96B4DB084FA300C3DD64D5D45949DE9"


def load_settings() -> dict:
    """Collect demo settings from the environment."""
    load_dotenv()
    return {
        "db_url": os.getenv("FOTALOG_DATABASE_URL", "postgresql://localhost:5432/logger"),
        "process_name": os.getenv("FOTALOG_PROCESS_NAME", "fotalog-demo"),
        "created_by": os.getenv("FOTALOG_CREATED_BY", "demo"),
        "log_file_path": os.getenv("FOTALOG_FILE_PATH", "app.log"),
        "schema": os.getenv("FOTALOG_SCHEMA", "fotalogs"),
    }


def main() -> int:
    """Write a handful of sample events."""
    set_level(os.getenv("FOTALOG_LOG_LEVEL", "INFO"))
    settings = load_settings()

    try:
        device_log = init_logger(**settings)
    except InitError as e:
        logger.error(f"Logger initialization failed: {e}")
        return 1

    with device_log:
        device_log.log("0101FCED8C5C2AE2", DEMO_FILE_ID, "INFO", "System is running smoothly",
                       {"testmeta": "testvalue"})
        device_log.log("0102474A083CA0EE", DEMO_FILE_ID, "WARN", "Memory usage is high",
                       None, RuntimeError("memory usage at 90%"))
        device_log.log("0101FCED8C5C2AE2", DEMO_FILE_ID, "ERROR", "Database connection failed",
                       None, TimeoutError("connection timeout"))
        device_log.log("0102474A083CA0EE", DEMO_FILE_ID, "DEBUG", "System crash detected",
                       {"testmeta": "testvalue"}, RuntimeError("kernel panic"))
        # Dropped before reaching the database: device id too short.
        device_log.log("short", DEMO_FILE_ID, "INFO", "never persisted")

    logger.info(f"Demo completed. Check {settings['log_file_path']} and the database for logs.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
