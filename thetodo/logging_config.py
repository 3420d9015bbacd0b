"""Logging setup for The Todo client.

Textual owns the terminal while the client runs, so all log output goes to
a rotating file, by default ``~/.thetodo/logs/thetodo.log``. Modules get
their logger through get_logger(__name__).
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FILENAME = "thetodo.log"
DEFAULT_LOG_FILE = Path.home() / ".thetodo" / "logs" / LOG_FILENAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

# Libraries that log every request or statement at INFO/DEBUG
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "sqlalchemy.engine")


def log_file_for(data_dir: Path) -> Path:
    """Location of the log file inside a data directory."""
    return data_dir / "logs" / LOG_FILENAME


def resolve_log_level(log_level: Optional[str] = None) -> int:
    """Turn a level name into a logging level.

    Args:
        log_level: Level name; THETODO_LOG_LEVEL is used when None

    Returns:
        Numeric level, INFO for a missing or unknown name
    """
    name = (log_level or os.getenv("THETODO_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> Path:
    """Send all application logging to a rotating file.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.

    Args:
        log_level: Level name (DEBUG, INFO, ...); see resolve_log_level()
        log_file: Target file, DEFAULT_LOG_FILE when None

    Returns:
        Path of the log file in use
    """
    level = resolve_log_level(log_level)
    log_file = log_file or DEFAULT_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    for old_handler in list(root_logger.handlers):
        root_logger.removeHandler(old_handler)
        if isinstance(old_handler, logging.FileHandler):
            old_handler.close()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        f"Logging initialized: level={logging.getLevelName(level)}, file={log_file}"
    )
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a module (pass __name__)."""
    return logging.getLogger(name)
