"""Application logging: one shared ``oraclio`` logger for every component."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_LOGGER_NAME = "oraclio"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# httpx logs every provider and CRM request at INFO
CHATTY_LIBRARIES = ("httpx", "httpcore")

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def quiet_libraries(level: int):
    """Keep HTTP client request lines out of the log unless running at DEBUG."""
    library_level = level if level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def setup_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger writing to the console and, optionally, a rotating file.

    Safe to call repeatedly: the console handler is attached once, and a
    file handler is added the first time a given ``log_file`` is requested,
    even when the logger was already created console-only at import time.

    Args:
        name: Logger name
        log_level: Log level name; unknown names fall back to INFO
        log_file: Optional log file path, parent directories are created

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level = _resolve_level(log_level)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        if not _has_file_handler(logger, path):
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


app_logger: Optional[logging.Logger] = None


def init_app_logger(settings) -> logging.Logger:
    """Configure the shared application logger from settings."""
    global app_logger

    app_logger = setup_logger(APP_LOGGER_NAME, log_level=settings.log_level, log_file=settings.log_file)
    quiet_libraries(app_logger.level)
    return app_logger


def get_app_logger() -> logging.Logger:
    # Console-only until init_app_logger runs
    if app_logger is None:
        return setup_logger(APP_LOGGER_NAME)
    return app_logger
