"""
Logger factory: console plus a rotating file under the data directory.
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from config import DATA_DIR, LOG_BACKUP_COUNT, LOG_DIRNAME, LOG_FILENAME, LOG_MAX_BYTES

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Creates a logger instance that writes to console AND a file.
    Falls back to console only when the log directory is not writable.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    logger.addHandler(console_handler)

    log_dir = DATA_DIR / LOG_DIRNAME
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILENAME, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
        )
    except OSError as exc:
        logger.warning("File logging disabled (%s)", exc)
    else:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        logger.addHandler(file_handler)

    return logger
