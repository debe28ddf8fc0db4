"""Loggers for lsystem3d modules: console output plus one rotating file per logger."""

import logging
from logging.handlers import RotatingFileHandler

from lsystem3d.utilities.env import Configuration

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _log_file_handler(name: str) -> RotatingFileHandler:
    directory = Configuration.log_directory()
    directory.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        directory / f"{name.replace('.', '_') or 'root'}.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, attaching handlers the first time."""

    level = Configuration.log_level()
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in (logging.StreamHandler(), _log_file_handler(name)):
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.propagate = False
    return logger
