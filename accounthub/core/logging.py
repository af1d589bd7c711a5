"""
Logging setup.

Installs console (and optional rotating file) handlers on the package logger.
Modules log through ``logging.getLogger(__name__)``.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from accounthub.core.config import Settings

LOGGER_NAME = "accounthub"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Configure the ``accounthub`` logger from settings.

    Safe to call more than once: handlers are only attached the first time.

    Args:
        settings: Application settings (LOG_LEVEL, LOG_FILE)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if logger.handlers:
        return logger  # already configured

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
