# docsite/core/logs.py
import sys

from loguru import logger

from .config import Settings


def configure_logging(settings: Settings) -> None:
    """Route loguru output to stderr and, if configured, a rotating log file."""
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)
    if settings.LOG_FILE:
        logger.add(settings.LOG_FILE, level=settings.LOG_LEVEL, rotation="10 MB", retention="10 days")
        logger.info("Logging to {}", settings.LOG_FILE)
