"""
Logging Setup
loguru sinks shared by the task runner and deployment scripts
"""

import os
import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def setup_logging(level: str = None, log_file: str = None):
    """
    Route logs to stderr, leaving stdout for results

    Args:
        level: Console level (None = LOG_LEVEL, then INFO)
        log_file: Optional DEBUG log file (None = LOG_FILE)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level or os.getenv('LOG_LEVEL', 'INFO')
    )

    log_file = log_file or os.getenv('LOG_FILE')
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
