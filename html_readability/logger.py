"""
Package-wide logging for html_readability.

One "html_readability" logger owns the handlers; each pipeline stage logs
through its own child logger so records show where they came from.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "html_readability",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach stderr (and optionally file) handlers to the package logger.

    Calling it again only changes the level of the logger and of the
    handlers it already has, so CLI flags like --verbose can raise or
    lower verbosity after import.

    Args:
        name: Logger to configure
        level: Threshold for the logger and its handlers
        log_file: Also write records to this file

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Readable documents may be written to stdout
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Logger for one pipeline stage, e.g. "html_readability.cleaner"."""
    return logging.getLogger(f"html_readability.{module_name}")
