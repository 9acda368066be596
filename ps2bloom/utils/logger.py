"""
Logging utilities for ps2bloom.

Library modules log through ``logging.getLogger(__name__)``; configuring the
``ps2bloom`` package logger once routes all of them to the same handlers.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "ps2bloom"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str = PACKAGE_LOGGER,
    log_file: Optional[Path] = None,
    level: int = logging.INFO,
    console: bool = True
) -> logging.Logger:
    """
    Configure a logger for a conversion run.

    Calling it again replaces the previous handlers, so a batch run that
    reloads its configuration does not print every message twice.

    Args:
        name: Logger name (default: the ps2bloom package logger)
        log_file: Optional path to a log file; its folder is created
        level: Logging level (default: INFO)
        console: Whether to log to stdout (default: True)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        logger.addHandler(_handler(logging.StreamHandler(sys.stdout), level))

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding='utf-8'), level))

    return logger
