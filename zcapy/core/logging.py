"""Logging utilities for zcapy modules."""

import logging

PACKAGE_LOGGERS = (
    'zcapy',
    'zcapy.api',
    'zcapy.transport',
    'zcapy.crypto',
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    The logger propagates to the root logger, so it works with
    basicConfig(). When the application has not configured logging yet,
    the level defaults to WARNING.

    Args:
        name: Logger name (typically 'zcapy.<area>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for zcapy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = True
