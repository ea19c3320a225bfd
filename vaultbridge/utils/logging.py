"""Centralized logging configuration."""

import logging
import sys
from typing import Optional


def setup_logging(
    level: str = "INFO", format_style: str = "standard", log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the bridge.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_style: 'standard' for terminals, 'json' for log shippers
        log_file: Optional file path to write logs

    Returns:
        Root logger
    """
    if format_style == "json":
        fmt = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    # stdout is reserved for rendered properties
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )

    return logging.getLogger()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Usage:
        from vaultbridge.utils.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Resolved overlay")
    """
    return logging.getLogger(name)
