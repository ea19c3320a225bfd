"""Reusable decorators for the bridge."""

import functools
import time
from typing import Callable

from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)


def log_time(func: Callable) -> Callable:
    """
    Log execution time of a function.

    Usage:
        @log_time
        def load():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        logger.info(f"{func.__qualname__} completed in {elapsed:.3f}s")
        return result

    return wrapper


def log_call(func: Callable) -> Callable:
    """Log at debug level when a function is called and returns."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f"Calling {func.__qualname__}")
        result = func(*args, **kwargs)
        logger.debug(f"{func.__qualname__} returned")
        return result

    return wrapper
