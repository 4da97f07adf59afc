"""Performance tracking utilities."""

import time
import logging
import functools
import psutil

logger = logging.getLogger(__name__)


def track_performance(func):
    """
    Decorator to track function performance.

    Logs execution time and resident memory delta for the decorated function.

    Args:
        func: The function to be decorated

    Returns:
        Wrapped function
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        start_memory = psutil.Process().memory_info().rss / 1024 / 1024  # MB

        try:
            return func(*args, **kwargs)
        finally:
            execution_time = time.time() - start_time
            memory_used = psutil.Process().memory_info().rss / 1024 / 1024 - start_memory

            logger.info(
                f"Performance: {func.__name__} - "
                f"Time: {execution_time:.2f}s, "
                f"Memory: {memory_used:.2f}MB"
            )

    return wrapper
