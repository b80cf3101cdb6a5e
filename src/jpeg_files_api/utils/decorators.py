"""Decorator utilities for cross-cutting concerns."""
import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar, cast

# Setup logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: Optional[F] = None, *, operation: Optional[str] = None):
    """Decorator to log how long a store call took.

    Failures are logged with their duration and re-raised unchanged.

    Args:
        func: The function to decorate
        operation: Name to log instead of the function name

    Returns:
        Decorated function that logs execution time
    """
    def decorator(fn: F) -> F:
        name = operation or fn.__name__

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(f"{name} failed after {duration_ms:.1f}ms: {str(e)}")
                raise
            duration_ms = (time.time() - start_time) * 1000
            logger.debug(f"{name} completed in {duration_ms:.1f}ms")
            return result
        return cast(F, wrapper)

    if func is not None:
        return decorator(func)
    return decorator
