"""
Logging helpers for timing road generation work.
"""

import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def log_performance(
    log_level: int = logging.INFO,
    threshold_ms: Optional[float] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log function execution time.

    Args:
        log_level: Logging level to use
        threshold_ms: Only log if execution time exceeds this threshold (milliseconds)

    Returns:
        Decorated function with performance logging

    Example:
        @log_performance(threshold_ms=100)
        def build_all_roads():
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            func_name = f"{func.__module__}.{func.__qualname__}"
            start_time = time.perf_counter()

            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000

                if threshold_ms is None or duration_ms >= threshold_ms:
                    logger.log(
                        log_level,
                        f"{func_name} executed in {duration_ms:.2f}ms",
                        extra={"duration_ms": duration_ms, "function": func_name},
                    )

        return wrapper

    return decorator


class PerformanceTimer:
    """
    Context manager for timing a block of code.

    Usage:
        with PerformanceTimer("connect roads") as timer:
            network.connect_many(requests)
        print(timer.duration_ms)
    """

    def __init__(
        self,
        operation_name: str,
        log_level: int = logging.INFO,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """
        Initialize PerformanceTimer.

        Args:
            operation_name: Name of the operation being timed
            log_level: Logging level to use
            logger_instance: Logger to write to (defaults to this module's logger)
        """
        self.operation_name = operation_name
        self.log_level = log_level
        self.logger = logger_instance or logger
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self) -> "PerformanceTimer":
        """Start timing."""
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Stop timing and log the duration."""
        if self.start_time is None:
            return

        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            self.logger.log(
                self.log_level,
                f"{self.operation_name} completed in {self.duration_ms:.2f}ms",
                extra={"duration_ms": self.duration_ms, "operation": self.operation_name},
            )
        else:
            self.logger.error(
                f"{self.operation_name} failed after {self.duration_ms:.2f}ms: {exc_val}",
                extra={"duration_ms": self.duration_ms, "operation": self.operation_name},
            )
