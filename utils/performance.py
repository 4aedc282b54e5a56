"""
Performance monitoring utilities.

Times parse, analysis and query operations and logs the slow ones.
"""

import time
import functools
from collections import deque
from typing import Callable, Any, Deque, Dict, Optional
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SLOW_OPERATION_THRESHOLD = 1.0

# Durations kept per operation; older samples are dropped
MAX_SAMPLES = 1000


class PerformanceMonitor:
    """
    Collects operation durations keyed by operation name.

    Only the most recent max_samples durations of each operation are kept,
    so statistics describe recent calls.
    """

    def __init__(self, max_samples: int = MAX_SAMPLES):
        self.max_samples = max_samples
        self.metrics: Dict[str, Deque[float]] = {}

    def record(self, operation: str, duration: float):
        """
        Record an operation duration.

        Args:
            operation: Name of the operation
            duration: Duration in seconds
        """
        self.metrics.setdefault(operation, deque(maxlen=self.max_samples)).append(duration)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """
        Get statistics for an operation.

        Args:
            operation: Name of the operation

        Returns:
            Dictionary with count, total, avg, min and max (all zero when unseen)
        """
        durations = self.metrics.get(operation)
        if not durations:
            return {'count': 0, 'total': 0, 'avg': 0, 'min': 0, 'max': 0}

        total = sum(durations)
        return {
            'count': len(durations),
            'total': total,
            'avg': total / len(durations),
            'min': min(durations),
            'max': max(durations),
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        return {operation: self.get_stats(operation) for operation in self.metrics}

    def clear(self):
        """Clear all recorded metrics."""
        self.metrics.clear()


# Process-wide monitor shared by all sessions
_global_monitor = PerformanceMonitor()


def get_monitor() -> PerformanceMonitor:
    """Get the global performance monitor instance."""
    return _global_monitor


def monitor_performance(operation_name: Optional[str] = None,
                        threshold: float = SLOW_OPERATION_THRESHOLD):
    """
    Decorator that times a function and records it in the global monitor.

    Args:
        operation_name: Name for the operation (defaults to function name)
        threshold: Seconds after which a warning is logged

    Example:
        @monitor_performance("csv_parse")
        def parse(self, text):
            ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start_time
                _global_monitor.record(op_name, duration)
                logger.debug("Operation '%s' took %.4fs", op_name, duration)
                if duration > threshold:
                    logger.warning(
                        f"Operation '{op_name}' took {duration:.2f}s "
                        f"(threshold: {threshold}s)"
                    )

        return wrapper
    return decorator
