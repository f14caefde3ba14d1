"""
Performance monitoring utilities.

Records how long loading, reordering and transcript comparison take and
warns about slow operations.
"""

import time
import functools
from typing import Callable, Any, Dict, List, Optional
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SLOW_OPERATION_THRESHOLD = 1.0


class PerformanceMonitor:
    """
    Collects operation durations by operation name.
    """

    def __init__(self):
        self.metrics: Dict[str, List[float]] = {}

    def record(self, operation: str, duration: float):
        """
        Record an operation duration.

        Args:
            operation: Name of the operation
            duration: Duration in seconds
        """
        self.metrics.setdefault(operation, []).append(duration)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """
        Get statistics for an operation.

        Returns:
            Dictionary with min, max, avg, total, count (all zero if unseen)
        """
        durations = self.metrics.get(operation)
        if not durations:
            return {'min': 0, 'max': 0, 'avg': 0, 'total': 0, 'count': 0}

        total = sum(durations)
        return {
            'min': min(durations),
            'max': max(durations),
            'avg': total / len(durations),
            'total': total,
            'count': len(durations)
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        return {operation: self.get_stats(operation) for operation in self.metrics}

    def clear(self):
        """Clear all recorded metrics."""
        self.metrics.clear()

    def log_stats(self, operation: Optional[str] = None):
        """
        Log statistics for one operation, or for all of them.
        """
        operations = [operation] if operation else list(self.metrics)
        for op in operations:
            stats = self.get_stats(op)
            logger.info(
                f"{op}: count={stats['count']} avg={stats['avg']:.4f}s "
                f"min={stats['min']:.4f}s max={stats['max']:.4f}s total={stats['total']:.4f}s"
            )


# Global performance monitor instance
_global_monitor = PerformanceMonitor()


def get_monitor() -> PerformanceMonitor:
    """Get the global performance monitor instance."""
    return _global_monitor


def _record(operation: str, duration: float):
    _global_monitor.record(operation, duration)
    if duration > SLOW_OPERATION_THRESHOLD:
        logger.warning(
            f"Operation '{operation}' took {duration:.2f}s "
            f"(threshold: {SLOW_OPERATION_THRESHOLD}s)"
        )


def monitor_performance(operation_name: Optional[str] = None):
    """
    Decorator recording the duration of every call.

    Args:
        operation_name: Name for the operation (defaults to function name)

    Example:
        @monitor_performance("reorder")
        def reorder(records):
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
                _record(op_name, time.perf_counter() - start_time)

        return wrapper
    return decorator


class measure_time:
    """
    Context manager recording the duration of a block.

    Example:
        with measure_time("render_page"):
            render(page)
    """

    def __init__(self, operation_name: str):
        self.name = operation_name
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        _record(self.name, self.duration)
        return False
