"""Performance profiling utilities for leaf-tree operations."""

import time
import functools
from typing import Dict, List, Callable, Optional
from dataclasses import dataclass, field
import statistics
from collections import Counter, defaultdict

@dataclass
class MethodMetrics:
    """Timing statistics for a single tracked operation."""
    call_count: int = 0
    total_time: float = 0.0
    min_time: float = float('inf')
    max_time: float = 0.0
    times: List[float] = field(default_factory=list)

    def add_measurement(self, elapsed: float) -> None:
        """Add a new execution time measurement."""
        self.call_count += 1
        self.total_time += elapsed
        self.min_time = min(self.min_time, elapsed)
        self.max_time = max(self.max_time, elapsed)
        self.times.append(elapsed)

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count > 0 else 0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) if self.times else 0

    def __str__(self) -> str:
        return (f"Calls: {self.call_count}, "
                f"Total: {self.total_time:.6f}s, "
                f"Avg: {self.avg_time:.6f}s, "
                f"Median: {self.median_time:.6f}s")


class PerformanceTracker:
    """
    Central collector for operation timings and structural events
    (rotations, leaf splits, splices) of the weight-balanced trees.

    Tracking is off by default; call `enable()` before a measured run.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        """Singleton accessor."""
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, MethodMetrics] = defaultdict(MethodMetrics)
        self.events: Counter = Counter()
        self.enabled = False

    def add_measurement(self, method_name: str, elapsed: float) -> None:
        if self.enabled:
            self.metrics[method_name].add_measurement(elapsed)

    def count(self, event: str, n: int = 1) -> None:
        """Count a structural event such as 'rotate_left'."""
        if self.enabled:
            self.events[event] += n

    def reset(self) -> None:
        """Clear all measurements and event counters."""
        self.metrics.clear()
        self.events.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self, sort_by: str = 'total_time') -> str:
        """Generate a plain-text report of timings and event counts."""
        if not self.metrics and not self.events:
            return "No performance data collected."

        lines = ["Performance Metrics:"]
        lines.append("-" * 80)
        lines.append(f"{'Method':<40} {'Calls':>8} {'Total (s)':>12} {'Avg (s)':>12} {'Median (s)':>12}")
        lines.append("-" * 80)

        sorted_items = sorted(
            self.metrics.items(),
            key=lambda x: getattr(x[1], sort_by),
            reverse=True
        )

        for method_name, metrics in sorted_items:
            lines.append(f"{method_name:<40} {metrics.call_count:>8} {metrics.total_time:>12.6f} "
                         f"{metrics.avg_time:>12.6f} {metrics.median_time:>12.6f}")

        if self.events:
            lines.append("-" * 80)
            lines.append(f"{'Event':<40} {'Count':>8}")
            for event, n in self.events.most_common():
                lines.append(f"{event:<40} {n:>8}")

        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Decorator to track method execution time.

    Args:
        method: The method to track
        tag: Optional custom tag to use instead of the qualified name

    Returns:
        Decorated method with performance tracking
    """
    def decorator(func):
        method_name = tag or f"{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)

            start_time = time.perf_counter()
            result = func(*args, **kwargs)
            tracker.add_measurement(method_name, time.perf_counter() - start_time)
            return result
        return wrapper

    # Handle both @track_performance and @track_performance(tag="name") forms
    if method is None:
        return decorator
    return decorator(method)
