"""
Wall-clock timing utilities for classbench.

Training phases are bracketed with a Timer; every measurement is kept in a
TimingCollector so repeated runs (e.g. cross-validation folds) can be
summarized afterwards.
"""

import time
import functools
from typing import Callable, Dict, Any, Optional
from dataclasses import dataclass, field
from collections import defaultdict


@dataclass
class TimingRecord:
    """
    One timed operation.

    Attributes:
        name: Name of the timed operation
        duration: Execution time in seconds
        timestamp: When the measurement finished
        metadata: Additional details, e.g. number of training samples
    """
    name: str
    duration: float
    timestamp: float = field(default_factory=time.time)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds."""
        return self.duration * 1000.0

    def __str__(self) -> str:
        meta_str = ", ".join(f"{k}={v}" for k, v in self.metadata.items())
        return f"{self.name}: {self.duration_ms:.0f} [ms] ({meta_str})"


class TimingCollector:
    """
    Collects timing records grouped by name.
    """

    def __init__(self):
        self.records: Dict[str, list] = defaultdict(list)

    def add_record(self, record: TimingRecord) -> None:
        """Add a timing record."""
        self.records[record.name].append(record)

    def get_statistics(self, name: str) -> Dict[str, float]:
        """
        Get statistics for one operation name.

        Returns:
            Dictionary with count, min, max, mean and total seconds,
            or an empty dictionary for an unknown name
        """
        if name not in self.records:
            return {}

        durations = [r.duration for r in self.records[name]]
        return {
            'count': len(durations),
            'min': min(durations),
            'max': max(durations),
            'mean': sum(durations) / len(durations),
            'total': sum(durations)
        }

    def get_all_statistics(self) -> Dict[str, Dict[str, float]]:
        """Get statistics for all operation names."""
        return {name: self.get_statistics(name) for name in self.records.keys()}

    def report(self) -> str:
        """
        Format all statistics as text, slowest operation first.
        """
        lines = ["=" * 70, "Timing Report", "=" * 70, ""]

        stats = self.get_all_statistics()

        if not stats:
            lines.append("No timings recorded.")
            return "\n".join(lines)

        sorted_stats = sorted(stats.items(), key=lambda x: x[1].get('total', 0), reverse=True)

        for name, stat in sorted_stats:
            lines.append(f"{name}:")
            lines.append(f"  Runs:  {stat['count']}")
            lines.append(f"  Total: {stat['total'] * 1000:.0f} [ms]")
            lines.append(f"  Mean:  {stat['mean'] * 1000:.0f} [ms]")
            lines.append(f"  Min:   {stat['min'] * 1000:.0f} [ms]")
            lines.append(f"  Max:   {stat['max'] * 1000:.0f} [ms]")
            lines.append("")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all timing records."""
        self.records.clear()


_global_collector = TimingCollector()


def get_global_collector() -> TimingCollector:
    """Get the global timing collector."""
    return _global_collector


def clear_timings() -> None:
    """Clear all global timings."""
    _global_collector.clear()


class Timer:
    """
    Context manager for timing a block of code.

    Example:
        with Timer("train:NaiveBayes", samples=120) as t:
            classifier.train_batch(train_set)
        print(f"Training took {t.duration_ms:.0f} [ms]")
    """

    def __init__(self, name: str, collector: Optional[TimingCollector] = None, **metadata):
        """
        Args:
            name: Name for this measurement
            collector: Optional TimingCollector (defaults to global)
            **metadata: Additional details to store with the record
        """
        self.name = name
        self.collector = collector or _global_collector
        self.metadata = metadata
        self.start_time: Optional[float] = None
        self.duration: Optional[float] = None

    @property
    def duration_ms(self) -> Optional[float]:
        """Measured duration in milliseconds, None while running."""
        return self.duration * 1000.0 if self.duration is not None else None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time
        self.collector.add_record(TimingRecord(
            name=self.name,
            duration=self.duration,
            metadata=self.metadata
        ))
        return False


def timed(name: Optional[str] = None, collector: Optional[TimingCollector] = None, **metadata):
    """
    Decorator recording the execution time of every call.

    Args:
        name: Record name (defaults to the function name)
        collector: Optional TimingCollector (defaults to global)
        **metadata: Additional details to store with each record
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with Timer(name or func.__name__, collector=collector, **metadata):
                return func(*args, **kwargs)
        return wrapper
    return decorator
