"""Utility modules for classbench."""

from .benchmark import (
    timed,
    Timer,
    TimingCollector,
    TimingRecord,
    get_global_collector,
    clear_timings,
)

__all__ = [
    'timed',
    'Timer',
    'TimingCollector',
    'TimingRecord',
    'get_global_collector',
    'clear_timings',
]
