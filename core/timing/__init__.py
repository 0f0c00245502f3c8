"""Pausable stopwatch with slices, and the time sources that drive it."""

from .clock import (
    TimeSource,
    get_default_system_time_getter,
    monotonic_ms,
    perf_counter_ms,
    resolve_time_source,
    set_default_system_time_getter,
    wall_clock_ms,
)
from .stopwatch import ZERO_SLICE, Slice, State, Stopwatch

__all__ = [
    "Slice",
    "State",
    "Stopwatch",
    "TimeSource",
    "ZERO_SLICE",
    "get_default_system_time_getter",
    "monotonic_ms",
    "perf_counter_ms",
    "resolve_time_source",
    "set_default_system_time_getter",
    "wall_clock_ms",
]
