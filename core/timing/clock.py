"""Time sources and the process-wide default used by new stopwatches.

A time source is any zero-argument callable returning a number that never
decreases between calls.  The default is read when a
:class:`~core.timing.stopwatch.Stopwatch` is constructed; changing it later does
not affect existing instances.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from sdk.registry import REGISTRY

TimeSource = Callable[[], float]

_LOG = logging.getLogger(__name__)

NS_PER_MS = 1_000_000


def wall_clock_ms() -> int:
    """Current wall-clock time in whole milliseconds (platform default)."""

    return int(time.time() * 1000)


def monotonic_ms() -> float:
    return time.monotonic_ns() / NS_PER_MS


def perf_counter_ms() -> float:
    return time.perf_counter_ns() / NS_PER_MS


REGISTRY.register("wall_ms", "core.timing.clock:wall_clock_ms")
REGISTRY.register("monotonic_ms", "core.timing.clock:monotonic_ms")
REGISTRY.register("perf_ms", "core.timing.clock:perf_counter_ms")


# ---------- Process-wide default ----------

_default_time_getter: TimeSource = wall_clock_ms


def get_default_system_time_getter() -> TimeSource:
    return _default_time_getter


def set_default_system_time_getter(time_source: Optional[TimeSource] = None) -> None:
    """
    Set the time source used by stopwatches constructed from now on.
    Calling without an argument restores :func:`wall_clock_ms`.
    """
    global _default_time_getter
    _default_time_getter = wall_clock_ms if time_source is None else time_source
    _LOG.debug("default time source set to %r", _default_time_getter)


# ---------- Name resolution ----------

def resolve_time_source(name: str) -> TimeSource:
    """
    Resolve a built-in clock name (``wall_ms``, ``monotonic_ms``, ``perf_ms``)
    or a ``package.module:attr`` import path to a time source.
    """
    if name not in REGISTRY and ":" not in name:
        raise ValueError(
            f"Unknown clock '{name}'. Use one of {sorted(REGISTRY.keys())} "
            "or a 'module:attr' import path."
        )
    source = REGISTRY.resolve(name)
    if not callable(source):
        raise TypeError(f"Clock '{name}' does not resolve to a callable: {source!r}")
    return source


def use_configured_time_source(cfg=None) -> TimeSource:
    """Install the clock named by the app config as the process-wide default."""
    if cfg is None:
        from sdk.config import SDK_CONFIG as cfg
    source = resolve_time_source(cfg.clock)
    set_default_system_time_getter(source)
    return source


__all__ = [
    "TimeSource",
    "get_default_system_time_getter",
    "monotonic_ms",
    "perf_counter_ms",
    "resolve_time_source",
    "set_default_system_time_getter",
    "use_configured_time_source",
    "wall_clock_ms",
]
