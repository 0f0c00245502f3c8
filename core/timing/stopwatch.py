"""Stopwatch with pausing and contiguous slices (split times).

Readings are computed lazily from a handful of markers and the injected time
source; nothing runs in the background.  Each operation reads the time source
at most once, and never while the stopwatch is stopped: a stopped stopwatch
answers every query from the instant it was frozen at.

Durations are reported in whatever unit the time source returns (the default
wall clock returns milliseconds).

Not thread-safe.  Callers sharing an instance across threads must lock around
it themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.timing.clock import TimeSource, get_default_system_time_getter

_LOG = logging.getLogger(__name__)


class State(str, Enum):
    """Possible states of a :class:`Stopwatch`."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


@dataclass(frozen=True)
class Slice:
    """One recorded (or pending) slice, in stopwatch time."""

    start_time: float
    end_time: float
    duration: float

    @classmethod
    def between(cls, start_time: float, end_time: float) -> "Slice":
        return cls(start_time, end_time, end_time - start_time)


ZERO_SLICE = Slice(0, 0, 0)


class Stopwatch:
    """
    Records running time between start/stop calls, optionally split into slices.

    - ``start()`` starts or resumes; ``stop()`` pauses and freezes every reading
    - time spent stopped is excluded from the duration
    - ``slice()`` ends the pending slice and opens the next one where it ended
    - ``reset()`` returns to IDLE and forgets everything

    ``time_source`` defaults to the process-wide default *at construction
    time*; see :func:`core.timing.clock.set_default_system_time_getter`.
    """

    def __init__(self, time_source: Optional[TimeSource] = None) -> None:
        if time_source is None:
            time_source = get_default_system_time_getter()
        self._now: TimeSource = time_source
        self._start_time: Optional[float] = None
        self._stop_time: Optional[float] = None
        self._stop_accumulator: float = 0
        self._pending_slice_start: Optional[float] = None
        self._completed_slices: List[Slice] = []

    @property
    def time_source(self) -> TimeSource:
        return self._now

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    def get_state(self) -> State:
        if self._start_time is None:
            return State.IDLE
        if self._stop_time is None:
            return State.RUNNING
        return State.STOPPED

    def is_idle(self) -> bool:
        return self.get_state() is State.IDLE

    def is_running(self) -> bool:
        return self.get_state() is State.RUNNING

    def is_stopped(self) -> bool:
        return self.get_state() is State.STOPPED

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------
    def get_duration(self) -> float:
        """Total running time since the last reset; 0 while IDLE."""
        return self._duration_at(None)

    def get_pending_slice(self) -> Slice:
        """The slice in progress as of now (zero slice while IDLE)."""
        return self._pending_slice_at(None)

    def get_completed_slices(self) -> List[Slice]:
        return list(self._completed_slices)

    def get_completed_and_pending_slices(self) -> List[Slice]:
        return [*self._completed_slices, self.get_pending_slice()]

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def start(self, force_reset: bool = False) -> None:
        """
        Start, or resume after a stop.  No-op if already running, unless
        ``force_reset`` is set, in which case everything is reset first and a
        fresh run begins now.
        """
        if force_reset:
            self.reset()

        if self._stop_time is not None:
            now = self._now()
            self._stop_accumulator += now - self._stop_time
            self._stop_time = None
            _LOG.debug("stopwatch resumed (stopped total=%s)", self._stop_accumulator)
        elif self._start_time is None:
            self._start_time = self._now()
            self._pending_slice_start = 0
            _LOG.debug("stopwatch started at %s", self._start_time)

    def stop(self, record_pending_slice: bool = False) -> float:
        """
        Stop (pause) and return the duration.  Returns 0 and does nothing while
        IDLE.  Stopping again keeps the first stop instant, but still records
        a (zero-length) slice when ``record_pending_slice`` is set.
        """
        if self._start_time is None:
            return 0

        now = self._effective_now()
        if record_pending_slice:
            self._record_pending_slice(self._duration_at(now))
        self._stop_time = now
        _LOG.debug("stopwatch stopped at %s", now)
        return self._duration_at(now)

    def reset(self) -> None:
        self._start_time = None
        self._stop_time = None
        self._pending_slice_start = None
        self._stop_accumulator = 0
        self._completed_slices = []
        _LOG.debug("stopwatch reset")

    def slice(self) -> Slice:
        """
        Record the pending slice and open the next one where it ended.

        While STOPPED the slice ends at the stop instant.  While IDLE this is a
        no-op returning the zero slice.  Never changes the state.
        """
        if self._pending_slice_start is None:
            return ZERO_SLICE
        return self._record_pending_slice(self.get_duration())

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    def __enter__(self) -> "Stopwatch":
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()

    def __repr__(self) -> str:
        return (
            f"Stopwatch(state={self.get_state().value}, "
            f"slices={len(self._completed_slices)})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _effective_now(self) -> float:
        # Frozen stop instant while STOPPED, otherwise one fresh read.
        if self._stop_time is not None:
            return self._stop_time
        return self._now()

    def _duration_at(self, now: Optional[float]) -> float:
        if self._start_time is None:
            return 0
        if now is None:
            now = self._effective_now()
        return now - self._start_time - self._stop_accumulator

    def _pending_slice_at(self, end_time: Optional[float]) -> Slice:
        if self._pending_slice_start is None:
            return ZERO_SLICE
        if end_time is None:
            end_time = self.get_duration()
        return Slice.between(self._pending_slice_start, end_time)

    def _record_pending_slice(self, end_time: float) -> Slice:
        recorded = self._pending_slice_at(end_time)
        self._completed_slices.append(recorded)
        self._pending_slice_start = recorded.end_time
        _LOG.debug("slice recorded %s", recorded)
        return recorded


__all__ = ["Slice", "State", "Stopwatch", "ZERO_SLICE"]
