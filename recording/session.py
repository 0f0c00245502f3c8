"""Run a stopwatch while logging every operation to a session's events file."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.paths import Paths, get_paths
from core.events import Event, EventKind, SessionMeta, event_dump
from core.timing.clock import TimeSource
from core.timing.stopwatch import Slice, Stopwatch

from .event_writer import JsonlWriter, iter_jsonl

ISO = "%Y%m%dT%H%M%SZ"

_LOG = logging.getLogger(__name__)


class StopwatchSession:
    """
    Proxy a :class:`Stopwatch` and append one event per operation.

    With ``record=False`` nothing is written and the session is just the
    stopwatch.  The log is for inspection only; sessions are never restored
    from it.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        time_source: Optional[TimeSource] = None,
        record: bool = True,
        clock_name: Optional[str] = None,
        paths: Optional[Paths] = None,
    ) -> None:
        self.created_ts = datetime.now(timezone.utc)
        self.name = name or self.created_ts.strftime(ISO)
        self.stopwatch = Stopwatch(time_source)
        self.clock_name = clock_name

        self.writer: Optional[JsonlWriter] = None
        self.meta_path: Optional[Path] = None
        if record:
            paths = paths or get_paths()
            paths.ensure_all()
            self.meta_path = paths.session_meta_path(self.name)
            self.writer = JsonlWriter(paths.session_events_path(self.name), flush_every=1)
            meta = SessionMeta(name=self.name, clock=clock_name)
            self._emit("meta", event_dump(meta))
            self._write_meta("created")

    # ------------------------------------------------------------------
    # Stopwatch operations
    # ------------------------------------------------------------------
    def start(self, force_reset: bool = False) -> None:
        self.stopwatch.start(force_reset)
        self._emit("start", {"force_reset": force_reset})
        self._write_state_meta()

    def stop(self, record_pending_slice: bool = False) -> float:
        recorded_before = len(self.stopwatch.get_completed_slices())
        duration = self.stopwatch.stop(record_pending_slice)
        for recorded in self.stopwatch.get_completed_slices()[recorded_before:]:
            self._emit("slice", asdict(recorded))
        self._emit("stop", {"record_pending_slice": record_pending_slice, "duration": duration})
        self._write_state_meta()
        return duration

    def reset(self) -> None:
        self.stopwatch.reset()
        self._emit("reset", {})
        self._write_state_meta()

    def slice(self) -> Slice:
        recorded = self.stopwatch.slice()
        if not self.stopwatch.is_idle():
            self._emit("slice", asdict(recorded))
        return recorded

    # ------------------------------------------------------------------
    # Lifecycle helpers
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self.writer is not None:
            self._write_meta("closed")
            self.writer.close()

    def __enter__(self) -> "StopwatchSession":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Event + metadata persistence
    # ------------------------------------------------------------------
    def _emit(self, kind: EventKind, data: Dict[str, Any]) -> None:
        if self.writer is None:
            return
        data = {**data, "state": self.stopwatch.get_state().value}
        self.writer.write(event_dump(Event(kind=kind, session=self.name, data=data)))

    def _write_state_meta(self) -> None:
        self._write_meta(self.stopwatch.get_state().value.lower())

    def _write_meta(self, status: str) -> None:
        if self.meta_path is None:
            return
        payload: Dict[str, Any] = {
            "status": status,
            "name": self.name,
            "clock": self.clock_name,
            "created_ts": self.created_ts.strftime(ISO),
            "completed_slices": len(self.stopwatch.get_completed_slices()),
        }
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        _LOG.debug("session %s meta -> %s", self.name, status)


def read_slices(events_path: Path) -> List[Slice]:
    """Return the slices recorded in an events file, in file order."""
    slices: List[Slice] = []
    for obj in iter_jsonl(events_path):
        if obj.get("kind") != "slice":
            continue
        data = obj["data"]
        slices.append(Slice(data["start_time"], data["end_time"], data["duration"]))
    return slices


__all__ = ["StopwatchSession", "read_slices"]
