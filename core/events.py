"""Event models for recorded stopwatch activity."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

import time

import ulid
from pydantic import BaseModel, Field


def now_ts_ms() -> int:
    """Return the current timestamp in milliseconds."""

    return int(time.time() * 1000)


def new_event_id() -> str:
    """Generate a ULID based identifier for events."""

    return str(ulid.new())


EventKind = Literal["meta", "start", "stop", "reset", "slice"]


class Event(BaseModel):
    """One stopwatch operation as written to a session's events log.

    ``ts_ms`` is wall-clock time of the write; stopwatch readings live in
    ``data`` and use the unit of the session's time source.
    """

    id: str = Field(default_factory=new_event_id)
    ts_ms: int = Field(default_factory=now_ts_ms)
    kind: EventKind
    session: str
    data: Dict[str, Any] = Field(default_factory=dict)


class SessionMeta(BaseModel):
    """Metadata describing a recorded stopwatch session."""

    name: str
    created_ts_ms: int = Field(default_factory=now_ts_ms)
    clock: Optional[str] = None
    notes: Optional[str] = None


def event_dump(event: BaseModel) -> Dict[str, Any]:
    """Return a plain, JSON-ready ``dict`` for ``event``."""

    return event.model_dump(mode="json")


__all__ = ["Event", "EventKind", "SessionMeta", "event_dump", "now_ts_ms", "new_event_id"]
