# config/paths.py
"""
Centralized path management for recorded stopwatch sessions.

- Single source of truth for where session event logs live
- Honors STOPWATCH_DATA_ROOT (matching the SDK config)
- Sensible OS default when the env var is not provided
- Prefer SDK config if available (sdk.config.SDK_CONFIG.data_root)
"""

from __future__ import annotations

import errno
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# ---------- OS defaults (used only if env vars not set) ----------

def _platform_default_base() -> Path:
    """
    Returns an OS-specific base directory for user data:
    - Windows: %LOCALAPPDATA%/Stopwatch
    - macOS:   ~/Library/Application Support/Stopwatch
    - Linux:   ~/.local/share/stopwatch
    """
    if sys.platform.startswith("win"):
        base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(base) / "Stopwatch"
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "Stopwatch"
    else:
        return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share")) / "stopwatch"


def _env_or_default_data_root() -> Path:
    return Path(os.getenv("STOPWATCH_DATA_ROOT", _platform_default_base() / "data"))


# ---------- Core dataclass ----------

@dataclass(frozen=True)
class Paths:
    """
    Canonical path container.

    Most callers should obtain a singleton instance via get_paths().
    """
    data_root: Path

    # ----- factories -----

    @staticmethod
    def from_env() -> "Paths":
        return Paths(_env_or_default_data_root())

    @staticmethod
    def from_sdk_if_available() -> "Paths":
        """
        If the SDK config is importable, use its data_root.
        Otherwise, fall back to from_env().
        """
        try:
            from sdk.config import SDK_CONFIG  # type: ignore
        except ImportError:
            return Paths.from_env()
        return Paths(Path(SDK_CONFIG.data_root))

    # ----- layout helpers -----

    @property
    def sessions_root(self) -> Path:
        return self.data_root / "sessions"

    def session_dir(self, name: str) -> Path:
        return self.sessions_root / name

    def session_events_path(self, name: str) -> Path:
        """JSONL log of stopwatch events for a session."""
        return self.session_dir(name) / "events.jsonl"

    def session_meta_path(self, name: str) -> Path:
        return self.session_dir(name) / "session_meta.json"

    # ----- setup / validation -----

    def ensure_all(self) -> None:
        for p in [self.data_root, self.sessions_root]:
            p.mkdir(parents=True, exist_ok=True)

    def verify_writeable(self) -> None:
        """
        Raise OSError if the data root is not writeable.
        """
        p = self.data_root
        try:
            p.mkdir(parents=True, exist_ok=True)
            test = p / ".write_test"
            test.write_text("ok", encoding="utf-8")
            test.unlink(missing_ok=True)
        except OSError as e:
            raise OSError(errno.EACCES, f"Not writeable: {p}", e)


# ---------- Singleton access ----------

_paths_singleton: Optional[Paths] = None

def get_paths(force_refresh: bool = False) -> Paths:
    """
    Return a cached Paths instance (prefers SDK integration when available).
    """
    global _paths_singleton
    if force_refresh or _paths_singleton is None:
        _paths_singleton = Paths.from_sdk_if_available()
        _paths_singleton.ensure_all()
    return _paths_singleton

