"""Logging setup for the command-line apps.

Library modules only create module loggers; handlers are installed here, once,
by whichever entry point runs.
"""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    if level is None:
        from .config import SDK_CONFIG

        level = SDK_CONFIG.log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)


__all__ = ["LOG_FORMAT", "configure_logging"]
