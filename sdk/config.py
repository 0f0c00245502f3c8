
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pathlib import Path
import logging
import os

class AppConfig(BaseModel):
    # env-derived defaults go through the validators too
    model_config = ConfigDict(validate_default=True)

    clock: str = Field(default_factory=lambda: os.getenv('STOPWATCH_CLOCK', 'wall_ms'))
    log_level: str = Field(default_factory=lambda: os.getenv('STOPWATCH_LOG_LEVEL', 'WARNING'))
    data_root: Path = Field(default_factory=lambda: Path(os.getenv('STOPWATCH_DATA_ROOT', 'data')))

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

def load_config(**overrides) -> AppConfig:
    """Build a fresh config from the current environment, plus explicit overrides."""
    return AppConfig(**{k: v for k, v in overrides.items() if v is not None})

SDK_CONFIG = AppConfig()
