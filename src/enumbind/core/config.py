"""Library settings read from the environment."""

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Process-wide settings. Per-declaration options live in EnumOptions."""

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept level names in any case."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Build settings from ENUMBIND_* environment variables."""
    return Settings(
        log_level=os.getenv("ENUMBIND_LOG_LEVEL", "INFO"),
        log_format=os.getenv("ENUMBIND_LOG_FORMAT", "console").strip().lower(),
    )
