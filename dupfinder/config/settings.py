"""
dupfinder - Defaults via Pydantic Settings.

All values come from environment variables prefixed with ``DUPFINDER_``
(e.g. ``DUPFINDER_DEFAULT_WORKERS=4``). CLI flags override them.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from dupfinder.models import ComparisonMode


def _default_workers() -> int:
    # Same heuristic as concurrent.futures.ThreadPoolExecutor
    return min(32, (os.cpu_count() or 1) + 4)


class DupFinderSettings(BaseSettings):
    """dupfinder defaults loaded from environment variables."""

    # Scan
    default_mode: ComparisonMode = ComparisonMode.hash
    default_workers: int = Field(default_factory=_default_workers, ge=1)
    chunk_size: int = Field(default=65536, gt=0)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["json", "console"] = "console"

    model_config = {"env_prefix": "DUPFINDER_", "case_sensitive": False}

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> DupFinderSettings:
    """Factory for settings (cached singleton)."""
    return DupFinderSettings()
