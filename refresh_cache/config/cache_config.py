#!filepath: refresh_cache/config/cache_config.py
from __future__ import annotations

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, field_validator


class CacheConfig(BaseModel):
    """
    Refresh cache configuration.

    update_interval:
      - None      : refresh once at start, no background thread
      - timedelta : refresh on every tick (numbers are read as seconds)
    """

    update_interval: Optional[timedelta] = None

    @field_validator("update_interval")
    @classmethod
    def _positive_interval(cls, v: Optional[timedelta]) -> Optional[timedelta]:
        if v is not None and v <= timedelta(0):
            raise ValueError("cache update interval duration is less than or equal to 0")
        return v

    @property
    def interval_seconds(self) -> Optional[float]:
        if self.update_interval is None:
            return None
        return self.update_interval.total_seconds()
