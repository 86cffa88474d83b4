from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

NaiveClock = Literal["local", "utc"]


def _naive_clock(raw: str) -> NaiveClock:
    value = raw.strip().lower()
    if value == "utc":
        return "utc"
    return "local"


@dataclass(frozen=True)
class Settings:
    """Library settings loaded from environment in a type-safe, framework-free way."""

    log_level: str
    naive_clock: NaiveClock

    @staticmethod
    def from_env() -> Settings:
        prefix = "THROWIF_"
        log_level = os.getenv(f"{prefix}LOG_LEVEL", "WARNING").strip() or "WARNING"
        naive_clock = _naive_clock(os.getenv(f"{prefix}NAIVE_CLOCK", "local"))
        return Settings(log_level=log_level.upper(), naive_clock=naive_clock)
