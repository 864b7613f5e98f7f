"""Defaults and environment-driven settings for the mock timer feed."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

# Displayed car number is the transponder id minus this offset
CAR_NUMBER_OFFSET = 100

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3010
DEFAULT_TICK_INTERVAL = 10.0  # seconds between generated laps
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_RACERS_CSV = "racers.csv"
DEFAULT_TRACKS_CSV = "tracks.csv"

WS_PATH = "/ws"

# Ambient sensor readings drawn once per race
TEMP1_RANGE = (10, 30)
TEMP2_RANGE = (10.0, 30.0)
TEMP2_DECIMALS = 2
TEMP3_RANGE = (70, 110)

# Sector cuts as fractions: S1 of the whole lap, S2 of what is left after S1
SECTOR_1_RANGE = (0.20, 0.40)
SECTOR_2_RANGE = (0.25, 0.45)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the feed server.

    Usage:
        settings = Settings.from_env()
        settings = settings.with_overrides(port=4000)
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    racers_csv: Path = Path(DEFAULT_RACERS_CSV)
    tracks_csv: Path = Path(DEFAULT_TRACKS_CSV)
    tick_interval: float = DEFAULT_TICK_INTERVAL
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("MOCKTIMER_HOST", DEFAULT_HOST),
            port=int(env.get("PORT", DEFAULT_PORT)),
            racers_csv=Path(env.get("MOCKTIMER_RACERS_CSV", DEFAULT_RACERS_CSV)),
            tracks_csv=Path(env.get("MOCKTIMER_TRACKS_CSV", DEFAULT_TRACKS_CSV)),
            tick_interval=float(env.get("MOCKTIMER_TICK_INTERVAL", DEFAULT_TICK_INTERVAL)),
            log_level=env.get("MOCKTIMER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **kwargs: Any) -> Settings:
        """Return a copy with every non-None keyword applied."""
        changes = {key: value for key, value in kwargs.items() if value is not None}
        return replace(self, **changes)
