"""Race context model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from mocktimer.models.track import TrackProfile


class RaceContext(BaseModel):
    """Per-run race state shared by every generated lap.

    Built once at startup: the active track, the race identifiers and three
    ambient sensor readings.
    """

    model_config = ConfigDict(frozen=True)

    track: TrackProfile
    race_id: int
    race_date: str
    temp1: int
    temp2: float
    temp3: int
