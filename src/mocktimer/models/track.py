"""Track profile model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TrackProfile(BaseModel):
    """A track and the closed lap-duration envelope it allows, in milliseconds."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, str_min_length=1)

    name: str
    duration_from: int = Field(ge=0)
    duration_to: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_interval(self) -> TrackProfile:
        if self.duration_from > self.duration_to:
            raise ValueError(
                f"durationFrom ({self.duration_from}) exceeds durationTo ({self.duration_to})"
            )
        return self
