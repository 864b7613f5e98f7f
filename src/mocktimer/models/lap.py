"""Synthetic lap record model."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator


def to_utc_millis(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime truncated to milliseconds.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    value = to_utc_millis(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


Timestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str)]


class LapRecord(BaseModel):
    """One synthesized timing event.

    Attribute names are snake_case; the wire form uses the aliases, so dump
    with ``by_alias=True``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    id: int = Field(alias="Id", ge=1)
    race_id: int = Field(alias="RaceId")
    rfid: int = Field(alias="RFIDId")
    time: Timestamp = Field(alias="Time")
    time_prev: Timestamp = Field(alias="TimePrev")
    tag: str = Field(alias="Tag")
    lap_time: int = Field(alias="LapTime", ge=0)
    time_s1: Timestamp = Field(alias="TimeS1")
    time_s2: Timestamp = Field(alias="TimeS2")
    time_s3: Timestamp = Field(alias="TimeS3")
    s1: int = Field(alias="S1", ge=0)
    s2: int = Field(alias="S2", ge=0)
    s3: int = Field(alias="S3", ge=0)
    temp1: int = Field(alias="Temp1")
    temp2: float = Field(alias="Temp2")
    temp3: int = Field(alias="Temp3")
    round: int = Field(alias="Round", ge=0)
    car_number: int = Field(alias="CarNumber")
    category: str = Field(alias="Category")
    make: str = Field(alias="Make")
    model: str = Field(alias="Model")
    tires: str | None = Field(default=None, alias="Tires")
    first_name: str = Field(alias="FirstName")
    last_name: str = Field(alias="LastName")
    name: str = Field(alias="Name")
    date: str = Field(alias="Date")
    is_race_lap: int = Field(default=0, alias="IsRaceLap")

    @model_validator(mode="after")
    def _check_splits(self) -> LapRecord:
        if self.s1 + self.s2 + self.s3 != self.lap_time:
            raise ValueError(
                f"splits {self.s1} + {self.s2} + {self.s3} do not sum to LapTime {self.lap_time}"
            )
        if self.time_s3 != self.time:
            raise ValueError("TimeS3 must equal Time")
        if self.time - self.time_prev != self.lap_timedelta:
            raise ValueError("Time - TimePrev must equal LapTime")
        return self

    @property
    def sector_times(self) -> tuple[int, int, int]:
        """The three split durations in milliseconds."""
        return self.s1, self.s2, self.s3

    @property
    def lap_timedelta(self) -> timedelta:
        """Lap duration as a timedelta."""
        return timedelta(milliseconds=self.lap_time)
