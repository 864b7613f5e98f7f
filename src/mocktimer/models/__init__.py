"""Mock timer data models."""

from mocktimer.models.competitor import Competitor
from mocktimer.models.lap import LapRecord, format_timestamp, to_utc_millis
from mocktimer.models.messages import (
    ERROR,
    GET_DATA,
    SUCCESS,
    ErrorResponse,
    FeedResponse,
    FetchDataRequest,
    SuccessResponse,
)
from mocktimer.models.race import RaceContext
from mocktimer.models.track import TrackProfile

__all__ = [
    "Competitor",
    "ERROR",
    "ErrorResponse",
    "FeedResponse",
    "FetchDataRequest",
    "GET_DATA",
    "LapRecord",
    "RaceContext",
    "SUCCESS",
    "SuccessResponse",
    "TrackProfile",
    "format_timestamp",
    "to_utc_millis",
]
