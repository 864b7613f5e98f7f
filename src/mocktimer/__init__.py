"""Mock race-timing feed serving synthetic laps over WebSocket."""

from mocktimer.client import AsyncFeedClient, FeedClient
from mocktimer.exceptions import (
    DefinitionError,
    FeedConnectionError,
    FeedError,
    FeedProtocolError,
    FeedTimeoutError,
    FeedValidationError,
    MockTimerError,
    SynthesisError,
)
from mocktimer.feed import RaceFeed, build_race_context
from mocktimer.store import LapStore
from mocktimer.synthesizer import generate_lap, generate_lap_batch

__all__ = [
    "AsyncFeedClient",
    "DefinitionError",
    "FeedClient",
    "FeedConnectionError",
    "FeedError",
    "FeedProtocolError",
    "FeedTimeoutError",
    "FeedValidationError",
    "LapStore",
    "MockTimerError",
    "RaceFeed",
    "SynthesisError",
    "build_race_context",
    "generate_lap",
    "generate_lap_batch",
]

__version__ = "0.1.0"
