"""Shared test fixtures and sample feed data."""

from __future__ import annotations

import logging
import random

import pytest

import mocktimer._logging as logging_mod
from mocktimer.models import Competitor, RaceContext, TrackProfile
from mocktimer.store import LapStore

LAP_FIELDS = [
    "Id", "RaceId", "RFIDId", "Time", "TimePrev", "Tag", "LapTime",
    "TimeS1", "TimeS2", "TimeS3", "S1", "S2", "S3",
    "Temp1", "Temp2", "Temp3", "Round", "CarNumber",
    "Category", "Make", "Model", "Tires",
    "FirstName", "LastName", "Name", "Date", "IsRaceLap",
]

SAMPLE_COMPETITOR = {
    "first_name": "Tomas",
    "last_name": "Cerny",
    "rfid": 105,
    "tag": "TCE",
    "category": "Cup",
    "make": "Mazda",
    "model": "MX-5 ND",
}

SAMPLE_TRACK = {
    "name": "Autodrom Most",
    "duration_from": 60000,
    "duration_to": 90000,
}

SAMPLE_LAP = {
    "Id": 1,
    "RaceId": 20240501,
    "RFIDId": 105,
    "Time": "2024-05-01T12:01:30.000Z",
    "TimePrev": "2024-05-01T12:00:15.000Z",
    "Tag": "TCE",
    "LapTime": 75000,
    "TimeS1": "2024-05-01T12:00:35.000Z",
    "TimeS2": "2024-05-01T12:01:00.000Z",
    "TimeS3": "2024-05-01T12:01:30.000Z",
    "S1": 20000,
    "S2": 25000,
    "S3": 30000,
    "Temp1": 21,
    "Temp2": 18.45,
    "Temp3": 85,
    "Round": 0,
    "CarNumber": 5,
    "Category": "Cup",
    "Make": "Mazda",
    "Model": "MX-5 ND",
    "Tires": None,
    "FirstName": "Tomas",
    "LastName": "Cerny",
    "Name": "Autodrom Most",
    "Date": "2024-05-01T00:00:00.000Z",
    "IsRaceLap": 0,
}

RACERS_CSV = """firstName,lastName,rfid,tag,category,make,model
Lukas,Novak,101,LNO,Cup,Mazda,MX-5 NC
Petra,Svobodova,102,PSV,Cup,Mazda,MX-5 NC
Jan,Dvorak,103,JDV,Open,Mazda,MX-5 NB
"""

TRACKS_CSV = """name,durationFrom,durationTo
Autodrom Most,95000,110000
Slovakia Ring,140000,160000
"""


@pytest.fixture
def competitor() -> Competitor:
    return Competitor(**SAMPLE_COMPETITOR)


@pytest.fixture
def roster() -> list[Competitor]:
    return [
        Competitor(first_name="Lukas", last_name="Novak", rfid=101, tag="LNO",
                   category="Cup", make="Mazda", model="MX-5 NC"),
        Competitor(first_name="Petra", last_name="Svobodova", rfid=102, tag="PSV",
                   category="Cup", make="Mazda", model="MX-5 NC"),
        Competitor(first_name="Jan", last_name="Dvorak", rfid=103, tag="JDV",
                   category="Open", make="Mazda", model="MX-5 NB"),
    ]


@pytest.fixture
def track() -> TrackProfile:
    return TrackProfile(**SAMPLE_TRACK)


@pytest.fixture
def context(track: TrackProfile) -> RaceContext:
    return RaceContext(
        track=track,
        race_id=20240501,
        race_date="2024-05-01T00:00:00.000Z",
        temp1=21,
        temp2=18.45,
        temp3=85,
    )


@pytest.fixture
def store() -> LapStore:
    return LapStore()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(20240501)


@pytest.fixture
def definitions(tmp_path):
    """Write sample racer and track CSV files and return their paths."""
    racers = tmp_path / "racers.csv"
    tracks = tmp_path / "tracks.csv"
    racers.write_text(RACERS_CSV, encoding="utf-8")
    tracks.write_text(TRACKS_CSV, encoding="utf-8")
    return racers, tracks


@pytest.fixture(autouse=True)
def _reset_logger(monkeypatch):
    """Give every test a freshly configured package logger."""
    monkeypatch.delenv("MOCKTIMER_LOG_FILE", raising=False)
    named_logger = logging.getLogger(logging_mod.LOGGER_NAME)
    for handler in named_logger.handlers[:]:
        handler.close()
        named_logger.removeHandler(handler)
    logging_mod._logger = None
    yield
    for handler in named_logger.handlers[:]:
        handler.close()
        named_logger.removeHandler(handler)
    logging_mod._logger = None
