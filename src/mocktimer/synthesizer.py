"""Lap synthesis: random lap durations split into three sectors."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Protocol

from mocktimer.config import SECTOR_1_RANGE, SECTOR_2_RANGE
from mocktimer.exceptions import SynthesisError
from mocktimer.models.competitor import Competitor
from mocktimer.models.lap import LapRecord, to_utc_millis
from mocktimer.models.race import RaceContext
from mocktimer.store import LapStore

_rng = random.Random()


class IdSource(Protocol):
    """Anything that hands out lap ids and per-competitor rounds."""

    def next_lap_id(self) -> int: ...

    def next_round(self, rfid: int) -> int: ...


def _fraction(rng: random.Random, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return low + rng.random() * (high - low)


def split_into_three(total: int, rng: random.Random | None = None) -> tuple[int, int, int]:
    """Cut *total* milliseconds into three non-negative sectors summing to it.

    S1 is a random fraction of the whole lap (``SECTOR_1_RANGE``), S2 a random
    fraction of what is left after S1 (``SECTOR_2_RANGE``), and S3 takes the
    remainder.
    """
    rng = rng if rng is not None else _rng
    s1 = math.floor(total * _fraction(rng, SECTOR_1_RANGE))
    s2 = math.floor((total - s1) * _fraction(rng, SECTOR_2_RANGE))
    s3 = total - s1 - s2
    return s1, s2, s3


def _check_inputs(competitor: Competitor, context: RaceContext) -> None:
    if competitor.rfid <= 0:
        raise SynthesisError(f"Competitor {competitor.full_name} has invalid rfid {competitor.rfid}")
    track = context.track
    if track.duration_from < 0 or track.duration_from > track.duration_to:
        raise SynthesisError(
            f"Track {track.name!r} has invalid duration interval "
            f"[{track.duration_from}, {track.duration_to}]"
        )


def generate_lap(
    competitor: Competitor,
    context: RaceContext,
    ids: IdSource,
    end_time: datetime,
    rng: random.Random | None = None,
) -> LapRecord:
    """Synthesize one lap for *competitor* completing at *end_time*.

    Consumes exactly one lap id and one round from *ids*.
    """
    _check_inputs(competitor, context)
    rng = rng if rng is not None else _rng
    track = context.track

    end = to_utc_millis(end_time)
    lap_time = rng.randint(track.duration_from, track.duration_to)
    s1, s2, s3 = split_into_three(lap_time, rng)
    start = end - timedelta(milliseconds=lap_time)

    return LapRecord(
        id=ids.next_lap_id(),
        race_id=context.race_id,
        rfid=competitor.rfid,
        time=end,
        time_prev=start,
        tag=competitor.tag,
        lap_time=lap_time,
        time_s1=start + timedelta(milliseconds=s1),
        time_s2=start + timedelta(milliseconds=s1 + s2),
        time_s3=end,
        s1=s1,
        s2=s2,
        s3=s3,
        temp1=context.temp1,
        temp2=context.temp2,
        temp3=context.temp3,
        round=ids.next_round(competitor.rfid),
        car_number=competitor.car_number,
        category=competitor.category,
        make=competitor.make,
        model=competitor.model,
        tires=None,
        first_name=competitor.first_name,
        last_name=competitor.last_name,
        name=track.name,
        date=context.race_date,
        is_race_lap=0,
    )


def generate_lap_batch(
    competitors: Sequence[Competitor],
    context: RaceContext,
    store: LapStore,
    end_time: datetime,
    rng: random.Random | None = None,
) -> list[LapRecord]:
    """Generate one lap per competitor, in roster order, and append them together.

    The store lock is held for the whole batch, so the laps get consecutive ids.
    """
    if not competitors:
        raise SynthesisError("Cannot generate laps for an empty roster")
    for competitor in competitors:
        _check_inputs(competitor, context)

    with store.batch():
        laps = [generate_lap(c, context, store, end_time, rng) for c in competitors]
        store.append(laps)
    return laps
