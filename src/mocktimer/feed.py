"""Race setup and lap generation ticks."""

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime, timezone

from mocktimer._logging import get_logger
from mocktimer.config import TEMP1_RANGE, TEMP2_DECIMALS, TEMP2_RANGE, TEMP3_RANGE, Settings
from mocktimer.exceptions import SynthesisError
from mocktimer.loader import load_competitors, load_tracks, pick_random_track
from mocktimer.models.competitor import Competitor
from mocktimer.models.lap import LapRecord, format_timestamp
from mocktimer.models.race import RaceContext
from mocktimer.models.track import TrackProfile
from mocktimer.store import LapStore
from mocktimer.synthesizer import generate_lap, generate_lap_batch


def build_race_context(
    track: TrackProfile,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> RaceContext:
    """Derive the race id and date from *now* (UTC) and draw the sensor readings."""
    rng = rng if rng is not None else random.Random()
    now = now if now is not None else datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    midnight = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)

    return RaceContext(
        track=track,
        race_id=int(midnight.strftime("%Y%m%d")),
        race_date=format_timestamp(midnight),
        temp1=rng.randint(*TEMP1_RANGE),
        temp2=round(rng.uniform(*TEMP2_RANGE), TEMP2_DECIMALS),
        temp3=rng.randint(*TEMP3_RANGE),
    )


class RaceFeed:
    """One mock race: the roster, the race context and the lap store.

    Usage:
        feed = RaceFeed(competitors, build_race_context(track))
        feed.tick()                # one lap for a random competitor
        feed.generate_batch()      # one lap for every competitor
        laps = feed.store.snapshot()
    """

    def __init__(
        self,
        competitors: Sequence[Competitor],
        context: RaceContext,
        store: LapStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if not competitors:
            raise SynthesisError("A race feed needs at least one competitor")
        self.competitors = tuple(competitors)
        self.context = context
        self.store = store if store is not None else LapStore()
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_settings(cls, settings: Settings, rng: random.Random | None = None) -> RaceFeed:
        """Load definitions from disk, pick the track and set up the race."""
        logger = get_logger()
        competitors = load_competitors(settings.racers_csv)
        track = pick_random_track(load_tracks(settings.tracks_csv), rng)
        context = build_race_context(track, rng=rng)

        logger.info(
            "Track: %s (%dms - %dms)", track.name, track.duration_from, track.duration_to,
        )
        logger.info("Racers: %d", len(competitors))
        logger.info("Race ID: %d", context.race_id)
        logger.info(
            "Temperatures: %d°C / %.2f°C / %d%%", context.temp1, context.temp2, context.temp3,
        )
        return cls(competitors, context, rng=rng)

    def tick(self, now: datetime | None = None) -> LapRecord:
        """Generate and store one lap for a competitor picked at random."""
        end_time = now if now is not None else datetime.now(timezone.utc)
        competitor = self._rng.choice(self.competitors)
        with self.store.batch():
            lap = generate_lap(competitor, self.context, self.store, end_time, self._rng)
            self.store.append([lap])
            total = len(self.store)
        get_logger().info(
            "Generated lap %d for %s at %s (total: %d)",
            lap.id, competitor.full_name, format_timestamp(lap.time), total,
        )
        return lap

    def generate_batch(self, now: datetime | None = None) -> list[LapRecord]:
        """Generate and store one lap for every competitor, in roster order."""
        end_time = now if now is not None else datetime.now(timezone.utc)
        laps = generate_lap_batch(self.competitors, self.context, self.store, end_time, self._rng)
        get_logger().info(
            "Generated batch of %d laps at %s (total: %d)",
            len(laps), format_timestamp(end_time), len(self.store),
        )
        return laps
