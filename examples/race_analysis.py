"""Offline race example: generate full-field laps and rank competitors."""

from datetime import datetime, timedelta, timezone

import pandas as pd

from mocktimer import RaceFeed, build_race_context
from mocktimer.models import Competitor, TrackProfile


def simulate(laps_per_competitor: int = 5) -> pd.DataFrame:
    """Run a short race in memory and return the laps as a DataFrame."""
    track = TrackProfile(name="Autodrom Most", duration_from=95000, duration_to=110000)
    competitors = [
        Competitor(first_name="Lukas", last_name="Novak", rfid=101, tag="LNO",
                   category="Cup", make="Mazda", model="MX-5 NC"),
        Competitor(first_name="Petra", last_name="Svobodova", rfid=102, tag="PSV",
                   category="Cup", make="Mazda", model="MX-5 NC"),
        Competitor(first_name="Jan", last_name="Dvorak", rfid=103, tag="JDV",
                   category="Open", make="Mazda", model="MX-5 NB"),
    ]
    feed = RaceFeed(competitors, build_race_context(track))

    start = datetime.now(timezone.utc)
    for lap_number in range(1, laps_per_competitor + 1):
        feed.generate_batch(start + timedelta(seconds=110 * lap_number))

    return pd.DataFrame([lap.model_dump(by_alias=True) for lap in feed.store.snapshot()])


def main() -> None:
    laps = simulate()
    print(f"=== {len(laps)} laps on {laps['Name'].iloc[0]} ===")

    best = (
        laps.groupby(["CarNumber", "FirstName", "LastName"])["LapTime"]
        .min()
        .sort_values()
        .reset_index()
    )
    print("\n=== Best laps ===")
    for position, row in enumerate(best.itertuples(index=False), start=1):
        print(f"  P{position}: #{row.CarNumber} {row.FirstName} {row.LastName} {row.LapTime / 1000:.3f}s")

    ideal = laps.groupby("CarNumber")[["S1", "S2", "S3"]].min().sum(axis=1)
    print("\n=== Ideal laps (best sectors) ===")
    for car_number, ideal_ms in ideal.sort_values().items():
        print(f"  #{car_number}: {ideal_ms / 1000:.3f}s")


if __name__ == "__main__":
    main()
