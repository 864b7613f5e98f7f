"""Basic usage example: query a running feed and print its laps."""

from mocktimer import FeedClient


def main() -> None:
    with FeedClient("ws://localhost:3010/ws") as feed:
        laps = feed.fetch_laps()

        print(f"=== {len(laps)} laps so far ===")
        if not laps:
            print("  No laps generated yet.")
            return

        print(f"Track: {laps[0].name}, race {laps[0].race_id}")
        print(f"Conditions: {laps[0].temp1}°C / {laps[0].temp2}°C / {laps[0].temp3}%")

        # Most recent laps first
        print("\n=== Latest laps ===")
        for lap in reversed(laps[-10:]):
            sectors = " | ".join(f"{s / 1000:.3f}" for s in lap.sector_times)
            print(
                f"  #{lap.id} car {lap.car_number} {lap.first_name} {lap.last_name} "
                f"round {lap.round}: {lap.lap_time / 1000:.3f}s [{sectors}]"
            )


if __name__ == "__main__":
    main()
