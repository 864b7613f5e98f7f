"""Command-line entry point: ``python -m mocktimer``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mocktimer._logging import get_logger
from mocktimer.config import Settings
from mocktimer.exceptions import MockTimerError
from mocktimer.server import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mocktimer",
        description="Serve a mock race-timing feed of synthetic laps over WebSocket.",
    )
    parser.add_argument("--host", help="interface to bind (env MOCKTIMER_HOST)")
    parser.add_argument("--port", type=int, help="port to listen on (env PORT)")
    parser.add_argument("--racers", type=Path, dest="racers_csv", help="competitor CSV file")
    parser.add_argument("--tracks", type=Path, dest="tracks_csv", help="track profile CSV file")
    parser.add_argument(
        "--interval", type=float, dest="tick_interval",
        help="seconds between generated laps (env MOCKTIMER_TICK_INTERVAL)",
    )
    parser.add_argument("--log-level", dest="log_level", type=str.upper, help="logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env().with_overrides(**vars(args))

    try:
        run(settings)
    except MockTimerError as exc:
        get_logger().error("Startup aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
