"""Competitor and track definitions loaded from CSV files."""

from __future__ import annotations

import random
import re
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from mocktimer._logging import log_call
from mocktimer.exceptions import DefinitionError
from mocktimer.models.competitor import Competitor
from mocktimer.models.track import TrackProfile

RACER_COLUMNS = ("firstName", "lastName", "rfid", "tag", "category", "make", "model")
TRACK_COLUMNS = ("name", "durationFrom", "durationTo")

# First data row sits below the header
_FIRST_ROW = 2

_INTEGER = re.compile(r"-?[0-9]+")


def _read_rows(path: str | PathLike[str]) -> list[dict[str, str]]:
    """Read a comma-separated file with a header row into trimmed string dicts."""
    path = Path(path)
    if not path.is_file():
        raise DefinitionError(f"Definitions file not found: {path}")
    try:
        frame = pd.read_csv(
            path,
            sep=",",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8",
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise DefinitionError(f"Failed to parse {path}: {exc}") from exc

    frame.columns = [str(column).strip() for column in frame.columns]
    if frame.empty:
        return []
    # Short rows come back as NaN even with keep_default_na=False
    frame = frame.fillna("").astype(str)
    frame = frame.apply(lambda column: column.str.strip())
    return frame.to_dict(orient="records")  # type: ignore[return-value]


def _require(row: dict[str, str], field: str, row_number: int) -> str:
    value = row.get(field)
    if value is None or value.strip() == "":
        raise DefinitionError(f'Missing required field "{field}" at row {row_number}')
    return value.strip()


def _require_int(row: dict[str, str], field: str, row_number: int) -> int:
    value = _require(row, field, row_number)
    # ASCII digits with an optional leading minus
    if not _INTEGER.fullmatch(value):
        raise DefinitionError(f'Invalid {field} value "{value}" at row {row_number}')
    return int(value)


@log_call
def load_competitors(path: str | PathLike[str]) -> list[Competitor]:
    """Load and validate the competitor roster."""
    competitors: list[Competitor] = []
    for index, row in enumerate(_read_rows(path)):
        row_number = index + _FIRST_ROW
        rfid = _require_int(row, "rfid", row_number)
        try:
            competitors.append(
                Competitor(
                    first_name=_require(row, "firstName", row_number),
                    last_name=_require(row, "lastName", row_number),
                    rfid=rfid,
                    tag=_require(row, "tag", row_number),
                    category=_require(row, "category", row_number),
                    make=_require(row, "make", row_number),
                    model=_require(row, "model", row_number),
                )
            )
        except ValidationError as exc:
            raise DefinitionError(f"Invalid competitor at row {row_number}: {exc}") from exc
    return competitors


@log_call
def load_tracks(path: str | PathLike[str]) -> list[TrackProfile]:
    """Load and validate the track profiles."""
    tracks: list[TrackProfile] = []
    for index, row in enumerate(_read_rows(path)):
        row_number = index + _FIRST_ROW
        duration_from = _require_int(row, "durationFrom", row_number)
        duration_to = _require_int(row, "durationTo", row_number)
        try:
            tracks.append(
                TrackProfile(
                    name=_require(row, "name", row_number),
                    duration_from=duration_from,
                    duration_to=duration_to,
                )
            )
        except ValidationError as exc:
            raise DefinitionError(f"Invalid track at row {row_number}: {exc}") from exc
    return tracks


def pick_random_track(
    tracks: Sequence[TrackProfile],
    rng: random.Random | None = None,
) -> TrackProfile:
    """Pick the active track profile for this run."""
    if not tracks:
        raise DefinitionError("No tracks available")
    return (rng or random.Random()).choice(tracks)
