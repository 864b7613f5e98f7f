"""Append-only lap history with id and round sequencing."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from mocktimer.models.lap import LapRecord


class LapStore:
    """Ordered, append-only history of generated laps.

    Hands out lap ids (1, 2, 3, ...) across the whole store and a round
    counter per transponder id (0, 1, 2, ...). Every operation holds the same
    re-entrant lock, so an ``append`` is never half-visible to ``snapshot``.

    Usage:
        store = LapStore()
        with store.batch():
            lap_id = store.next_lap_id()
            ...
            store.append(records)
    """

    def __init__(self) -> None:
        self._laps: list[LapRecord] = []
        self._next_id = 1
        self._rounds: dict[int, int] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._laps)

    @contextmanager
    def batch(self) -> Iterator[LapStore]:
        """Hold the store lock so ids can be allocated and appended atomically."""
        with self._lock:
            yield self

    def append(self, records: Iterable[LapRecord]) -> None:
        """Add *records* to the end of the history, in the order given."""
        with self._lock:
            self._laps.extend(records)

    def snapshot(self) -> list[LapRecord]:
        """Return an independent copy of the whole history, oldest first."""
        with self._lock:
            return list(self._laps)

    def next_lap_id(self) -> int:
        """Return the next unused lap id and advance the counter."""
        with self._lock:
            lap_id = self._next_id
            self._next_id += 1
            return lap_id

    def next_round(self, rfid: int) -> int:
        """Return the current round for *rfid* (0 if never seen) and advance it."""
        with self._lock:
            current = self._rounds.get(rfid, 0)
            self._rounds[rfid] = current + 1
            return current
