"""Tests for the append-only lap store."""

from __future__ import annotations

import threading

from mocktimer.models import LapRecord
from mocktimer.store import LapStore
from tests.conftest import SAMPLE_LAP


def _lap(lap_id: int) -> LapRecord:
    return LapRecord.model_validate({**SAMPLE_LAP, "Id": lap_id})


class TestLapIds:
    def test_first_id_is_one(self) -> None:
        assert LapStore().next_lap_id() == 1

    def test_ids_increase_by_one(self) -> None:
        store = LapStore()
        assert [store.next_lap_id() for _ in range(5)] == [1, 2, 3, 4, 5]

    def test_ids_unique_across_threads(self) -> None:
        store = LapStore()
        seen: list[int] = []
        seen_lock = threading.Lock()

        def worker() -> None:
            ids = [store.next_lap_id() for _ in range(200)]
            with seen_lock:
                seen.extend(ids)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(seen) == list(range(1, 801))


class TestRounds:
    def test_starts_at_zero(self) -> None:
        assert LapStore().next_round(105) == 0

    def test_increments_per_competitor(self) -> None:
        store = LapStore()
        assert [store.next_round(105) for _ in range(4)] == [0, 1, 2, 3]

    def test_independent_counters(self) -> None:
        store = LapStore()
        store.next_round(101)
        store.next_round(101)
        assert store.next_round(102) == 0
        assert store.next_round(101) == 2


class TestAppendAndSnapshot:
    def test_empty(self) -> None:
        store = LapStore()
        assert store.snapshot() == []
        assert len(store) == 0

    def test_append_preserves_order(self) -> None:
        store = LapStore()
        laps = [_lap(3), _lap(1), _lap(2)]
        store.append(laps)
        assert [lap.id for lap in store.snapshot()] == [3, 1, 2]

    def test_append_extends_at_end(self) -> None:
        store = LapStore()
        store.append([_lap(1)])
        before = store.snapshot()
        store.append([_lap(2), _lap(3)])
        after = store.snapshot()
        assert len(after) == len(before) + 2
        assert after[: len(before)] == before
        assert [lap.id for lap in after[len(before):]] == [2, 3]

    def test_no_deduplication(self) -> None:
        store = LapStore()
        lap = _lap(1)
        store.append([lap, lap])
        assert len(store) == 2

    def test_snapshot_is_stable(self) -> None:
        store = LapStore()
        store.append([_lap(1), _lap(2)])
        assert store.snapshot() == store.snapshot()

    def test_snapshot_is_a_copy(self) -> None:
        store = LapStore()
        store.append([_lap(1)])
        snapshot = store.snapshot()
        store.append([_lap(2)])
        assert len(snapshot) == 1
        snapshot.clear()
        assert len(store) == 2

    def test_append_accepts_generator(self) -> None:
        store = LapStore()
        store.append(_lap(i) for i in (1, 2))
        assert len(store) == 2


class TestBatch:
    def test_batch_yields_store(self) -> None:
        store = LapStore()
        with store.batch() as locked:
            assert locked is store
            locked.append([_lap(locked.next_lap_id())])
        assert [lap.id for lap in store.snapshot()] == [1]

    def test_batch_blocks_other_threads(self) -> None:
        store = LapStore()
        observed: list[int] = []

        def reader() -> None:
            observed.append(len(store.snapshot()))

        with store.batch():
            store.append([_lap(1)])
            thread = threading.Thread(target=reader)
            thread.start()
            thread.join(timeout=0.2)
            assert thread.is_alive()
            store.append([_lap(2)])
        thread.join()
        assert observed == [2]
