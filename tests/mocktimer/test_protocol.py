"""Tests for feed query handling."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from mocktimer.models import ErrorResponse, SuccessResponse
from mocktimer.protocol import (
    INVALID_MESSAGE_FORMAT,
    UNKNOWN_MESSAGE_TYPE,
    encode_response,
    handle_message,
)
from mocktimer.synthesizer import generate_lap_batch
from tests.conftest import LAP_FIELDS

END_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestSuccess:
    def test_empty_store(self, store) -> None:
        response = handle_message('{"type": "GET_DATA"}', store)
        assert isinstance(response, SuccessResponse)
        assert response.payload == []

    def test_returns_full_history_oldest_first(self, roster, context, store, rng) -> None:
        generate_lap_batch(roster, context, store, END_TIME, rng)
        generate_lap_batch(roster, context, store, END_TIME, rng)
        response = handle_message('{"type": "GET_DATA"}', store)
        assert isinstance(response, SuccessResponse)
        assert [lap.id for lap in response.payload] == [1, 2, 3, 4, 5, 6]
        assert response.payload == store.snapshot()

    def test_payload_ignored(self, store) -> None:
        response = handle_message('{"type": "GET_DATA", "payload": "whatever"}', store)
        assert isinstance(response, SuccessResponse)

    def test_accepts_bytes(self, store) -> None:
        response = handle_message(b'{"type": "GET_DATA"}', store)
        assert isinstance(response, SuccessResponse)

    def test_response_is_not_live(self, roster, context, store, rng) -> None:
        response = handle_message('{"type": "GET_DATA"}', store)
        generate_lap_batch(roster, context, store, END_TIME, rng)
        assert response.payload == []


class TestErrors:
    @pytest.mark.parametrize("raw", ["not json", "{", "", b"\xff"])
    def test_invalid_format(self, store, raw) -> None:
        response = handle_message(raw, store)
        assert isinstance(response, ErrorResponse)
        assert response.payload == INVALID_MESSAGE_FORMAT

    def test_deeply_nested_json(self, store) -> None:
        response = handle_message("[" * 100000 + "]" * 100000, store)
        assert isinstance(response, ErrorResponse)
        assert response.payload == INVALID_MESSAGE_FORMAT

    @pytest.mark.parametrize(
        "raw",
        [
            '{"type": "PING"}',
            '{"type": "get_data"}',
            "{}",
            "[]",
            '"GET_DATA"',
            "42",
            '{"payload": "GET_DATA"}',
        ],
    )
    def test_unknown_type(self, store, raw) -> None:
        response = handle_message(raw, store)
        assert isinstance(response, ErrorResponse)
        assert response.payload == UNKNOWN_MESSAGE_TYPE

    def test_errors_do_not_touch_store(self, roster, context, store, rng) -> None:
        generate_lap_batch(roster, context, store, END_TIME, rng)
        before = store.snapshot()
        handle_message("garbage", store)
        handle_message('{"type": "DELETE"}', store)
        assert store.snapshot() == before
        assert store.next_lap_id() == 4


class TestEncodeResponse:
    def test_success_wire_form(self, roster, context, store, rng) -> None:
        generate_lap_batch(roster, context, store, END_TIME, rng)
        wire = json.loads(encode_response(handle_message('{"type": "GET_DATA"}', store)))
        assert wire["type"] == "SUCCESS"
        assert len(wire["payload"]) == 3
        assert list(wire["payload"][0]) == LAP_FIELDS
        assert wire["payload"][0]["Time"] == "2024-05-01T12:00:00.000Z"
        assert wire["payload"][0]["Tires"] is None

    def test_error_wire_form(self, store) -> None:
        wire = json.loads(encode_response(handle_message('{"type": "NOPE"}', store)))
        assert wire == {"type": "ERROR", "payload": UNKNOWN_MESSAGE_TYPE}
