"""Query handling for the lap feed.

Every inbound message is answered from the current store snapshot alone;
nothing about earlier queries is kept.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from mocktimer._logging import get_logger
from mocktimer.models.messages import ErrorResponse, FetchDataRequest, SuccessResponse
from mocktimer.store import LapStore

INVALID_MESSAGE_FORMAT = "Invalid message format"
UNKNOWN_MESSAGE_TYPE = "Unknown message type"


def handle_message(raw: str | bytes, store: LapStore) -> SuccessResponse | ErrorResponse:
    """Answer one inbound message with a success or error envelope."""
    logger = get_logger()
    try:
        message = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
        logger.warning("Rejected message: %s", INVALID_MESSAGE_FORMAT)
        return ErrorResponse(payload=INVALID_MESSAGE_FORMAT)

    try:
        FetchDataRequest.model_validate(message)
    except ValidationError:
        logger.warning("Rejected message: %s (%.80r)", UNKNOWN_MESSAGE_TYPE, message)
        return ErrorResponse(payload=UNKNOWN_MESSAGE_TYPE)

    return SuccessResponse(payload=store.snapshot())


def encode_response(response: SuccessResponse | ErrorResponse) -> str:
    """Serialize a response envelope to its JSON wire form."""
    return response.model_dump_json(by_alias=True)
