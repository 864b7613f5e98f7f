"""Feed query and response envelopes."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from mocktimer.models.lap import LapRecord

GET_DATA = "GET_DATA"
SUCCESS = "SUCCESS"
ERROR = "ERROR"


class FetchDataRequest(BaseModel):
    """The single supported query: fetch the whole lap history."""

    model_config = ConfigDict(frozen=True)

    type: Literal["GET_DATA"]
    payload: Any = None


class SuccessResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["SUCCESS"] = SUCCESS
    payload: list[LapRecord]


class ErrorResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["ERROR"] = ERROR
    payload: str = Field(min_length=1)


FeedResponse = Annotated[SuccessResponse | ErrorResponse, Field(discriminator="type")]
