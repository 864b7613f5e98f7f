"""Client classes for consuming the lap feed."""

from __future__ import annotations

import asyncio

from pydantic import TypeAdapter, ValidationError
from websockets.asyncio.client import ClientConnection as AsyncClientConnection
from websockets.asyncio.client import connect as async_connect
from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI
from websockets.sync.client import ClientConnection
from websockets.sync.client import connect as sync_connect

from mocktimer._logging import get_logger
from mocktimer.config import DEFAULT_PORT, WS_PATH
from mocktimer.exceptions import (
    FeedConnectionError,
    FeedProtocolError,
    FeedTimeoutError,
    FeedValidationError,
)
from mocktimer.models.lap import LapRecord
from mocktimer.models.messages import GET_DATA, ErrorResponse, FeedResponse, FetchDataRequest

DEFAULT_URL = f"ws://localhost:{DEFAULT_PORT}{WS_PATH}"
DEFAULT_OPEN_TIMEOUT = 10.0
DEFAULT_RESPONSE_TIMEOUT = 30.0

_REQUEST = FetchDataRequest(type=GET_DATA).model_dump_json()
_RESPONSE_ADAPTER: TypeAdapter[FeedResponse] = TypeAdapter(FeedResponse)


def _parse_response(data: str | bytes) -> list[LapRecord]:
    """Validate a response envelope and return its laps."""
    try:
        response = _RESPONSE_ADAPTER.validate_json(data)
    except ValidationError as exc:
        raise FeedValidationError(f"Failed to validate feed response: {exc}") from exc
    if isinstance(response, ErrorResponse):
        raise FeedProtocolError(response.payload)
    return response.payload


class FeedClient:
    """Synchronous client for the lap feed.

    Keeps one connection open and reuses it for every query.

    Usage:
        with FeedClient("ws://localhost:3010/ws") as feed:
            laps = feed.fetch_laps()
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        response_timeout: float = DEFAULT_RESPONSE_TIMEOUT,
    ) -> None:
        self._url = url
        self._open_timeout = open_timeout
        self._response_timeout = response_timeout
        self._connection: ClientConnection | None = None

    def __enter__(self) -> FeedClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _ensure_connected(self) -> ClientConnection:
        if self._connection is not None:
            return self._connection
        get_logger().info("Connecting to feed at %s", self._url)
        try:
            self._connection = sync_connect(self._url, open_timeout=self._open_timeout)
        except TimeoutError as exc:
            raise FeedTimeoutError(f"Timed out connecting to {self._url}") from exc
        except (OSError, InvalidURI, InvalidHandshake) as exc:
            raise FeedConnectionError(f"Cannot connect to {self._url}: {exc}") from exc
        return self._connection

    def fetch_laps(self) -> list[LapRecord]:
        """Send a GET_DATA query and return the whole lap history."""
        connection = self._ensure_connected()
        try:
            connection.send(_REQUEST)
            data = connection.recv(timeout=self._response_timeout)
        except TimeoutError as exc:
            # A late reply would be read as the answer to the next query
            self.close()
            raise FeedTimeoutError(f"No response from {self._url}") from exc
        except ConnectionClosed as exc:
            self._connection = None
            raise FeedConnectionError(f"Connection to {self._url} closed: {exc}") from exc
        return _parse_response(data)

    def close(self) -> None:
        """Close the underlying connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None


class AsyncFeedClient:
    """Asynchronous client for the lap feed.

    Usage:
        async with AsyncFeedClient("ws://localhost:3010/ws") as feed:
            laps = await feed.fetch_laps()
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        response_timeout: float = DEFAULT_RESPONSE_TIMEOUT,
    ) -> None:
        self._url = url
        self._open_timeout = open_timeout
        self._response_timeout = response_timeout
        self._connection: AsyncClientConnection | None = None

    async def __aenter__(self) -> AsyncFeedClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def _ensure_connected(self) -> AsyncClientConnection:
        if self._connection is not None:
            return self._connection
        get_logger().info("Connecting to feed at %s", self._url)
        try:
            self._connection = await async_connect(self._url, open_timeout=self._open_timeout)
        except TimeoutError as exc:
            raise FeedTimeoutError(f"Timed out connecting to {self._url}") from exc
        except (OSError, InvalidURI, InvalidHandshake) as exc:
            raise FeedConnectionError(f"Cannot connect to {self._url}: {exc}") from exc
        return self._connection

    async def fetch_laps(self) -> list[LapRecord]:
        """Send a GET_DATA query and return the whole lap history."""
        connection = await self._ensure_connected()
        try:
            await connection.send(_REQUEST)
            data = await asyncio.wait_for(connection.recv(), self._response_timeout)
        except TimeoutError as exc:
            await self.close()
            raise FeedTimeoutError(f"No response from {self._url}") from exc
        except ConnectionClosed as exc:
            self._connection = None
            raise FeedConnectionError(f"Connection to {self._url} closed: {exc}") from exc
        return _parse_response(data)

    async def close(self) -> None:
        """Close the underlying connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
