"""WebSocket server exposing the lap feed."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from mocktimer._logging import get_logger
from mocktimer.config import WS_PATH, Settings
from mocktimer.feed import RaceFeed
from mocktimer.protocol import encode_response, handle_message


async def _tick_forever(feed: RaceFeed, interval: float) -> None:
    """Generate one lap every *interval* seconds until cancelled.

    A failed tick is logged and the loop carries on with the next one.
    """
    logger = get_logger()
    while True:
        await asyncio.sleep(interval)
        try:
            feed.tick()
        except Exception:
            logger.exception("Lap generation failed")


def create_app(feed: RaceFeed, tick_interval: float | None = None) -> FastAPI:
    """Build the FastAPI app serving *feed* on the WebSocket endpoint.

    When *tick_interval* is given, a background task generates a lap at that
    cadence for the lifetime of the app.
    """
    logger = get_logger()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        task: asyncio.Task[None] | None = None
        if tick_interval is not None and tick_interval > 0:
            task = asyncio.create_task(_tick_forever(feed, tick_interval))
            logger.info("Generating a lap every %.1fs", tick_interval)
        try:
            yield
        finally:
            if task is not None:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            logger.info("Feed stopped with %d laps stored", len(feed.store))

    app = FastAPI(title="mocktimer", lifespan=lifespan)
    app.state.feed = feed

    @app.websocket(WS_PATH)
    async def lap_feed(websocket: WebSocket) -> None:
        await websocket.accept()
        logger.info("Client connected: %s", websocket.client)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                # Binary frames are answered like text ones
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes") or b""
                response = handle_message(raw, feed.store)
                await websocket.send_text(encode_response(response))
        except WebSocketDisconnect as exc:
            logger.debug("Connection dropped with code %s", exc.code)
        finally:
            logger.info("Client disconnected: %s", websocket.client)

    return app


def run(settings: Settings) -> None:
    """Load the race definitions and serve the feed until interrupted."""
    logger = get_logger(settings.log_level)
    feed = RaceFeed.from_settings(settings)
    app = create_app(feed, tick_interval=settings.tick_interval)

    logger.info("Server listening on port %d", settings.port)
    logger.info("WebSocket endpoint: ws://localhost:%d%s", settings.port, WS_PATH)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
