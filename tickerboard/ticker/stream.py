"""SSE streaming endpoint for published ticker snapshots."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import StreamingResponse

from .publisher import SnapshotPublisher

logger = logging.getLogger(__name__)


def create_stream_router(publisher: SnapshotPublisher, interval: float = 0.5) -> APIRouter:
    """Create the SSE streaming router with a reference to the publisher.

    This factory pattern lets us inject the publisher without globals.
    """
    router = APIRouter(prefix="/api/stream", tags=["streaming"])

    @router.get("/tickers")
    async def stream_tickers(request: Request) -> StreamingResponse:
        """SSE endpoint for the live ticker table.

        Sends the whole sorted snapshot whenever it changes, in the format:

            data: {"version": 42, "sort": {...}, "records": [{"symbol": "BTCUSDT", ...}, ...]}

        Includes a retry directive so EventSource clients auto-reconnect.
        """
        return StreamingResponse(
            _generate_events(publisher, request, interval),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def create_app(publisher: SnapshotPublisher) -> FastAPI:
    """Minimal FastAPI app exposing the snapshot stream."""
    app = FastAPI(title="tickerboard")
    app.include_router(create_stream_router(publisher))
    return app


async def _generate_events(
    publisher: SnapshotPublisher,
    request: Request,
    interval: float = 0.5,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted snapshot events.

    Follows publisher.ticks(), so a snapshot is sent only when it changed.
    Empty snapshots are skipped. Stops when the client disconnects; while the
    table is idle the ASGI server cancels the stream on disconnect instead.
    """
    # Tell the client to retry after 1 second if the connection drops
    yield "retry: 1000\n\n"

    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    ticks = publisher.ticks(interval)
    try:
        async for snapshot in ticks:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break
            if len(snapshot):
                yield f"data: {json.dumps(snapshot.to_dict())}\n\n"
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
    finally:
        await ticks.aclose()
