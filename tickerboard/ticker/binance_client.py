"""Binance websocket client for the 24hr ticker stream."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable

import aiohttp

from .errors import Disconnected, FeedConnectionError, ParseError
from .models import UpdateEvent
from .parser import parse_message

logger = logging.getLogger(__name__)

# All-market 24hr ticker array on Binance USD-M futures, pushed every ~1s
DEFAULT_URL = "wss://fstream.binance.com/ws/!ticker@arr"


class BinanceFeedClient:
    """Owns one websocket connection and turns its frames into UpdateEvents.

    The client does not reconnect by itself and never touches the store; the
    owning LiveFeedSource drives connect/consume/backoff.

    Usage:
        client = BinanceFeedClient()
        await client.connect()             # FeedConnectionError on failure
        async for event in client.next_event():
            ...                            # Disconnected when the socket ends
        await client.close()
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        connect_timeout: float = 10.0,
        symbols: Iterable[str] | None = None,
        heartbeat: float | None = 30.0,
    ) -> None:
        self.url = url
        self._connect_timeout = connect_timeout
        self._heartbeat = heartbeat
        self._symbols = {s.upper().strip() for s in symbols} if symbols else None
        self._session: aiohttp.ClientSession | None = None
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self.discarded: int = 0  # Malformed frames dropped since creation

    async def connect(self) -> None:
        """Open the websocket. Only this step is bounded by a timeout."""
        await self.close()
        session = aiohttp.ClientSession()
        try:
            self._ws = await asyncio.wait_for(
                session.ws_connect(self.url, heartbeat=self._heartbeat),
                timeout=self._connect_timeout,
            )
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            await session.close()
            raise FeedConnectionError(f"cannot connect to {self.url}: {e!r}") from e
        self._session = session
        logger.info("Connected to %s", self.url)

    async def next_event(self) -> AsyncIterator[UpdateEvent]:
        """Yield update events until the connection ends, then raise Disconnected.

        Malformed frames are logged and skipped. The iterator cannot be
        restarted; reconnect and call next_event() again instead.
        """
        ws = self._ws
        if ws is None:
            raise Disconnected("next_event() called before connect()")

        while True:
            try:
                msg = await ws.receive()
            except aiohttp.ClientError as e:
                raise Disconnected(f"receive failed: {e!r}") from e

            if msg.type == aiohttp.WSMsgType.TEXT:
                raw = msg.data
            elif msg.type == aiohttp.WSMsgType.BINARY:
                raw = msg.data.decode("utf-8", errors="replace")
            elif msg.type == aiohttp.WSMsgType.ERROR:
                raise Disconnected(f"websocket error: {ws.exception()!r}")
            elif msg.type in (
                aiohttp.WSMsgType.CLOSE,
                aiohttp.WSMsgType.CLOSING,
                aiohttp.WSMsgType.CLOSED,
            ):
                raise Disconnected(f"websocket closed (code={ws.close_code})")
            else:
                continue

            for event in self._decode(raw):
                yield event

    async def close(self) -> None:
        """Close the websocket and session. Safe to call multiple times."""
        ws, session = self._ws, self._session
        self._ws = None
        self._session = None
        if ws is not None and not ws.closed:
            await ws.close()
        if session is not None and not session.closed:
            await session.close()

    # --- Internal ---

    def _decode(self, raw: str) -> list[UpdateEvent]:
        try:
            events = parse_message(raw)
        except ParseError as e:
            self.discarded += 1
            logger.warning("Discarding malformed message: %s", e)
            return []
        if self._symbols is None:
            return events
        return [event for event in events if event.symbol in self._symbols]
