"""Live websocket feed source: connect, consume, back off, reconnect."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .backoff import Backoff
from .binance_client import DEFAULT_URL, BinanceFeedClient
from .errors import Disconnected, FeedConnectionError
from .interface import FeedStatus, MarketDataSource
from .store import TickerStore

logger = logging.getLogger(__name__)


class LiveFeedSource(MarketDataSource):
    """MarketDataSource backed by a BinanceFeedClient.

    Runs a background asyncio task that applies every received event to the
    TickerStore in arrival order. A dropped or refused connection is never
    fatal: the task waits out the backoff delay and reconnects, forever, and
    the store keeps its rows (frozen at their last values) in the meantime.
    """

    def __init__(
        self,
        store: TickerStore,
        url: str = DEFAULT_URL,
        connect_timeout: float = 10.0,
        backoff: Backoff | None = None,
        client_factory: Callable[[list[str] | None], BinanceFeedClient] | None = None,
    ) -> None:
        self._store = store
        self._url = url
        self._connect_timeout = connect_timeout
        self._backoff = backoff or Backoff()
        self._client_factory = client_factory or self._default_client
        self._client: BinanceFeedClient | None = None
        self._symbols: list[str] = []
        self._task: asyncio.Task | None = None
        self._status = FeedStatus.IDLE
        self.connects: int = 0  # Successful connections, reconnects included

    async def start(self, symbols: list[str] | None = None) -> None:
        self._symbols = [s.upper().strip() for s in symbols or []]
        self._client = self._client_factory(self._symbols or None)
        self._task = asyncio.create_task(self._run_loop(self._client), name="ticker-feed")
        logger.info(
            "Live feed started: %s (%s)",
            self._url,
            f"{len(self._symbols)} symbols" if self._symbols else "all symbols",
        )

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        if self._client is not None:
            await self._client.close()
        self._status = FeedStatus.STOPPED
        logger.info("Live feed stopped")

    def get_symbols(self) -> list[str]:
        return list(self._symbols)

    @property
    def status(self) -> FeedStatus:
        return self._status

    # --- Internal ---

    def _default_client(self, symbols: list[str] | None) -> BinanceFeedClient:
        return BinanceFeedClient(
            url=self._url,
            connect_timeout=self._connect_timeout,
            symbols=symbols,
        )

    async def _run_loop(self, client: BinanceFeedClient) -> None:
        """Connect/consume until cancelled. Only stop() ends this loop."""
        self._status = FeedStatus.CONNECTING

        while True:
            try:
                await client.connect()
            except FeedConnectionError as e:
                logger.warning("Connect failed: %s", e)
                await self._wait_before_retry()
                continue

            self._backoff.reset()
            self._status = FeedStatus.CONNECTED
            self.connects += 1

            try:
                # apply() is synchronous, so a cancel can only land between
                # events, never halfway through one.
                async for event in client.next_event():
                    self._store.apply(event)
            except Disconnected as e:
                logger.warning("Feed disconnected: %s", e)
            except Exception:
                logger.exception("Feed loop failed; reconnecting")
            finally:
                await client.close()

            await self._wait_before_retry()

    async def _wait_before_retry(self) -> None:
        self._status = FeedStatus.RECONNECTING
        delay = self._backoff.next_delay()
        logger.info("Reconnecting in %.1fs (attempt %d)", delay, self._backoff.attempts)
        await asyncio.sleep(delay)
