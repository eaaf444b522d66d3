"""Factory for creating ticker feed sources."""

from __future__ import annotations

import logging
import os

from .interface import MarketDataSource
from .store import TickerStore

logger = logging.getLogger(__name__)


def create_market_data_source(
    store: TickerStore,
    simulator: bool | None = None,
    url: str | None = None,
) -> MarketDataSource:
    """Create the appropriate feed source.

    - simulator=True, or TICKER_FEED=simulator → SimulatorDataSource (GBM simulation)
    - Otherwise → LiveFeedSource on TICKER_FEED_URL (default: Binance futures)

    Explicit arguments win over the environment. Returns an unstarted source.
    Caller must await source.start(symbols).
    """
    if simulator is None:
        simulator = os.environ.get("TICKER_FEED", "").strip().lower() == "simulator"

    if simulator:
        from .simulator import SimulatorDataSource

        logger.info("Ticker feed: GBM simulator")
        return SimulatorDataSource(store=store)

    from .binance_client import DEFAULT_URL
    from .feed import LiveFeedSource

    url = url or os.environ.get("TICKER_FEED_URL", "").strip() or DEFAULT_URL
    logger.info("Ticker feed: live websocket %s", url)
    return LiveFeedSource(store=store, url=url)


def symbols_from_env() -> list[str] | None:
    """Parse TICKER_SYMBOLS ("BTCUSDT, ethusdt") into a list, or None if unset."""
    raw = os.environ.get("TICKER_SYMBOLS", "")
    symbols = [s.strip().upper() for s in raw.split(",") if s.strip()]
    return symbols or None
