"""Abstract interface for ticker feed sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class FeedStatus(str, Enum):
    """Connection state shown in the dashboard status line."""

    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    STOPPED = "stopped"


class MarketDataSource(ABC):
    """Contract for ticker feed providers.

    Implementations apply UpdateEvents to a shared TickerStore on their own
    schedule. The render path never calls the source for prices; it pulls
    snapshots built from the store.

    Lifecycle:
        source = create_market_data_source(store)
        await source.start(["BTCUSDT", "ETHUSDT"])   # or None for everything
        # ... app runs ...
        await source.stop()
    """

    @abstractmethod
    async def start(self, symbols: list[str] | None = None) -> None:
        """Begin producing updates, optionally restricted to `symbols`.

        Starts a background task that writes to the TickerStore.
        Must be called exactly once. Calling start() twice is undefined behavior.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop the background task and release resources.

        Safe to call multiple times. After stop(), the source will not write
        to the store again.
        """

    @abstractmethod
    def get_symbols(self) -> list[str]:
        """Return the symbol allow-list, or an empty list when unrestricted."""

    @property
    @abstractmethod
    def status(self) -> FeedStatus:
        """Current connection state."""
