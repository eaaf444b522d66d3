"""Pytest configuration and fixtures."""

import pytest

from tickerboard.ticker.models import UpdateEvent
from tickerboard.ticker.publisher import SnapshotPublisher
from tickerboard.ticker.store import TickerStore


@pytest.fixture
def store():
    """An empty ticker store."""
    return TickerStore()


@pytest.fixture
def publisher(store):
    """A publisher over the `store` fixture, default sort (symbol ascending)."""
    return SnapshotPublisher(store)


@pytest.fixture
def make_event():
    """Factory for UpdateEvents with sensible defaults."""

    def _make(symbol: str = "BTCUSDT", price: float = 100.0, **kwargs) -> UpdateEvent:
        return UpdateEvent(symbol=symbol, price=price, **kwargs)

    return _make
