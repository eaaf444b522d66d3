"""Tests for ticker feed source factory."""

import os
from unittest.mock import patch

from tickerboard.ticker.binance_client import DEFAULT_URL
from tickerboard.ticker.factory import create_market_data_source, symbols_from_env
from tickerboard.ticker.feed import LiveFeedSource
from tickerboard.ticker.simulator import SimulatorDataSource
from tickerboard.ticker.store import TickerStore


class TestFactory:
    """Tests for create_market_data_source factory."""

    def test_creates_live_feed_by_default(self):
        """Test that the live feed is created when TICKER_FEED is not set."""
        store = TickerStore()

        with patch.dict(os.environ, {}, clear=True):
            source = create_market_data_source(store)

        assert isinstance(source, LiveFeedSource)
        assert source._url == DEFAULT_URL

    def test_creates_simulator_from_env(self):
        """Test that TICKER_FEED=simulator selects the simulator."""
        store = TickerStore()

        with patch.dict(os.environ, {"TICKER_FEED": " Simulator "}, clear=True):
            source = create_market_data_source(store)

        assert isinstance(source, SimulatorDataSource)

    def test_other_feed_value_is_live(self):
        """Test that unknown TICKER_FEED values fall back to the live feed."""
        store = TickerStore()

        with patch.dict(os.environ, {"TICKER_FEED": "binance"}, clear=True):
            source = create_market_data_source(store)

        assert isinstance(source, LiveFeedSource)

    def test_explicit_simulator_wins(self):
        """Test that the argument overrides the environment."""
        store = TickerStore()

        with patch.dict(os.environ, {"TICKER_FEED": "live"}, clear=True):
            source = create_market_data_source(store, simulator=True)

        assert isinstance(source, SimulatorDataSource)

    def test_explicit_live_wins(self):
        """Test that simulator=False ignores TICKER_FEED=simulator."""
        store = TickerStore()

        with patch.dict(os.environ, {"TICKER_FEED": "simulator"}, clear=True):
            source = create_market_data_source(store, simulator=False)

        assert isinstance(source, LiveFeedSource)

    def test_url_from_env(self):
        """Test that TICKER_FEED_URL overrides the default URL."""
        store = TickerStore()

        with patch.dict(os.environ, {"TICKER_FEED_URL": "wss://example.test/ws"}, clear=True):
            source = create_market_data_source(store)

        assert source._url == "wss://example.test/ws"

    def test_url_argument_wins(self):
        """Test that the url argument overrides TICKER_FEED_URL."""
        store = TickerStore()

        with patch.dict(os.environ, {"TICKER_FEED_URL": "wss://env.test/ws"}, clear=True):
            source = create_market_data_source(store, url="wss://arg.test/ws")

        assert source._url == "wss://arg.test/ws"

    def test_sources_receive_store(self):
        """Test that both sources receive the store reference."""
        store = TickerStore()

        with patch.dict(os.environ, {}, clear=True):
            live = create_market_data_source(store)
            sim = create_market_data_source(store, simulator=True)

        assert live._store is store
        assert sim._store is store


class TestSymbolsFromEnv:
    """Tests for TICKER_SYMBOLS parsing."""

    def test_unset(self):
        """Test that an unset variable means no allow-list."""
        with patch.dict(os.environ, {}, clear=True):
            assert symbols_from_env() is None

    def test_blank(self):
        """Test that a blank variable means no allow-list."""
        with patch.dict(os.environ, {"TICKER_SYMBOLS": " , "}, clear=True):
            assert symbols_from_env() is None

    def test_parsed_and_normalized(self):
        """Test comma splitting, stripping and upper-casing."""
        with patch.dict(os.environ, {"TICKER_SYMBOLS": "btcusdt, ETHUSDT ,sol"}, clear=True):
            assert symbols_from_env() == ["BTCUSDT", "ETHUSDT", "SOL"]
