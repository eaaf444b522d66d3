"""Tests for ticker data models."""

import pytest

from tickerboard.ticker.models import (
    Direction,
    Snapshot,
    SortColumn,
    SortSpec,
    TickerRecord,
    UpdateEvent,
)


class TestDirection:
    """Unit tests for Direction.between."""

    def test_up(self):
        """Test a rising price."""
        assert Direction.between(100.0, 101.0) is Direction.UP

    def test_down(self):
        """Test a falling price."""
        assert Direction.between(100.0, 99.0) is Direction.DOWN

    def test_unchanged(self):
        """Test an unchanged price."""
        assert Direction.between(100.0, 100.0) is Direction.UNCHANGED


class TestTickerRecord:
    """Unit tests for the TickerRecord model."""

    def test_record_creation(self):
        """Test basic TickerRecord creation."""
        record = TickerRecord(
            symbol="BTCUSDT", last_price=105.0, previous_price=100.0, last_updated_at=1234567890.0
        )
        assert record.symbol == "BTCUSDT"
        assert record.last_price == 105.0
        assert record.previous_price == 100.0
        assert record.last_updated_at == 1234567890.0
        assert record.update_count == 1

    def test_change_calculation(self):
        """Test price change calculation."""
        record = TickerRecord(symbol="BTCUSDT", last_price=100.5, previous_price=100.0)
        assert record.change == 0.5

    def test_change_negative(self):
        """Test negative price change."""
        record = TickerRecord(symbol="BTCUSDT", last_price=99.5, previous_price=100.0)
        assert record.change == -0.5

    def test_to_dict(self):
        """Test serialization to dictionary."""
        record = TickerRecord(
            symbol="BTCUSDT",
            last_price=105.0,
            previous_price=100.0,
            percent_change_24h=-1.25,
            volume=1500.0,
            direction=Direction.UP,
            last_updated_at=1234567890.0,
        )
        result = record.to_dict()

        assert result["symbol"] == "BTCUSDT"
        assert result["last_price"] == 105.0
        assert result["previous_price"] == 100.0
        assert result["change"] == 5.0
        assert result["percent_change_24h"] == -1.25
        assert result["volume"] == 1500.0
        assert result["direction"] == "up"
        assert result["last_updated_at"] == 1234567890.0
        assert result["open_price"] is None

    def test_immutability(self):
        """Test that TickerRecord is immutable."""
        record = TickerRecord(symbol="BTCUSDT", last_price=105.0, previous_price=100.0)

        with pytest.raises(AttributeError):
            record.last_price = 200.0  # Should raise error


class TestUpdateEvent:
    """Unit tests for UpdateEvent."""

    def test_defaults(self):
        """Test that optional fields default sensibly."""
        event = UpdateEvent(symbol="ETHUSDT", price=3000.0)
        assert event.volume == 0.0
        assert event.percent_change == 0.0
        assert event.open_price is None
        assert event.event_time is None

    def test_immutability(self):
        """Test that UpdateEvent is immutable."""
        event = UpdateEvent(symbol="ETHUSDT", price=3000.0)
        with pytest.raises(AttributeError):
            event.price = 1.0


class TestSortSpec:
    """Unit tests for SortSpec navigation."""

    def test_default(self):
        """Test the default sort is symbol ascending."""
        spec = SortSpec()
        assert spec.column is SortColumn.SYMBOL
        assert spec.ascending is True

    def test_toggled(self):
        """Test that toggling flips only the direction."""
        spec = SortSpec(column=SortColumn.PRICE, ascending=True).toggled()
        assert spec == SortSpec(column=SortColumn.PRICE, ascending=False)

    def test_toggled_twice_is_identity(self):
        """Test that toggling twice returns the original spec."""
        spec = SortSpec(column=SortColumn.VOLUME, ascending=False)
        assert spec.toggled().toggled() == spec

    def test_cycle_order(self):
        """Test Symbol -> Price -> Change -> Volume -> Symbol."""
        spec = SortSpec()
        seen = []
        for _ in range(4):
            spec = spec.cycled()
            seen.append(spec.column)
        assert seen == [
            SortColumn.PRICE,
            SortColumn.CHANGE,
            SortColumn.VOLUME,
            SortColumn.SYMBOL,
        ]

    def test_cycle_keeps_direction(self):
        """Test that cycling the column keeps the direction."""
        spec = SortSpec(ascending=False).cycled()
        assert spec.ascending is False


class TestSnapshot:
    """Unit tests for Snapshot."""

    def _snapshot(self) -> Snapshot:
        return Snapshot(
            records=(
                TickerRecord(symbol="BTCUSDT", last_price=100.0, previous_price=100.0),
                TickerRecord(symbol="ETHUSDT", last_price=10.0, previous_price=9.0),
            ),
            sort_spec=SortSpec(),
            version=7,
            taken_at=1234567890.0,
        )

    def test_len_and_iter(self):
        """Test container protocol."""
        snapshot = self._snapshot()
        assert len(snapshot) == 2
        assert [r.symbol for r in snapshot] == ["BTCUSDT", "ETHUSDT"]

    def test_get(self):
        """Test lookup by symbol."""
        snapshot = self._snapshot()
        assert snapshot.get("ETHUSDT").last_price == 10.0
        assert snapshot.get("NOPE") is None

    def test_to_dict(self):
        """Test serialization keeps order and sort spec."""
        result = self._snapshot().to_dict()
        assert result["version"] == 7
        assert result["sort"] == {"column": "symbol", "ascending": True}
        assert [r["symbol"] for r in result["records"]] == ["BTCUSDT", "ETHUSDT"]

    def test_immutability(self):
        """Test that Snapshot is immutable."""
        snapshot = self._snapshot()
        with pytest.raises(AttributeError):
            snapshot.records = ()

    def test_feed_time(self):
        """Test the latest feed-reported time across rows."""
        assert self._snapshot().feed_time is None
        snapshot = Snapshot(
            records=(
                TickerRecord(symbol="BTCUSDT", last_price=1.0, previous_price=1.0, event_time=20.0),
                TickerRecord(symbol="ETHUSDT", last_price=1.0, previous_price=1.0),
                TickerRecord(symbol="SOLUSDT", last_price=1.0, previous_price=1.0, event_time=30.0),
            ),
            sort_spec=SortSpec(),
        )
        assert snapshot.feed_time == 30.0
