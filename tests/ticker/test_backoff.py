"""Tests for Backoff."""

import pytest

from tickerboard.ticker.backoff import Backoff


class TestBackoff:
    """Unit tests for the reconnect delay schedule."""

    def test_default_schedule(self):
        """1s, 2s, 4s, ... capped at 30s."""
        backoff = Backoff()
        delays = [backoff.next_delay() for _ in range(8)]
        assert delays == [1.0, 2.0, 4.0, 8.0, 16.0, 30.0, 30.0, 30.0]

    def test_unlimited_attempts(self):
        """There is no retry limit."""
        backoff = Backoff()
        for _ in range(1000):
            assert backoff.next_delay() <= 30.0
        assert backoff.attempts == 1000

    def test_reset(self):
        """A successful connect restarts the schedule."""
        backoff = Backoff()
        backoff.next_delay()
        backoff.next_delay()
        backoff.reset()
        assert backoff.attempts == 0
        assert backoff.next_delay() == 1.0

    def test_custom_schedule(self):
        """Test custom initial, factor and cap."""
        backoff = Backoff(initial=0.5, factor=3.0, maximum=5.0)
        assert [backoff.next_delay() for _ in range(4)] == [0.5, 1.5, 4.5, 5.0]

    def test_initial_above_maximum_is_capped(self):
        """Test that the cap applies to the first delay too."""
        assert Backoff(initial=60.0, maximum=30.0).next_delay() == 30.0

    @pytest.mark.parametrize("kwargs", [{"initial": 0}, {"initial": -1}, {"factor": 0.5}])
    def test_invalid_arguments(self, kwargs):
        """Test that nonsensical schedules are rejected."""
        with pytest.raises(ValueError):
            Backoff(**kwargs)
