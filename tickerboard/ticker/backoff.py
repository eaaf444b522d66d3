"""Exponential reconnect delays."""

from __future__ import annotations


class Backoff:
    """Doubling delay schedule with a cap: 1, 2, 4, 8, 16, 30, 30, ...

    There is no retry limit; callers keep asking for delays until a
    connection succeeds and then call reset().
    """

    def __init__(self, initial: float = 1.0, factor: float = 2.0, maximum: float = 30.0) -> None:
        if initial <= 0:
            raise ValueError(f"initial delay must be > 0, got {initial}")
        if factor < 1:
            raise ValueError(f"factor must be >= 1, got {factor}")
        self._initial = float(initial)
        self._factor = float(factor)
        self._maximum = float(maximum)
        self._current = self._initial
        self.attempts = 0

    def next_delay(self) -> float:
        """Delay to wait before the next attempt. Advances the schedule."""
        delay = min(self._current, self._maximum)
        self._current = min(self._current * self._factor, self._maximum)
        self.attempts += 1
        return delay

    def reset(self) -> None:
        self._current = self._initial
        self.attempts = 0
