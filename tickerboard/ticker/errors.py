"""Exception taxonomy for the ticker engine.

Network and parse failures are contained inside the feed layer: the
coordinator catches FeedConnectionError and Disconnected and reconnects, the
client discards messages that raise ParseError. StateInvariantViolation is
logged by the store and never raised out of it.
"""

from __future__ import annotations


class TickerError(Exception):
    """Base class for ticker engine errors."""


class FeedConnectionError(TickerError, ConnectionError):
    """Connection refused, handshake failure or connect timeout."""


class Disconnected(TickerError):
    """The transport closed after a successful connect."""


class ParseError(TickerError, ValueError):
    """A single feed message could not be decoded into update events."""

    def __init__(self, message: str, raw: str | bytes | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class StateInvariantViolation(TickerError):
    """An update carried values that break a record invariant (e.g. negative price)."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"{symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason
