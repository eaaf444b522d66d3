"""Thread-safe in-memory ticker table."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Iterable
from threading import Lock

from .errors import StateInvariantViolation
from .models import Direction, TickerRecord, UpdateEvent

logger = logging.getLogger(__name__)


class TickerStore:
    """Authoritative table of per-symbol ticker state.

    Writer: the feed source's event-application path (one at a time).
    Readers: SnapshotPublisher, the SSE stream, tests.

    Records are frozen and replaced whole under a short lock, so readers see
    each row either before or after an update. The lock is only held for the
    dict operation, never while sorting or rendering.
    """

    def __init__(self) -> None:
        self._records: dict[str, TickerRecord] = {}
        self._lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every apply

    def apply(self, event: UpdateEvent, now: float | None = None) -> TickerRecord:
        """Apply one update event. Returns the new record for the symbol.

        On first observation previous_price == price, so direction starts
        UNCHANGED. Reapplying an identical event also yields UNCHANGED.
        """
        ts = now if now is not None else time.time()
        with self._lock:
            prev = self._records.get(event.symbol)
            price = self._checked_price(event, prev)
            percent_change = _checked_stat(event, prev, "percent_change", "percent_change_24h")
            volume = _checked_stat(event, prev, "volume", "volume")

            if prev is None:
                previous_price = price
                update_count = 1
            else:
                previous_price = prev.last_price
                update_count = prev.update_count + 1
                # last_updated_at never goes backwards for a symbol
                ts = max(ts, prev.last_updated_at)

            record = TickerRecord(
                symbol=event.symbol,
                last_price=price,
                previous_price=previous_price,
                percent_change_24h=percent_change,
                volume=volume,
                direction=Direction.between(previous_price, price),
                last_updated_at=ts,
                open_price=_pick(event.open_price, prev, "open_price"),
                high_price=_pick(event.high_price, prev, "high_price"),
                low_price=_pick(event.low_price, prev, "low_price"),
                quote_volume=_pick(event.quote_volume, prev, "quote_volume"),
                update_count=update_count,
                event_time=_pick(event.event_time, prev, "event_time"),
            )
            self._records[event.symbol] = record
            self._version += 1
            return record

    def apply_many(self, events: Iterable[UpdateEvent]) -> int:
        """Apply events in order. Returns how many were applied."""
        count = 0
        for event in events:
            self.apply(event)
            count += 1
        return count

    def get(self, symbol: str) -> TickerRecord | None:
        """Latest record for a symbol, or None if never seen."""
        with self._lock:
            return self._records.get(symbol)

    def snapshot_all(self) -> tuple[TickerRecord, ...]:
        """Point-in-time copy of every record, in insertion order."""
        with self._lock:
            return tuple(self._records.values())

    def symbols(self) -> list[str]:
        with self._lock:
            return list(self._records)

    @property
    def version(self) -> int:
        """Current version counter. Used by the publisher for change detection."""
        return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._records

    # --- Internal ---

    @staticmethod
    def _checked_price(event: UpdateEvent, prev: TickerRecord | None) -> float:
        """Validate the event and return the best-effort price to store.

        Violations are logged, not raised: a partially wrong row is better
        than a stalled table.
        """
        price = event.price
        if not math.isfinite(price):
            _report(StateInvariantViolation(event.symbol, f"non-finite price {price!r}"))
            return prev.last_price if prev is not None else 0.0
        if price < 0:
            _report(StateInvariantViolation(event.symbol, f"negative price {price}"))
        return price


def _checked_stat(event: UpdateEvent, prev: TickerRecord | None, field: str, attr: str) -> float:
    """Validate a numeric stat; a non-finite value keeps the previous one (or 0.0)."""
    value = getattr(event, field)
    if not math.isfinite(value):
        _report(StateInvariantViolation(event.symbol, f"non-finite {field} {value!r}"))
        return getattr(prev, attr) if prev is not None else 0.0
    if value < 0 and field == "volume":
        _report(StateInvariantViolation(event.symbol, f"negative volume {value}"))
    return value


def _pick(value: float | None, prev: TickerRecord | None, attr: str) -> float | None:
    """Use the event's value, falling back to the previous record's."""
    if value is not None:
        return value
    return getattr(prev, attr) if prev is not None else None


def _report(violation: StateInvariantViolation) -> None:
    logger.warning("State invariant violation: %s", violation)
