"""Data models for the ticker engine."""

from __future__ import annotations

import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class Direction(str, Enum):
    """Sign of the last price move for a symbol."""

    UP = "up"
    DOWN = "down"
    UNCHANGED = "unchanged"

    @classmethod
    def between(cls, previous: float, current: float) -> Direction:
        if current > previous:
            return cls.UP
        elif current < previous:
            return cls.DOWN
        return cls.UNCHANGED


class SortColumn(str, Enum):
    """Sortable table columns, in cycling order."""

    SYMBOL = "symbol"
    PRICE = "price"
    CHANGE = "change"
    VOLUME = "volume"

    def next(self) -> SortColumn:
        members = list(SortColumn)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True, slots=True)
class UpdateEvent:
    """One typed price update decoded from the feed."""

    symbol: str
    price: float
    volume: float = 0.0
    percent_change: float = 0.0
    open_price: float | None = None
    high_price: float | None = None
    low_price: float | None = None
    quote_volume: float | None = None
    event_time: float | None = None  # Unix seconds, as reported by the feed


@dataclass(frozen=True, slots=True)
class TickerRecord:
    """Immutable state of a single symbol after the latest applied update.

    The store replaces the whole record on every update, so a reader holding a
    record always sees it either before or after an update, never half-written.
    """

    symbol: str
    last_price: float
    previous_price: float
    percent_change_24h: float = 0.0
    volume: float = 0.0
    direction: Direction = Direction.UNCHANGED
    last_updated_at: float = field(default_factory=time.time)  # Unix seconds
    open_price: float | None = None
    high_price: float | None = None
    low_price: float | None = None
    quote_volume: float | None = None
    update_count: int = 1
    event_time: float | None = None  # Feed-reported time of the latest update

    @property
    def change(self) -> float:
        """Absolute price change from the previous update."""
        return self.last_price - self.previous_price

    def to_dict(self) -> dict:
        """Serialize for JSON / SSE transmission."""
        return {
            "symbol": self.symbol,
            "last_price": self.last_price,
            "previous_price": self.previous_price,
            "change": self.change,
            "percent_change_24h": self.percent_change_24h,
            "volume": self.volume,
            "direction": self.direction.value,
            "last_updated_at": self.last_updated_at,
            "open_price": self.open_price,
            "high_price": self.high_price,
            "low_price": self.low_price,
            "quote_volume": self.quote_volume,
            "update_count": self.update_count,
            "event_time": self.event_time,
        }


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Selected sort column and direction. Replaced, never mutated."""

    column: SortColumn = SortColumn.SYMBOL
    ascending: bool = True

    def toggled(self) -> SortSpec:
        """Same column, reversed direction."""
        return SortSpec(column=self.column, ascending=not self.ascending)

    def cycled(self) -> SortSpec:
        """Next column in Symbol -> Price -> Change -> Volume order, same direction."""
        return SortSpec(column=self.column.next(), ascending=self.ascending)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable, ordered, point-in-time copy of every record."""

    records: tuple[TickerRecord, ...]
    sort_spec: SortSpec
    version: int = 0
    taken_at: float = field(default_factory=time.time)

    def get(self, symbol: str) -> TickerRecord | None:
        for record in self.records:
            if record.symbol == symbol:
                return record
        return None

    def symbols(self) -> list[str]:
        return [record.symbol for record in self.records]

    @property
    def feed_time(self) -> float | None:
        """Latest feed-reported event time across all rows, if any."""
        times = [r.event_time for r in self.records if r.event_time is not None]
        return max(times) if times else None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TickerRecord]:
        return iter(self.records)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "taken_at": self.taken_at,
            "sort": {"column": self.sort_spec.column.value, "ascending": self.sort_spec.ascending},
            "records": [record.to_dict() for record in self.records],
        }
