"""Deterministic ordering of ticker records."""

from __future__ import annotations

from collections.abc import Iterable

from .models import SortColumn, SortSpec, TickerRecord


def sort_key(record: TickerRecord, column: SortColumn) -> str | float:
    """Primary sort key for a record under the given column.

    CHANGE sorts by the signed 24h percentage, not by the direction
    indicator, which is display-only.
    """
    if column is SortColumn.SYMBOL:
        return record.symbol
    if column is SortColumn.PRICE:
        return record.last_price
    if column is SortColumn.CHANGE:
        return record.percent_change_24h
    return record.volume


def sort_records(records: Iterable[TickerRecord], spec: SortSpec) -> tuple[TickerRecord, ...]:
    """Order records by spec.column, ties broken by symbol ascending.

    The tie-break ignores spec.ascending, so reversing the direction reverses
    the sequence everywhere except inside runs of equal keys.
    """
    # Two stable passes: symbol first, then the primary key in the requested
    # direction. Python's sort keeps the symbol order among equal keys.
    by_symbol = sorted(records, key=lambda r: r.symbol)
    if spec.column is SortColumn.SYMBOL:
        return tuple(by_symbol if spec.ascending else reversed(by_symbol))
    return tuple(
        sorted(by_symbol, key=lambda r: sort_key(r, spec.column), reverse=not spec.ascending)
    )


def next_column(column: SortColumn) -> SortColumn:
    """Column after `column` in Symbol -> Price -> Change -> Volume -> Symbol order."""
    return column.next()
