"""Decode Binance 24hr ticker messages into UpdateEvents.

Wire format (``!ticker@arr`` / ``<symbol>@ticker``), numbers sent as strings:

    {"e": "24hrTicker", "E": 1707580800000, "s": "BTCUSDT",
     "p": "-12.5", "P": "-0.03", "c": "43012.1", "o": "43024.6",
     "h": "43500.0", "l": "42800.0", "v": "18234.1", "q": "785120034.2", ...}

The all-market stream sends a JSON array of these objects. Combined streams
wrap the payload as {"stream": "...", "data": ...}.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from .errors import ParseError
from .models import UpdateEvent

logger = logging.getLogger(__name__)


def parse_message(raw: str | bytes) -> list[UpdateEvent]:
    """Decode one websocket frame. Raises ParseError if nothing usable is in it.

    Individual bad entries inside an array are skipped and logged; the frame
    only fails as a whole when it is not JSON, has an unexpected shape, or
    every entry is bad.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParseError(f"invalid JSON: {e}", raw) from e

    if isinstance(data, dict) and "data" in data and "s" not in data:
        data = data["data"]

    if isinstance(data, dict):
        return [parse_ticker(data)]

    if not isinstance(data, list):
        raise ParseError(f"unexpected payload type {type(data).__name__}", raw)

    events: list[UpdateEvent] = []
    for item in data:
        try:
            events.append(parse_ticker(item))
        except ParseError as e:
            logger.debug("Skipping ticker entry: %s", e)
    if data and not events:
        raise ParseError(f"no valid entries in array of {len(data)}", raw)
    return events


def parse_ticker(item: Any) -> UpdateEvent:
    """Decode a single 24hr ticker object."""
    if not isinstance(item, dict):
        raise ParseError(f"ticker entry is {type(item).__name__}, expected object")

    symbol = item.get("s")
    if not isinstance(symbol, str) or not symbol.strip():
        raise ParseError(f"missing symbol in {item!r}")
    symbol = symbol.upper().strip()

    if item.get("c") is None:
        raise ParseError(f"{symbol}: missing last price")

    event_time = _number(item, "E", symbol)
    return UpdateEvent(
        symbol=symbol,
        price=_number(item, "c", symbol),
        volume=_number(item, "v", symbol, default=0.0),
        percent_change=_number(item, "P", symbol, default=0.0),
        open_price=_number(item, "o", symbol),
        high_price=_number(item, "h", symbol),
        low_price=_number(item, "l", symbol),
        quote_volume=_number(item, "q", symbol),
        # Binance event times are Unix milliseconds -> convert to seconds
        event_time=event_time / 1000.0 if event_time is not None else None,
    )


def _number(item: dict, key: str, symbol: str, default: float | None = None) -> float | None:
    value = item.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ParseError(f"{symbol}: field {key!r} is a boolean")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"{symbol}: field {key!r}={value!r} is not a number") from e
    if not math.isfinite(number):
        raise ParseError(f"{symbol}: field {key!r}={value!r} is not finite")
    return number
