"""Real-time ticker engine for tickerboard.

Public API:
    UpdateEvent         - Immutable price update decoded from the feed
    TickerRecord        - Immutable per-symbol state row
    SortSpec            - Selected sort column and direction
    Snapshot            - Immutable, sorted, point-in-time table copy
    TickerStore         - Thread-safe in-memory ticker table
    SnapshotPublisher   - Latest-snapshot handoff for the render loop
    sort_records        - Deterministic ordering of records
    MarketDataSource    - Abstract interface for feed sources
    create_market_data_source - Factory that selects live feed or simulator
    create_stream_router - FastAPI router factory for the SSE endpoint
"""

from .factory import create_market_data_source
from .interface import FeedStatus, MarketDataSource
from .models import Direction, Snapshot, SortColumn, SortSpec, TickerRecord, UpdateEvent
from .publisher import SnapshotPublisher
from .sorting import sort_records
from .store import TickerStore
from .stream import create_stream_router

__all__ = [
    "Direction",
    "FeedStatus",
    "MarketDataSource",
    "Snapshot",
    "SnapshotPublisher",
    "SortColumn",
    "SortSpec",
    "TickerRecord",
    "TickerStore",
    "UpdateEvent",
    "create_market_data_source",
    "create_stream_router",
    "sort_records",
]
