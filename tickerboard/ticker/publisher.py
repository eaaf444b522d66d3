"""Single-slot snapshot handoff between the feed and the render cadence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from threading import Lock

from .models import Snapshot, SortSpec
from .sorting import sort_records
from .store import TickerStore

logger = logging.getLogger(__name__)


class SnapshotPublisher:
    """Serves the latest coherent, sorted snapshot of a TickerStore.

    Nothing is queued: however many updates land between two pulls, the next
    pull reflects only the store state at that moment. A pull never waits on
    the feed; it copies the store (a short lock) and sorts outside of it.

    Usage:
        publisher = SnapshotPublisher(store)
        snapshot = publisher.pull()          # every render tick
        publisher.cycle_sort_column()        # on user input
    """

    def __init__(self, store: TickerStore, sort_spec: SortSpec | None = None) -> None:
        self._store = store
        self._sort_spec = sort_spec or SortSpec()
        self._latest: Snapshot | None = None
        self._previous: Snapshot | None = None
        self._lock = Lock()

    @property
    def store(self) -> TickerStore:
        return self._store

    @property
    def sort_spec(self) -> SortSpec:
        return self._sort_spec

    @sort_spec.setter
    def sort_spec(self, spec: SortSpec) -> None:
        self._sort_spec = spec

    def cycle_sort_column(self) -> SortSpec:
        self._sort_spec = self._sort_spec.cycled()
        return self._sort_spec

    def reverse_sort(self) -> SortSpec:
        self._sort_spec = self._sort_spec.toggled()
        return self._sort_spec

    @property
    def latest(self) -> Snapshot | None:
        """Most recently published snapshot, or None before the first pull."""
        return self._latest

    @property
    def previous(self) -> Snapshot | None:
        """The snapshot published before `latest`, kept for diffing."""
        return self._previous

    def pull(self) -> Snapshot:
        """Return the latest snapshot, rebuilding it if the store or sort changed."""
        with self._lock:
            spec = self._sort_spec
            # Read the version before copying: if a write lands in between, the
            # copy is newer than the recorded version and the next pull rebuilds.
            version = self._store.version
            latest = self._latest
            if latest is not None and latest.version == version and latest.sort_spec == spec:
                return latest

            records = sort_records(self._store.snapshot_all(), spec)
            snapshot = Snapshot(records=records, sort_spec=spec, version=version)
            self._previous, self._latest = latest, snapshot
            return snapshot

    async def ticks(self, interval: float = 0.25) -> AsyncGenerator[Snapshot, None]:
        """Yield a snapshot every `interval` seconds when something changed.

        The first tick always yields, even for an empty store.
        """
        last: Snapshot | None = None
        while True:
            snapshot = self.pull()
            if snapshot is not last:
                last = snapshot
                yield snapshot
            await asyncio.sleep(interval)
