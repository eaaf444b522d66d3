"""Dashboard state driven by keyboard actions."""

from __future__ import annotations

import logging
from enum import Enum

from ..ticker.models import Snapshot, SortSpec
from ..ticker.publisher import SnapshotPublisher
from .palettes import PALETTES, TablePalette

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    RUNNING = "running"
    QUIT = "quit"


class Dashboard:
    """Everything the render loop needs besides the rows themselves.

    Sort changes go straight to the publisher, so the next pull reflects them.
    Row selection is a plain index into the latest snapshot and wraps at both
    ends.
    """

    KEYMAP: dict[str, str] = {
        "q": "quit",
        "escape": "quit",
        "j": "next_row",
        "down": "next_row",
        "k": "previous_row",
        "up": "previous_row",
        "l": "next_palette",
        "right": "next_palette",
        "h": "previous_palette",
        "left": "previous_palette",
        "s": "cycle_sort_column",
        "r": "reverse_sort",
    }

    def __init__(self, publisher: SnapshotPublisher, palette_index: int = 2) -> None:
        self.publisher = publisher
        self.mode = Mode.RUNNING
        self.selected: int | None = None
        self.palette_index = palette_index % len(PALETTES)

    @property
    def running(self) -> bool:
        return self.mode is Mode.RUNNING

    @property
    def palette(self) -> TablePalette:
        return PALETTES[self.palette_index]

    @property
    def sort_spec(self) -> SortSpec:
        return self.publisher.sort_spec

    def snapshot(self) -> Snapshot:
        """Pull the snapshot for this tick and keep the selection in range."""
        snapshot = self.publisher.pull()
        if self.selected is not None and self.selected >= len(snapshot):
            self.selected = len(snapshot) - 1 if len(snapshot) else None
        return snapshot

    def handle_key(self, key: str) -> bool:
        """Run the action bound to `key`. Returns False for unbound keys."""
        action = self.KEYMAP.get(key)
        if action is None:
            return False
        getattr(self, action)()
        return True

    # --- Actions ---

    def quit(self) -> None:
        self.mode = Mode.QUIT

    def next_row(self) -> None:
        count = self._row_count()
        if count == 0:
            self.selected = None
        elif self.selected is None or self.selected >= count - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous_row(self) -> None:
        count = self._row_count()
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = count - 1
        else:
            self.selected -= 1

    def next_palette(self) -> None:
        self.palette_index = (self.palette_index + 1) % len(PALETTES)

    def previous_palette(self) -> None:
        count = len(PALETTES)
        self.palette_index = (self.palette_index + count - 1) % count

    def cycle_sort_column(self) -> None:
        spec = self.publisher.cycle_sort_column()
        logger.debug("Sort column -> %s", spec.column.value)

    def reverse_sort(self) -> None:
        spec = self.publisher.reverse_sort()
        logger.debug("Sort ascending -> %s", spec.ascending)

    def _row_count(self) -> int:
        latest = self.publisher.latest or self.publisher.pull()
        return len(latest)
