"""
Ticker table TUI using Textual.

Displays:
- Top: status line (feed state, row count, active sort, feed time)
- Middle: ticker table, prices colored by direction
- Bottom: key help

The table is redrawn from a fresh snapshot every tick; key presses are
handled by Textual as they arrive, independently of the tick timer.
"""

from __future__ import annotations

import time

from rich.console import RenderableType
from rich.style import Style
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import DataTable, Static

from ..ticker.interface import FeedStatus, MarketDataSource
from ..ticker.models import Direction, Snapshot, SortColumn, SortSpec, TickerRecord
from .dashboard import Dashboard
from .palettes import DOWN_COLOR, UNCHANGED_COLOR, UP_COLOR, TablePalette

INFO_TEXT = (
    "(Esc/q) quit | (↑/k) up | (↓/j) down | (→/l) next color | (←/h) previous color"
    " | (s) sort column | (r) reverse sort"
)

# (column key, header title, sort column it maps to)
COLUMNS: list[tuple[str, str, SortColumn | None]] = [
    ("symbol", "Symbol", SortColumn.SYMBOL),
    ("last", "Last", SortColumn.PRICE),
    ("change", "Change %", SortColumn.CHANGE),
    ("open", "Open", None),
    ("high", "High", None),
    ("low", "Low", None),
    ("volume", "Volume", SortColumn.VOLUME),
]

DIRECTION_COLORS = {
    Direction.UP: UP_COLOR,
    Direction.DOWN: DOWN_COLOR,
    Direction.UNCHANGED: UNCHANGED_COLOR,
}

DIRECTION_ARROWS = {
    Direction.UP: "▲",
    Direction.DOWN: "▼",
    Direction.UNCHANGED: " ",
}


def format_price(price: float | None) -> str:
    """Format a price with precision that suits its magnitude."""
    if price is None:
        return "-"
    if price >= 1000:
        return f"{price:,.2f}"
    elif price >= 1:
        return f"{price:.4f}"
    else:
        return f"{price:.6f}"


def format_volume(volume: float) -> str:
    """Format volume for display."""
    if volume >= 1_000_000_000:
        return f"{volume/1_000_000_000:.2f}B"
    elif volume >= 1_000_000:
        return f"{volume/1_000_000:.2f}M"
    elif volume >= 1000:
        return f"{volume/1000:.1f}K"
    else:
        return f"{volume:.2f}"


def column_labels(spec: SortSpec, palette: TablePalette) -> list[Text]:
    """Header labels; the active sort column carries ▲ or ▼."""
    style = Style(color=palette.header_fg, bgcolor=palette.header_bg, bold=True)
    labels = []
    for _, title, column in COLUMNS:
        if column is spec.column:
            title = f"{title} {'▲' if spec.ascending else '▼'}"
        labels.append(Text(title, style=style))
    return labels


def row_cells(record: TickerRecord, index: int, palette: TablePalette) -> list[Text]:
    """Cells for one row, striped by position and colored by direction."""
    bg = palette.normal_row_bg if index % 2 == 0 else palette.alt_row_bg
    plain = Style(color=palette.row_fg, bgcolor=bg)
    moved = Style(color=DIRECTION_COLORS[record.direction], bgcolor=bg)
    change = record.percent_change_24h
    change_color = UP_COLOR if change > 0 else (DOWN_COLOR if change < 0 else UNCHANGED_COLOR)

    return [
        Text(record.symbol, style=plain),
        Text(
            f"{DIRECTION_ARROWS[record.direction]} {format_price(record.last_price)}",
            style=moved,
            justify="right",
        ),
        Text(f"{change:+.2f}%", style=Style(color=change_color, bgcolor=bg), justify="right"),
        Text(format_price(record.open_price), style=plain, justify="right"),
        Text(format_price(record.high_price), style=plain, justify="right"),
        Text(format_price(record.low_price), style=plain, justify="right"),
        Text(format_volume(record.volume), style=plain, justify="right"),
    ]


class TickerTable(DataTable):
    """Main ticker table widget.

    The row cursor follows Dashboard.selected and is scrolled into view on
    every redraw. The widget never takes focus, so every key reaches the app.
    """

    can_focus = False

    DEFAULT_CSS = """
    TickerTable {
        width: 100%;
        height: 1fr;
    }
    """

    def __init__(self, dashboard: Dashboard) -> None:
        super().__init__(cursor_type="row", id="ticker-table")
        self._dashboard = dashboard
        self._shown: Snapshot | None = None
        self._shown_palette: int | None = None

    def update_snapshot(self, snapshot: Snapshot) -> None:
        palette_index = self._dashboard.palette_index
        if snapshot is not self._shown or palette_index != self._shown_palette:
            self._rebuild(snapshot, self._dashboard.palette)
            self._shown = snapshot
            self._shown_palette = palette_index

        selected = self._dashboard.selected
        self.show_cursor = selected is not None
        if selected is not None:
            self.move_cursor(row=selected, animate=False)

    def _rebuild(self, snapshot: Snapshot, palette: TablePalette) -> None:
        self.clear(columns=True)
        for (key, _, _), label in zip(COLUMNS, column_labels(snapshot.sort_spec, palette)):
            self.add_column(label, key=key)
        for i, record in enumerate(snapshot.records):
            self.add_row(*row_cells(record, i, palette), key=record.symbol)


class StatusBar(Static):
    """Status line: feed state, row count, active sort and feed time."""

    DEFAULT_CSS = """
    StatusBar {
        dock: top;
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(self, source: MarketDataSource | None) -> None:
        super().__init__()
        self._source = source
        self._snapshot: Snapshot | None = None

    def update_snapshot(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.refresh()

    def render(self) -> RenderableType:
        status = self._source.status if self._source else FeedStatus.IDLE
        status_style = "bold green" if status is FeedStatus.CONNECTED else "bold yellow"
        result = Text()
        result.append(f" {status.value.upper()} ", style=f"{status_style} reverse")
        if self._snapshot is not None:
            spec = self._snapshot.sort_spec
            result.append(f"  {len(self._snapshot)} symbols", style="dim")
            result.append(
                f"  │  sort: {spec.column.value} {'asc' if spec.ascending else 'desc'}",
                style="dim",
            )
            feed_time = self._snapshot.feed_time
            if feed_time is not None:
                clock = time.strftime("%H:%M:%S", time.localtime(feed_time))
                result.append(f"  │  feed {clock}", style="dim")
        return result


class TickerApp(App):
    """Render loop: pulls a snapshot every tick and redraws."""

    CSS = """
    #help {
        dock: bottom;
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        dashboard: Dashboard,
        source: MarketDataSource | None = None,
        tick_interval: float = 0.25,
    ) -> None:
        super().__init__()
        self.dashboard = dashboard
        self._source = source
        self._tick_interval = tick_interval
        self._status_bar: StatusBar | None = None
        self._table: TickerTable | None = None

    def compose(self) -> ComposeResult:
        self._status_bar = StatusBar(self._source)
        self._table = TickerTable(self.dashboard)

        yield self._status_bar
        yield self._table
        yield Static(Text(INFO_TEXT, style="dim"), id="help")

    def on_mount(self) -> None:
        self._redraw()
        self.set_interval(self._tick_interval, self._redraw)

    def on_key(self, event: events.Key) -> None:
        if self.dashboard.handle_key(event.key):
            event.stop()
            if not self.dashboard.running:
                self.exit()
                return
            self._redraw()

    def _redraw(self) -> None:
        snapshot = self.dashboard.snapshot()
        self.screen.styles.background = self.dashboard.palette.buffer_bg
        if self._status_bar:
            self._status_bar.update_snapshot(snapshot)
        if self._table:
            self._table.update_snapshot(snapshot)
