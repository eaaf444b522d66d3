"""Color palettes for the ticker table (Tailwind shades)."""

from typing import NamedTuple

SLATE_950 = "#020617"
SLATE_900 = "#0f172a"
SLATE_200 = "#e2e8f0"

UP_COLOR = "#22c55e"      # Green
DOWN_COLOR = "#ef4444"    # Red
UNCHANGED_COLOR = SLATE_200


class TablePalette(NamedTuple):
    """Colors for one table theme."""
    name: str
    buffer_bg: str
    header_bg: str
    header_fg: str
    row_fg: str
    selected_fg: str
    normal_row_bg: str
    alt_row_bg: str
    footer_border: str


def _palette(name: str, c900: str, c400: str) -> TablePalette:
    return TablePalette(
        name=name,
        buffer_bg=SLATE_950,
        header_bg=c900,
        header_fg=SLATE_200,
        row_fg=SLATE_200,
        selected_fg=c400,
        normal_row_bg=SLATE_950,
        alt_row_bg=SLATE_900,
        footer_border=c400,
    )


PALETTES: tuple[TablePalette, ...] = (
    _palette("blue", "#1e3a8a", "#60a5fa"),
    _palette("emerald", "#064e3b", "#34d399"),
    _palette("indigo", "#312e81", "#818cf8"),
    _palette("red", "#7f1d1d", "#f87171"),
)
