"""Terminal UI for tickerboard: keyboard actions and the Textual render loop."""

from .dashboard import Dashboard, Mode
from .palettes import PALETTES, TablePalette

__all__ = ["Dashboard", "Mode", "PALETTES", "TablePalette"]
