"""tickerboard - live, sortable crypto ticker table for the terminal.

Architecture:
- ticker/: feed client, ticker store, sort engine, snapshot publisher
- ui/: keyboard actions and the Textual render loop
"""

__version__ = "0.1.0"
