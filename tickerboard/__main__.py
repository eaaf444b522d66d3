#!/usr/bin/env python3
"""
tickerboard - live, sortable crypto ticker table for the terminal.

Usage:
    python -m tickerboard
    python -m tickerboard --simulator
    python -m tickerboard --symbols BTCUSDT,ETHUSDT,SOLUSDT --tick 0.5
    python -m tickerboard --serve 127.0.0.1:8000     # headless SSE stream

Controls:
    q / Esc     - Quit
    ↑ ↓ / k j   - Move selection
    ← → / h l   - Previous / next color palette
    s           - Cycle sort column (Symbol, Price, Change, Volume)
    r           - Reverse sort
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .ticker.factory import create_market_data_source, symbols_from_env
from .ticker.publisher import SnapshotPublisher
from .ticker.store import TickerStore

logger = logging.getLogger("tickerboard")


async def main(args: argparse.Namespace) -> int:
    """Wire store, feed source and render loop together. Returns the exit code."""
    store = TickerStore()
    publisher = SnapshotPublisher(store)
    source = create_market_data_source(
        store,
        simulator=True if args.simulator else None,
        url=args.url,
    )
    symbols = _parse_symbols(args.symbols) if args.symbols else symbols_from_env()

    await source.start(symbols)
    try:
        if args.serve:
            await _serve(publisher, args.serve)
        else:
            from .ui.app import TickerApp
            from .ui.dashboard import Dashboard

            app = TickerApp(Dashboard(publisher), source=source, tick_interval=args.tick)
            await app.run_async()
            if app.return_code:
                logger.error("Terminal UI exited with code %s", app.return_code)
                return 1
    finally:
        await source.stop()
    return 0


async def _serve(publisher: SnapshotPublisher, address: str) -> None:
    import uvicorn

    from .ticker.stream import create_app

    host, _, port = address.rpartition(":")
    config = uvicorn.Config(create_app(publisher), host=host or "127.0.0.1", port=int(port))
    await uvicorn.Server(config).serve()


def _parse_symbols(raw: str) -> list[str]:
    return [s.strip().upper() for s in raw.split(",") if s.strip()]


def cli() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="tickerboard - live crypto ticker table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    TICKER_FEED=simulator   use the GBM simulator instead of the live feed
    TICKER_FEED_URL         websocket URL of the live feed
    TICKER_SYMBOLS          comma-separated symbol allow-list
        """,
    )
    parser.add_argument(
        "--simulator",
        action="store_true",
        help="Use the offline GBM simulator instead of the live feed",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Websocket URL of the live feed (default: Binance futures !ticker@arr)",
    )
    parser.add_argument(
        "--symbols",
        default=None,
        help="Comma-separated symbols to show (default: all)",
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=0.25,
        help="Render interval in seconds (default: 0.25)",
    )
    parser.add_argument(
        "--serve",
        metavar="HOST:PORT",
        default=None,
        help="Serve the snapshot SSE stream instead of running the terminal UI",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        default="tickerboard.log",
        help="Log file while the terminal UI owns the screen (default: tickerboard.log)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        # The terminal belongs to the UI; only log to stderr when headless
        filename=None if args.serve else args.log_file,
    )

    try:
        code = asyncio.run(main(args))
    except KeyboardInterrupt:
        code = 0
    except Exception:
        logger.exception("Startup failed")
        print("tickerboard: startup failed, see log for details", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    cli()
