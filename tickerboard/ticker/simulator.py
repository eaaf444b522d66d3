"""GBM-based ticker simulator for running without a network feed."""

from __future__ import annotations

import asyncio
import logging
import math
import random

import numpy as np

from .interface import FeedStatus, MarketDataSource
from .models import UpdateEvent
from .seed_prices import (
    CORRELATION_GROUPS,
    CROSS_GROUP_CORR,
    DEFAULT_PARAMS,
    DEFAULT_VOLUME,
    DOGE_CORR,
    INTRA_ALTS_CORR,
    INTRA_MAJORS_CORR,
    SEED_PRICES,
    SEED_VOLUMES,
    SYMBOL_PARAMS,
)
from .store import TickerStore

logger = logging.getLogger(__name__)


class GBMSimulator:
    """Geometric Brownian Motion simulator for correlated crypto prices.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where:
        S(t)   = current price
        mu     = annualized drift (expected return)
        sigma  = annualized volatility
        dt     = time step as a fraction of a (24/7) year
        Z      = correlated standard normal random variable

    The 24h percent change is derived from each symbol's session open price,
    and volume accumulates from the seed volume in proportion to the move.
    """

    # Crypto trades around the clock: 365 days * 24 hours * 3600 seconds
    SECONDS_PER_YEAR = 365 * 24 * 3600  # 31,536,000
    DEFAULT_DT = 0.5 / SECONDS_PER_YEAR  # ~1.59e-8

    def __init__(
        self,
        symbols: list[str],
        dt: float = DEFAULT_DT,
        event_probability: float = 0.001,
    ) -> None:
        self._dt = dt
        self._event_prob = event_probability

        # Per-symbol state
        self._symbols: list[str] = []
        self._prices: dict[str, float] = {}
        self._opens: dict[str, float] = {}
        self._highs: dict[str, float] = {}
        self._lows: dict[str, float] = {}
        self._volumes: dict[str, float] = {}
        self._params: dict[str, dict[str, float]] = {}

        # Cholesky decomposition of the correlation matrix (for correlated moves)
        self._cholesky: np.ndarray | None = None

        for symbol in symbols:
            self._add_symbol(symbol)
        self._rebuild_cholesky()

    # --- Public API ---

    def step(self) -> list[UpdateEvent]:
        """Advance all symbols by one time step. Returns one event per symbol."""
        n = len(self._symbols)
        if n == 0:
            return []

        z_independent = np.random.standard_normal(n)
        if self._cholesky is not None:
            z_correlated = self._cholesky @ z_independent
        else:
            z_correlated = z_independent

        events: list[UpdateEvent] = []
        for i, symbol in enumerate(self._symbols):
            params = self._params[symbol]
            mu = params["mu"]
            sigma = params["sigma"]

            drift = (mu - 0.5 * sigma**2) * self._dt
            diffusion = sigma * math.sqrt(self._dt) * z_correlated[i]
            self._prices[symbol] *= math.exp(drift + diffusion)

            # Random event: liquidation cascade / listing pump
            if random.random() < self._event_prob:
                shock_magnitude = random.uniform(0.02, 0.08)
                shock_sign = random.choice([-1, 1])
                self._prices[symbol] *= 1 + shock_magnitude * shock_sign
                logger.debug(
                    "Random event on %s: %.1f%% %s",
                    symbol,
                    shock_magnitude * 100,
                    "up" if shock_sign > 0 else "down",
                )

            price = self._prices[symbol]
            self._highs[symbol] = max(self._highs[symbol], price)
            self._lows[symbol] = min(self._lows[symbol], price)
            # Bigger moves trade more
            seed_volume = SEED_VOLUMES.get(symbol, DEFAULT_VOLUME)
            self._volumes[symbol] += seed_volume * 1e-5 * (1.0 + abs(float(z_correlated[i])))

            events.append(self._event(symbol))

        return events

    def current_events(self) -> list[UpdateEvent]:
        """Events describing the current state, without stepping."""
        return [self._event(symbol) for symbol in self._symbols]

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)

    # --- Internals ---

    def _event(self, symbol: str) -> UpdateEvent:
        price = self._prices[symbol]
        open_price = self._opens[symbol]
        return UpdateEvent(
            symbol=symbol,
            price=price,
            volume=round(self._volumes[symbol], 3),
            percent_change=round((price - open_price) / open_price * 100, 3),
            open_price=open_price,
            high_price=self._highs[symbol],
            low_price=self._lows[symbol],
            quote_volume=round(self._volumes[symbol] * price, 2),
        )

    def _add_symbol(self, symbol: str) -> None:
        """Add a symbol; the caller rebuilds the Cholesky matrix afterwards."""
        if symbol in self._prices:
            return
        seed = SEED_PRICES.get(symbol, random.uniform(0.5, 500.0))
        self._symbols.append(symbol)
        self._prices[symbol] = seed
        self._opens[symbol] = seed
        self._highs[symbol] = seed
        self._lows[symbol] = seed
        self._volumes[symbol] = SEED_VOLUMES.get(symbol, DEFAULT_VOLUME)
        self._params[symbol] = SYMBOL_PARAMS.get(symbol, dict(DEFAULT_PARAMS))

    def _rebuild_cholesky(self) -> None:
        """Rebuild the Cholesky decomposition of the symbol correlation matrix.

        Called once the symbol set is known. O(n^2) but n is small.
        """
        n = len(self._symbols)
        if n <= 1:
            self._cholesky = None
            return

        corr = np.eye(n)
        for i in range(n):
            for j in range(i + 1, n):
                rho = self._pairwise_correlation(self._symbols[i], self._symbols[j])
                corr[i, j] = rho
                corr[j, i] = rho

        self._cholesky = np.linalg.cholesky(corr)

    @staticmethod
    def _pairwise_correlation(s1: str, s2: str) -> float:
        """Determine correlation between two symbols based on grouping.

        Correlation structure:
          - Both majors:        0.8
          - Both alts:          0.6
          - DOGE with anything: 0.3
          - Everything else:    0.5
        """
        majors = CORRELATION_GROUPS["majors"]
        alts = CORRELATION_GROUPS["alts"]

        if s1 == "DOGEUSDT" or s2 == "DOGEUSDT":
            return DOGE_CORR

        if s1 in majors and s2 in majors:
            return INTRA_MAJORS_CORR
        if s1 in alts and s2 in alts:
            return INTRA_ALTS_CORR

        return CROSS_GROUP_CORR


class SimulatorDataSource(MarketDataSource):
    """MarketDataSource backed by the GBM simulator.

    Runs a background asyncio task that calls GBMSimulator.step() every
    `update_interval` seconds and applies the events to the TickerStore.
    """

    def __init__(
        self,
        store: TickerStore,
        update_interval: float = 0.5,
        event_probability: float = 0.001,
    ) -> None:
        self._store = store
        self._interval = update_interval
        self._event_prob = event_probability
        self._sim: GBMSimulator | None = None
        self._task: asyncio.Task | None = None
        self._status = FeedStatus.IDLE

    async def start(self, symbols: list[str] | None = None) -> None:
        if symbols is None:
            symbols = list(SEED_PRICES)
        symbols = [s.upper().strip() for s in symbols]
        self._sim = GBMSimulator(
            symbols=symbols,
            event_probability=self._event_prob,
        )
        # Seed the store with initial prices so the first frame has rows
        self._store.apply_many(self._sim.current_events())
        self._task = asyncio.create_task(self._run_loop(), name="simulator-loop")
        self._status = FeedStatus.CONNECTED
        logger.info("Simulator started with %d symbols", len(symbols))

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._status = FeedStatus.STOPPED
        logger.info("Simulator stopped")

    def get_symbols(self) -> list[str]:
        return self._sim.symbols if self._sim else []

    @property
    def status(self) -> FeedStatus:
        return self._status

    async def _run_loop(self) -> None:
        """Core loop: step the simulation, apply to the store, sleep."""
        while True:
            try:
                if self._sim:
                    self._store.apply_many(self._sim.step())
            except Exception:
                logger.exception("Simulator step failed")
            await asyncio.sleep(self._interval)
