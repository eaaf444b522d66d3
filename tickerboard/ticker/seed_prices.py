"""Seed prices and per-symbol parameters for the ticker simulator."""

# Rough starting prices for the default symbol set (USDT-quoted perpetuals)
SEED_PRICES: dict[str, float] = {
    "BTCUSDT": 64000.00,
    "ETHUSDT": 3100.00,
    "BNBUSDT": 580.00,
    "SOLUSDT": 145.00,
    "XRPUSDT": 0.52,
    "ADAUSDT": 0.45,
    "AVAXUSDT": 28.00,
    "LINKUSDT": 14.50,
    "DOGEUSDT": 0.12,
    "CHZUSDT": 0.075,
}

# Per-symbol GBM parameters
# sigma: annualized volatility (crypto trades 24/7, so these are large)
# mu: annualized drift / expected return
SYMBOL_PARAMS: dict[str, dict[str, float]] = {
    "BTCUSDT": {"sigma": 0.55, "mu": 0.10},
    "ETHUSDT": {"sigma": 0.70, "mu": 0.10},
    "BNBUSDT": {"sigma": 0.60, "mu": 0.08},
    "SOLUSDT": {"sigma": 0.95, "mu": 0.10},
    "XRPUSDT": {"sigma": 0.85, "mu": 0.05},
    "ADAUSDT": {"sigma": 0.85, "mu": 0.05},
    "AVAXUSDT": {"sigma": 0.95, "mu": 0.05},
    "LINKUSDT": {"sigma": 0.90, "mu": 0.05},
    "DOGEUSDT": {"sigma": 1.10, "mu": 0.05},  # Meme coin, very volatile
    "CHZUSDT": {"sigma": 1.00, "mu": 0.03},
}

# Default parameters for symbols not in the list above
DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.90, "mu": 0.05}

# Typical 24h base-asset volume, used to seed and scale simulated volume
SEED_VOLUMES: dict[str, float] = {
    "BTCUSDT": 180_000.0,
    "ETHUSDT": 2_100_000.0,
    "BNBUSDT": 650_000.0,
    "SOLUSDT": 9_500_000.0,
    "XRPUSDT": 1_200_000_000.0,
    "ADAUSDT": 700_000_000.0,
    "AVAXUSDT": 14_000_000.0,
    "LINKUSDT": 25_000_000.0,
    "DOGEUSDT": 4_500_000_000.0,
    "CHZUSDT": 900_000_000.0,
}
DEFAULT_VOLUME = 1_000_000.0

# Correlation groups for the simulator's Cholesky decomposition
CORRELATION_GROUPS: dict[str, set[str]] = {
    "majors": {"BTCUSDT", "ETHUSDT", "BNBUSDT"},
    "alts": {"SOLUSDT", "XRPUSDT", "ADAUSDT", "AVAXUSDT", "LINKUSDT", "CHZUSDT"},
}

# Correlation coefficients
INTRA_MAJORS_CORR = 0.8  # Majors move together
INTRA_ALTS_CORR = 0.6  # Alts follow each other
CROSS_GROUP_CORR = 0.5  # Alts still follow BTC
DOGE_CORR = 0.3  # DOGE does its own thing
