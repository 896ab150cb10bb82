"""Global configuration constants for CryptoTrader.

These values are intentionally free of any UI / Tkinter concerns so they
can be reused by services, tests, and the desktop application.
"""

from __future__ import annotations

import os
from decimal import Decimal

# --- Ledger ---
STARTING_BALANCE = Decimal("10000.00")

# A holding whose quantity drops to this or below after a sell is removed
HOLDING_EPSILON = Decimal("0.00001")

# Largest amount accepted in the trade form; keeps price * quantity in Decimal range
MAX_QUANTITY = Decimal("1000000000000000")

# Amount the seeded portfolio is considered to have cost (Profit/Loss stat)
REFERENCE_INVESTMENT = Decimal("8500.00")

# --- Market seed data ---
# (symbol, name, price USD, 24h change %, circulating supply, all-time high)
SEED_INSTRUMENTS = [
    ("BTC", "Bitcoin", "42568.30", "2.5", "19000000", "69000"),
    ("ETH", "Ethereum", "2298.45", "-1.2", None, None),
    ("BNB", "Binance Coin", "312.78", "0.8", None, None),
    ("ADA", "Cardano", "0.48", "3.2", None, None),
    ("SOL", "Solana", "102.35", "-0.5", None, None),
    ("XRP", "Ripple", "0.52", "1.7", None, None),
]

SEED_HOLDINGS = {
    "BTC": "0.05",
    "ETH": "1.2",
    "ADA": "500",
}

# --- Market info panel multipliers ---
DAY_HIGH_FACTOR = Decimal("1.05")
DAY_LOW_FACTOR = Decimal("0.95")
DAY_VOLUME_FACTOR = Decimal("1000000")

# --- Window ---
APP_TITLE = "CryptoTrader - Simple Trading Platform"
APP_NAME = "CryptoTrader"
WINDOW_GEOMETRY = "960x680"
WINDOW_MIN_SIZE = (800, 600)
THEME_NAME = "darkly"
FOOTER_LEFT = "© 2023 CryptoTrader - Educational Project"
FOOTER_RIGHT = "Simulated market data only"

# --- Logging ---
LOG_LEVEL = os.getenv("CRYPTO_TRADER_LOG_LEVEL", "INFO").strip().upper() or "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
