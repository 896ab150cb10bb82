"""Application bootstrap and core API entrypoints for CryptoTrader.

Provides a small core API (create_session, list_instruments, snapshot) for
use by the desktop UI, tests, or scripts. None of it imports Tkinter; the
GUI is only loaded by main().
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from crypto_trader.models.core import Instrument
from crypto_trader.services.ledger import Portfolio, TradeDesk
from crypto_trader.services.market import MarketDataStore


def create_session() -> TradeDesk:
    """Build a TradeDesk with the seeded market and starting portfolio."""
    return TradeDesk(Portfolio.seeded(), MarketDataStore())


def list_instruments(desk: TradeDesk) -> List[Instrument]:
    """Return the session's instruments in display order."""
    return list(desk.market.instruments())


def snapshot(desk: TradeDesk) -> Dict[str, Any]:
    """Plain-dict view of the ledger (cash, holdings, valuation).

    Returns:
        Dict with keys: cash_balance, holdings ({symbol: quantity}), portfolio_value.
    """
    holdings: Dict[str, Decimal] = {h.symbol: h.quantity for h in desk.portfolio.holdings()}
    return {
        "cash_balance": desk.portfolio.cash_balance,
        "holdings": holdings,
        "portfolio_value": desk.portfolio_value(),
    }


def main() -> None:
    """Configure logging and launch the Tkinter application."""
    from crypto_trader.config.logging_setup import configure_logging
    from crypto_trader.ui import main_window  # Deferred so core API is usable without GUI deps

    configure_logging()
    main_window.main()
