"""Portfolio tab metrics (pure functions).

Average buy price and the 24h portfolio change are cosmetic: the ledger keeps
no cost history, so they are drawn from rng on every render. Pass a seeded
random.Random for repeatable output.
"""

from __future__ import annotations

import random
from decimal import Decimal
from typing import List, Optional

from crypto_trader.config.constants import REFERENCE_INVESTMENT
from crypto_trader.models.core import PortfolioRow, PortfolioSummary
from crypto_trader.services.ledger import Portfolio, portfolio_value
from crypto_trader.services.market import MarketDataStore


def _draw(rng: Optional[random.Random]) -> Decimal:
    r = rng if rng is not None else random
    return Decimal(str(r.random()))


def portfolio_rows(
    portfolio: Portfolio,
    market: MarketDataStore,
    rng: Optional[random.Random] = None,
) -> List[PortfolioRow]:
    """
    Build one row per holding for the Portfolio table.

    Holdings whose symbol is not in the market are left out, matching
    portfolio_value.

    Returns:
        List of PortfolioRow dicts in holding order.
    """
    rows: List[PortfolioRow] = []
    for holding in portfolio.holdings():
        instrument = market.get(holding.symbol)
        if instrument is None:
            continue
        value = holding.quantity * instrument.price
        avg_buy_price = instrument.price * (Decimal("0.9") + _draw(rng) * Decimal("0.2"))
        rows.append({
            "symbol": holding.symbol,
            "display_name": instrument.display_name,
            "quantity": holding.quantity,
            "price": instrument.price,
            "value": value,
            "avg_buy_price": avg_buy_price,
            "profit_loss": value - holding.quantity * avg_buy_price,
        })
    return rows


def portfolio_summary(
    portfolio: Portfolio,
    market: MarketDataStore,
    rng: Optional[random.Random] = None,
) -> PortfolioSummary:
    """Asset count, total value, cosmetic 24h change, and P/L vs the reference investment."""
    total_value = portfolio_value(portfolio, market)
    return {
        "asset_count": len(portfolio),
        "total_value": total_value,
        "change_24h_pct": _draw(rng) * 5 - 2,
        "profit_loss": total_value - REFERENCE_INVESTMENT,
    }
