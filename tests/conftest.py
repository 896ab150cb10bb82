"""Pytest configuration: ensure src is on path when running tests from repo root."""

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
if _src.is_dir() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from crypto_trader.services.ledger import Portfolio, TradeDesk  # noqa: E402
from crypto_trader.services.market import MarketDataStore  # noqa: E402


@pytest.fixture
def market() -> MarketDataStore:
    return MarketDataStore()


@pytest.fixture
def portfolio() -> Portfolio:
    """Seeded portfolio: $10,000 cash, 0.05 BTC, 1.2 ETH, 500 ADA."""
    return Portfolio.seeded()


@pytest.fixture
def desk(portfolio: Portfolio, market: MarketDataStore) -> TradeDesk:
    return TradeDesk(portfolio, market)
