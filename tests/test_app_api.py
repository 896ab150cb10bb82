"""Tests for app core API (create_session, list_instruments, snapshot)."""

import logging
from decimal import Decimal

import pytest

from crypto_trader.app import create_session, list_instruments, snapshot
from crypto_trader.config.logging_setup import configure_logging
from crypto_trader.models.core import TradeSide


def test_create_session_is_seeded() -> None:
    desk = create_session()
    assert [i.symbol for i in list_instruments(desk)] == ["BTC", "ETH", "BNB", "ADA", "SOL", "XRP"]
    snap = snapshot(desk)
    assert snap["cash_balance"] == Decimal("10000.00")
    assert snap["holdings"] == {"BTC": Decimal("0.05"), "ETH": Decimal("1.2"), "ADA": Decimal("500")}
    assert snap["portfolio_value"] == Decimal("5126.555")


def test_sessions_are_independent() -> None:
    """Each session owns its own portfolio; no module-level state is shared."""
    a = create_session()
    b = create_session()
    a.submit("ADA", "500", TradeSide.SELL)
    assert "ADA" not in snapshot(a)["holdings"]
    assert snapshot(b)["holdings"]["ADA"] == Decimal("500")


def test_configure_logging_levels() -> None:
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")
    assert logging.getLogger().level == logging.WARNING
    with pytest.raises(ValueError):
        configure_logging("chatty")
