"""Tests for the portfolio ledger and trade execution."""

from decimal import Decimal

import pytest

from crypto_trader.models.core import TradeSide
from crypto_trader.models.errors import (
    InsufficientFunds,
    InsufficientHoldings,
    InvalidInput,
    TradeError,
    UnknownInstrument,
)
from crypto_trader.services.ledger import (
    INVALID_PREVIEW,
    Portfolio,
    TradeDesk,
    execute_trade,
    parse_quantity,
    portfolio_value,
    preview_total,
)


def _state(portfolio: Portfolio):
    return portfolio.cash_balance, {h.symbol: h.quantity for h in portfolio.holdings()}


def test_seeded_portfolio() -> None:
    """Seeded portfolio opens with $10,000 and three holdings."""
    p = Portfolio.seeded()
    assert p.cash_balance == Decimal("10000.00")
    assert p.holding("BTC") == Decimal("0.05")
    assert p.holding("ETH") == Decimal("1.2")
    assert p.holding("ADA") == Decimal("500")
    assert p.holding("SOL") == 0
    assert len(p) == 3


def test_portfolio_rejects_negative_balance() -> None:
    with pytest.raises(ValueError):
        Portfolio(Decimal("-1"))


def test_buy_btc_example(market) -> None:
    """Balance 10000, buy 0.1 BTC at 42568.30 -> cost 4256.83, balance 5743.17."""
    p = Portfolio(Decimal("10000"))
    conf = execute_trade(p, market, "BTC", "0.1", TradeSide.BUY)
    assert conf.total == Decimal("4256.83")
    assert conf.side is TradeSide.BUY
    assert conf.quantity == Decimal("0.1")
    assert conf.price == Decimal("42568.30")
    assert p.cash_balance == Decimal("5743.17")
    assert conf.cash_balance == p.cash_balance
    assert p.holding("BTC") == Decimal("0.1")


def test_buy_adds_to_existing_holding(portfolio, market) -> None:
    execute_trade(portfolio, market, "ETH", "0.8", "Buy")
    assert portfolio.holding("ETH") == Decimal("2.0")
    assert portfolio.cash_balance == Decimal("10000.00") - Decimal("2298.45") * Decimal("0.8")


def test_buy_spending_entire_balance_is_allowed(market) -> None:
    p = Portfolio(Decimal("48"))
    execute_trade(p, market, "ADA", "100", TradeSide.BUY)
    assert p.cash_balance == 0
    assert p.holding("ADA") == Decimal("100")


def test_sell_all_ada_removes_holding(portfolio, market) -> None:
    """Holding 500 ADA, sell 500 at 0.48 -> balance +240.00 and ADA removed."""
    before = portfolio.cash_balance
    conf = execute_trade(portfolio, market, "ADA", "500", TradeSide.SELL)
    assert conf.total == Decimal("240.00")
    assert portfolio.cash_balance == before + Decimal("240.00")
    assert not portfolio.has_holding("ADA")
    assert "ADA" not in {h.symbol for h in portfolio.holdings()}


def test_partial_sell_keeps_holding(portfolio, market) -> None:
    execute_trade(portfolio, market, "ETH", "0.2", "sell")
    assert portfolio.holding("ETH") == Decimal("1.0")
    assert portfolio.cash_balance == Decimal("10000.00") + Decimal("459.69")


def test_sell_leaving_dust_removes_holding(market) -> None:
    """A remainder at or below 0.00001 is removed, not kept as a zero-ish holding."""
    p = Portfolio(Decimal("0"), {"BTC": "1"})
    execute_trade(p, market, "BTC", "0.99999", TradeSide.SELL)
    assert not p.has_holding("BTC")

    p = Portfolio(Decimal("0"), {"BTC": "1"})
    execute_trade(p, market, "BTC", "0.99998", TradeSide.SELL)
    assert p.holding("BTC") == Decimal("0.00002")


@pytest.mark.parametrize("text", ["0.000001", "0.00001"])
def test_tiny_buy_keeps_holding(market, text) -> None:
    """Buys below the dust threshold still credit the holding they paid for."""
    p = Portfolio(Decimal("10000"))
    qty = Decimal(text)
    execute_trade(p, market, "BTC", text, TradeSide.BUY)
    assert p.holding("BTC") == qty
    assert p.cash_balance == Decimal("10000") - Decimal("42568.30") * qty


def test_tiny_buy_then_sell_round_trip(market) -> None:
    p = Portfolio(Decimal("10000"))
    execute_trade(p, market, "BTC", "0.000001", TradeSide.BUY)
    execute_trade(p, market, "BTC", "0.000001", TradeSide.SELL)
    assert p.cash_balance == Decimal("10000")
    assert not p.has_holding("BTC")


@pytest.mark.parametrize("side", [TradeSide.BUY, TradeSide.SELL])
@pytest.mark.parametrize("text", ["1e999999", "1e16", "1000000000000001"])
def test_oversized_quantity_is_invalid_input(portfolio, market, side, text) -> None:
    """Huge but finite amounts are rejected as input errors, not arithmetic errors."""
    before = _state(portfolio)
    with pytest.raises(InvalidInput):
        execute_trade(portfolio, market, "BTC", text, side)
    assert _state(portfolio) == before


def test_buy_insufficient_funds_leaves_state(portfolio, market) -> None:
    before = _state(portfolio)
    with pytest.raises(InsufficientFunds) as excinfo:
        execute_trade(portfolio, market, "BTC", "1", TradeSide.BUY)
    assert "Insufficient funds" in str(excinfo.value)
    assert "$10,000.00" in str(excinfo.value)
    assert _state(portfolio) == before


def test_sell_insufficient_holdings_leaves_state(portfolio, market) -> None:
    before = _state(portfolio)
    with pytest.raises(InsufficientHoldings) as excinfo:
        execute_trade(portfolio, market, "ADA", "500.5", TradeSide.SELL)
    assert "Cardano (ADA)" in str(excinfo.value)
    with pytest.raises(InsufficientHoldings):
        execute_trade(portfolio, market, "SOL", "1", TradeSide.SELL)
    assert _state(portfolio) == before


@pytest.mark.parametrize("side", [TradeSide.BUY, TradeSide.SELL])
@pytest.mark.parametrize("text", ["abc", "", "   ", "0", "-1", "-0.5", "nan", "inf", "1,5"])
def test_invalid_quantity_leaves_state(portfolio, market, side, text) -> None:
    before = _state(portfolio)
    with pytest.raises(InvalidInput):
        execute_trade(portfolio, market, "ADA", text, side)
    assert _state(portfolio) == before


def test_unknown_symbol_and_side(portfolio, market) -> None:
    before = _state(portfolio)
    with pytest.raises(UnknownInstrument):
        execute_trade(portfolio, market, "DOGE", "1", TradeSide.BUY)
    with pytest.raises(InvalidInput):
        execute_trade(portfolio, market, "ADA", "1", "hold")
    assert _state(portfolio) == before


def test_errors_are_trade_errors() -> None:
    """All rejections share a base so the UI can catch them in one place."""
    for cls in (InvalidInput, InsufficientFunds, InsufficientHoldings, UnknownInstrument):
        assert issubclass(cls, TradeError)
        assert issubclass(cls, ValueError)
    assert InvalidInput.title == "Input Error"
    assert InsufficientFunds.title == "Trade Error"


def test_buy_then_sell_round_trip(market) -> None:
    p = Portfolio(Decimal("10000.00"))
    execute_trade(p, market, "SOL", "3.7", TradeSide.BUY)
    execute_trade(p, market, "SOL", "3.7", TradeSide.SELL)
    assert p.cash_balance == Decimal("10000.00")
    assert not p.has_holding("SOL")
    assert len(p) == 0


def test_parse_quantity() -> None:
    assert parse_quantity(" 1.5 ") == Decimal("1.5")
    assert parse_quantity(2) == Decimal(2)
    assert parse_quantity(Decimal("0.001")) == Decimal("0.001")
    assert parse_quantity("1e-3") == Decimal("0.001")
    with pytest.raises(InvalidInput):
        parse_quantity(True)
    with pytest.raises(InvalidInput):
        parse_quantity(Decimal("NaN"))
    assert parse_quantity("1000000000000000") == Decimal("1e15")
    with pytest.raises(InvalidInput):
        parse_quantity(Decimal("1e999999"))


def test_portfolio_value(portfolio, market) -> None:
    """0.05 BTC + 1.2 ETH + 500 ADA at seed prices."""
    assert portfolio_value(portfolio, market) == Decimal("5126.555")


def test_portfolio_value_skips_unlisted_symbols(market) -> None:
    p = Portfolio(Decimal("0"), {"DOGE": "10", "BTC": "1"})
    assert portfolio_value(p, market) == Decimal("42568.30")
    assert portfolio_value(Portfolio(Decimal("0")), market) == 0


def test_preview_total(market) -> None:
    assert preview_total(market, "BTC", "2") == Decimal("85136.60")
    assert preview_total(market, "BTC", "0") == 0
    assert preview_total(market, "ADA", "-1") == Decimal("-0.48")
    assert preview_total(market, "BTC", "abc") is INVALID_PREVIEW
    assert preview_total(market, "BTC", "") is INVALID_PREVIEW
    assert preview_total(market, "BTC", "inf") is INVALID_PREVIEW
    assert preview_total(market, "DOGE", "1") is INVALID_PREVIEW
    assert preview_total(market, "BTC", "1e999999") is INVALID_PREVIEW
    assert preview_total(market, "BTC", "-1e999999") is INVALID_PREVIEW


def test_trade_desk_notifies_listeners_on_success_only(desk) -> None:
    seen = []
    unsubscribe = desk.subscribe(seen.append)

    conf = desk.submit("ADA", "100", "Sell")
    assert seen == [conf]

    with pytest.raises(InsufficientHoldings):
        desk.submit("ADA", "1000", "Sell")
    assert seen == [conf]

    unsubscribe()
    desk.submit("ADA", "100", "Buy")
    assert len(seen) == 1


def test_trade_desk_valuation_tracks_trades(desk) -> None:
    before = desk.portfolio_value()
    desk.submit("BTC", "0.1", TradeSide.BUY)
    assert desk.portfolio_value() == before + Decimal("4256.83")
    assert desk.preview_total("BTC", "0.1") == Decimal("4256.83")
