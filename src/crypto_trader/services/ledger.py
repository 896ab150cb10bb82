"""Portfolio ledger and trade execution (pure of any UI concerns).

The Portfolio is the only mutable state in the application. It is changed
exclusively by execute_trade, which validates everything up front so a
rejected trade never leaves a partial update behind.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, List, Mapping, Optional, Union

from crypto_trader.config.constants import (
    HOLDING_EPSILON,
    MAX_QUANTITY,
    SEED_HOLDINGS,
    STARTING_BALANCE,
)
from crypto_trader.models.core import Holding, TradeConfirmation, TradeSide
from crypto_trader.models.errors import (
    InsufficientFunds,
    InsufficientHoldings,
    InvalidInput,
    TradeError,
    UnknownInstrument,
)
from crypto_trader.services.formatting import format_money, format_quantity
from crypto_trader.services.market import MarketDataStore

logger = logging.getLogger(__name__)

QuantityInput = Union[str, Decimal, int, float]

# Returned by preview_total when the quantity text does not parse
INVALID_PREVIEW = None


class Portfolio:
    """Cash balance plus the quantity held per symbol.

    Holdings only exist while their quantity is positive; use holding() to
    read a quantity (absent symbols read as zero).
    """

    def __init__(
        self,
        cash_balance: Decimal = STARTING_BALANCE,
        holdings: Optional[Mapping[str, QuantityInput]] = None,
    ):
        cash = Decimal(str(cash_balance))
        if cash < 0:
            raise ValueError("Cash balance cannot be negative")
        self._cash_balance = cash
        self._holdings: Dict[str, Decimal] = {}
        for symbol, qty in (holdings or {}).items():
            q = Decimal(str(qty))
            if q < 0:
                raise ValueError(f"Holding for {symbol} cannot be negative")
            if q > 0:
                self._holdings[symbol] = q

    @classmethod
    def seeded(cls) -> "Portfolio":
        """Starting balance and sample holdings the app opens with."""
        return cls(STARTING_BALANCE, SEED_HOLDINGS)

    @property
    def cash_balance(self) -> Decimal:
        return self._cash_balance

    def holding(self, symbol: str) -> Decimal:
        return self._holdings.get(symbol, Decimal(0))

    def has_holding(self, symbol: str) -> bool:
        return symbol in self._holdings

    def holdings(self) -> List[Holding]:
        """Snapshot of current holdings in insertion order."""
        return [Holding(symbol, qty) for symbol, qty in self._holdings.items()]

    def __len__(self) -> int:
        return len(self._holdings)

    def _apply(
        self, symbol: str, cash_balance: Decimal, quantity: Decimal, drop_dust: bool = False
    ) -> None:
        """Commit a validated trade's resulting balance and holding.

        With drop_dust (sells), a remainder at or below HOLDING_EPSILON removes
        the holding. Buys always keep what was paid for.
        """
        self._cash_balance = cash_balance
        if quantity <= 0 or (drop_dust and quantity <= HOLDING_EPSILON):
            self._holdings.pop(symbol, None)
        else:
            self._holdings[symbol] = quantity

    def __repr__(self) -> str:
        return f"Portfolio(cash_balance={self._cash_balance!r}, holdings={self._holdings!r})"


def parse_quantity(value: QuantityInput) -> Decimal:
    """Parse user input into a positive finite Decimal.

    Raises:
        InvalidInput: If the value is empty, not a number, not finite, <= 0,
            or above MAX_QUANTITY.
    """
    if isinstance(value, bool):
        raise InvalidInput("Please enter a valid amount")
    if isinstance(value, Decimal):
        qty = value
    else:
        text = str(value).strip()
        if not text:
            raise InvalidInput("Please enter a valid amount")
        try:
            qty = Decimal(text)
        except InvalidOperation:
            raise InvalidInput("Please enter a valid amount") from None
    if not qty.is_finite():
        raise InvalidInput("Please enter a valid amount")
    if qty <= 0:
        raise InvalidInput("Amount must be greater than 0")
    if qty > MAX_QUANTITY:
        raise InvalidInput(f"Amount must not exceed {format_quantity(MAX_QUANTITY)}")
    return qty


def execute_trade(
    portfolio: Portfolio,
    market: MarketDataStore,
    symbol: str,
    quantity: QuantityInput,
    side: Union[TradeSide, str],
) -> TradeConfirmation:
    """Validate and apply one buy or sell against the portfolio.

    Args:
        portfolio: Ledger to update.
        market: Source of the trade price.
        symbol: Instrument symbol (e.g. "BTC").
        quantity: Amount as typed by the user, or a number.
        side: TradeSide.BUY / TradeSide.SELL, or "Buy" / "Sell".

    Returns:
        TradeConfirmation with the executed total and the new cash balance.

    Raises:
        InvalidInput: Quantity is not a positive finite number.
        UnknownInstrument: Symbol is not listed in the market.
        InsufficientFunds: Buy total exceeds the cash balance.
        InsufficientHoldings: Sell quantity exceeds the amount held.
    """
    qty = parse_quantity(quantity)
    try:
        trade_side = TradeSide.parse(side)
    except ValueError as e:
        raise InvalidInput(str(e)) from None
    instrument = market.get(symbol)
    if instrument is None:
        raise UnknownInstrument(f"Unknown instrument: {symbol}")

    price = instrument.price
    total = price * qty
    held = portfolio.holding(symbol)

    if trade_side is TradeSide.BUY:
        if total > portfolio.cash_balance:
            raise InsufficientFunds(
                f"Insufficient funds. Your balance: ${format_money(portfolio.cash_balance)}"
            )
        new_cash = portfolio.cash_balance - total
        new_qty = held + qty
    else:
        if qty > held:
            raise InsufficientHoldings(
                f"Insufficient holdings. You have: {format_quantity(held)} {instrument.display_name}"
            )
        new_cash = portfolio.cash_balance + total
        new_qty = held - qty

    portfolio._apply(symbol, new_cash, new_qty, drop_dust=trade_side is TradeSide.SELL)
    return TradeConfirmation(
        side=trade_side,
        symbol=symbol,
        quantity=qty,
        price=price,
        total=total,
        cash_balance=new_cash,
    )


def portfolio_value(portfolio: Portfolio, market: MarketDataStore) -> Decimal:
    """Sum of quantity * current price; symbols missing from the market are skipped."""
    total = Decimal(0)
    for holding in portfolio.holdings():
        price = market.price(holding.symbol)
        if price is None:
            continue
        total += holding.quantity * price
    return total


def preview_total(market: MarketDataStore, symbol: str, quantity_text: str) -> Optional[Decimal]:
    """Price * quantity for the Trade tab's running total.

    Returns INVALID_PREVIEW when the text is not a finite number within
    MAX_QUANTITY or the symbol is unknown. Zero and negative amounts still
    preview; the trade itself rejects them.
    """
    price = market.price(symbol)
    if price is None:
        return INVALID_PREVIEW
    try:
        qty = Decimal((quantity_text or "").strip())
    except InvalidOperation:
        return INVALID_PREVIEW
    if not qty.is_finite() or abs(qty) > MAX_QUANTITY:
        return INVALID_PREVIEW
    return price * qty


TradeListener = Callable[[TradeConfirmation], None]


class TradeDesk:
    """Owns the portfolio and market for a session and runs trades.

    Listeners are called after each successful trade so dependent views
    (balance, portfolio value) can recompute. Rejections propagate to the
    caller as TradeError.
    """

    def __init__(self, portfolio: Portfolio, market: MarketDataStore):
        self.portfolio = portfolio
        self.market = market
        self._listeners: List[TradeListener] = []

    def subscribe(self, listener: TradeListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def submit(
        self,
        symbol: str,
        quantity: QuantityInput,
        side: Union[TradeSide, str],
    ) -> TradeConfirmation:
        try:
            confirmation = execute_trade(self.portfolio, self.market, symbol, quantity, side)
        except TradeError as e:
            logger.warning("Rejected %s %s %s: %s", side, quantity, symbol, e)
            raise
        logger.info(
            "Executed %s %s %s @ %s, total %s, balance %s",
            confirmation.side.value,
            confirmation.quantity,
            confirmation.symbol,
            confirmation.price,
            confirmation.total,
            confirmation.cash_balance,
        )
        for listener in list(self._listeners):
            listener(confirmation)
        return confirmation

    def portfolio_value(self) -> Decimal:
        return portfolio_value(self.portfolio, self.market)

    def preview_total(self, symbol: str, quantity_text: str) -> Optional[Decimal]:
        return preview_total(self.market, symbol, quantity_text)
