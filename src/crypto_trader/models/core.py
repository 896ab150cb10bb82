"""Typed structures for instruments, holdings, and trade results."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, TypedDict


class TradeSide(str, Enum):
    """Direction of a trade as chosen in the Trade tab."""

    BUY = "Buy"
    SELL = "Sell"

    @classmethod
    def parse(cls, value: "TradeSide | str") -> "TradeSide":
        """Accept a TradeSide, its value ("Buy") or its name ("SELL"), case-insensitive."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for side in cls:
            if text in (side.name, side.value.upper()):
                return side
        raise ValueError(f"Unknown trade side: {value!r}")


@dataclass(frozen=True)
class Instrument:
    """A tradable asset. Identity is the symbol; prices are fixed for the session."""

    symbol: str
    name: str
    price: Decimal
    change_24h: Decimal
    circulating_supply: Optional[Decimal] = None
    all_time_high: Optional[Decimal] = None

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.symbol})"


@dataclass(frozen=True)
class Holding:
    symbol: str
    quantity: Decimal


@dataclass(frozen=True)
class TradeConfirmation:
    """Result of a successful trade, handed to the presentation layer."""

    side: TradeSide
    symbol: str
    quantity: Decimal
    price: Decimal
    total: Decimal
    cash_balance: Decimal


@dataclass(frozen=True)
class MarketInfo:
    """Figures for the Trade tab's market information panel."""

    day_high: Decimal
    day_low: Decimal
    day_volume: Decimal
    market_cap: Optional[Decimal]
    circulating_supply: Optional[Decimal]
    all_time_high: Optional[Decimal]


class PortfolioRow(TypedDict):
    """One row of the Portfolio tab table, as returned by portfolio_rows."""

    symbol: str
    display_name: str
    quantity: Decimal
    price: Decimal
    value: Decimal
    avg_buy_price: Decimal
    profit_loss: Decimal


class PortfolioSummary(TypedDict):
    """Summary figures above the Portfolio tab table."""

    asset_count: int
    total_value: Decimal
    change_24h_pct: Decimal
    profit_loss: Decimal
