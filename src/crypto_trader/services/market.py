"""In-memory market data: the fixed instrument table and cosmetic figures."""

from __future__ import annotations

import logging
import random
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from crypto_trader.config.constants import (
    DAY_HIGH_FACTOR,
    DAY_LOW_FACTOR,
    DAY_VOLUME_FACTOR,
    SEED_INSTRUMENTS,
)
from crypto_trader.models.core import Instrument, MarketInfo

logger = logging.getLogger(__name__)


def seed_instruments() -> List[Instrument]:
    """Build the session's instrument table from the configured seed rows."""
    instruments = []
    for symbol, name, price, change, supply, ath in SEED_INSTRUMENTS:
        instruments.append(
            Instrument(
                symbol=symbol,
                name=name,
                price=Decimal(price),
                change_24h=Decimal(change),
                circulating_supply=Decimal(supply) if supply is not None else None,
                all_time_high=Decimal(ath) if ath is not None else None,
            )
        )
    return instruments


class MarketDataStore:
    """Ordered, read-only table of instruments keyed by symbol."""

    def __init__(self, instruments: Optional[Iterable[Instrument]] = None):
        self._instruments: List[Instrument] = list(
            instruments if instruments is not None else seed_instruments()
        )
        self._by_symbol = {}
        for inst in self._instruments:
            if inst.symbol in self._by_symbol:
                raise ValueError(f"Duplicate instrument symbol: {inst.symbol}")
            self._by_symbol[inst.symbol] = inst
        logger.debug("Market data store loaded with %d instruments", len(self._instruments))

    def __len__(self) -> int:
        return len(self._instruments)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def instruments(self) -> Sequence[Instrument]:
        """Return instruments in display order."""
        return tuple(self._instruments)

    def symbols(self) -> List[str]:
        return [inst.symbol for inst in self._instruments]

    def get(self, symbol: str) -> Optional[Instrument]:
        """Return the instrument for symbol, or None if it is not listed."""
        return self._by_symbol.get(symbol)

    def price(self, symbol: str) -> Optional[Decimal]:
        inst = self._by_symbol.get(symbol)
        return inst.price if inst is not None else None

    def index_of(self, symbol: str) -> int:
        """Position of symbol in display order, or -1."""
        for i, inst in enumerate(self._instruments):
            if inst.symbol == symbol:
                return i
        return -1

    def find(self, query: str) -> List[Instrument]:
        """Case-insensitive substring match on symbol or name; empty query returns all."""
        q = (query or "").strip().lower()
        if not q:
            return list(self._instruments)
        return [
            inst
            for inst in self._instruments
            if q in inst.symbol.lower() or q in inst.name.lower()
        ]


def market_cap(instrument: Instrument, rng: Optional[random.Random] = None) -> Decimal:
    """Cosmetic market cap for the Market tab; re-rolled on every render."""
    r = rng if rng is not None else random
    return instrument.price * (Decimal(str(r.random())) * Decimal(1_000_000_000) + Decimal(1_000_000))


def market_info(instrument: Instrument) -> MarketInfo:
    """Derived figures for the Trade tab's market information panel."""
    supply = instrument.circulating_supply
    return MarketInfo(
        day_high=instrument.price * DAY_HIGH_FACTOR,
        day_low=instrument.price * DAY_LOW_FACTOR,
        day_volume=instrument.price * DAY_VOLUME_FACTOR,
        market_cap=instrument.price * supply if supply is not None else None,
        circulating_supply=supply,
        all_time_high=instrument.all_time_high,
    )
