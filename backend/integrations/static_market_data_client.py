"""Simulated NSE market data used when no live provider is configured.

Serves a fixed quote table and a market overview snapshot. Used as the
default price lookup so the service runs without network access, and as the
market context for the chat assistant.
"""

import logging
from copy import deepcopy
from decimal import Decimal

from integrations.market_data_protocol import Quote
from utils.ticker import normalize_symbol

logger = logging.getLogger(__name__)

# symbol -> (last price, day change %)
SIMULATED_QUOTES: dict[str, tuple[Decimal, Decimal]] = {
    "RELIANCE": (Decimal("2543.20"), Decimal("2.3")),
    "TCS": (Decimal("3567.89"), Decimal("1.2")),
    "HDFCBANK": (Decimal("1678.90"), Decimal("1.5")),
    "ICICIBANK": (Decimal("987.45"), Decimal("0.9")),
    "INFY": (Decimal("1456.30"), Decimal("0.7")),
    "TATAMOTORS": (Decimal("652.34"), Decimal("2.5")),
    "KOTAKBANK": (Decimal("1789.60"), Decimal("-0.4")),
    "BAJFINANCE": (Decimal("7125.00"), Decimal("1.1")),
    "AUBANK": (Decimal("632.85"), Decimal("0.6")),
    "POLYMED": (Decimal("1717.25"), Decimal("-0.8")),
    "SBIN": (Decimal("598.10"), Decimal("0.3")),
    "YESBANK": (Decimal("23.45"), Decimal("-3.2")),
    "IDEA": (Decimal("12.34"), Decimal("-2.1")),
    "NIFTYBEES": (Decimal("218.40"), Decimal("0.6")),
    "GOLDBEES": (Decimal("51.75"), Decimal("0.4")),
    "LIQUIDBEES": (Decimal("1000.00"), Decimal("0.0")),
}

MARKET_OVERVIEW = {
    "nifty50": {
        "current": Decimal("19876.45"),
        "change": Decimal("125.30"),
        "change_percent": Decimal("0.63"),
        "pe": Decimal("22.5"),
        "pb": Decimal("3.2"),
        "dividend_yield": Decimal("1.2"),
    },
    "sensex": {
        "current": Decimal("66543.21"),
        "change": Decimal("234.56"),
        "change_percent": Decimal("0.35"),
        "pe": Decimal("24.1"),
        "pb": Decimal("3.8"),
        "dividend_yield": Decimal("1.1"),
    },
    "market_sentiment": "Positive",
    "vix": Decimal("14.2"),
    "top_gainers": [
        {"symbol": "RELIANCE", "price": Decimal("2543.20"), "change_percent": Decimal("2.3")},
        {"symbol": "TCS", "price": Decimal("3456.70"), "change_percent": Decimal("1.8")},
        {"symbol": "HDFCBANK", "price": Decimal("1678.90"), "change_percent": Decimal("1.5")},
    ],
    "top_losers": [
        {"symbol": "YESBANK", "price": Decimal("23.45"), "change_percent": Decimal("-3.2")},
        {"symbol": "IDEA", "price": Decimal("12.34"), "change_percent": Decimal("-2.1")},
    ],
    "sector_performance": {
        "IT Services": Decimal("2.3"),
        "Banking": Decimal("1.8"),
        "Automobile": Decimal("-0.5"),
        "Pharma": Decimal("1.2"),
        "Energy": Decimal("-1.1"),
        "FMCG": Decimal("0.8"),
    },
}


class StaticMarketDataClient:
    """Price lookup over an in-process quote table.

    Args:
        quotes: Optional replacement table (symbol -> (price, change %)).
    """

    def __init__(self, quotes: dict[str, tuple[Decimal, Decimal]] | None = None):
        self._quotes = quotes if quotes is not None else SIMULATED_QUOTES

    @property
    def provider_name(self) -> str:
        return "static"

    async def get_current_price(self, symbol: str) -> Quote | None:
        normalized = normalize_symbol(symbol)
        entry = self._quotes.get(normalized)
        if entry is None:
            logger.debug("Static market data: no quote for %s", normalized)
            return None
        price, change_percent = entry
        return Quote(
            symbol=normalized,
            price=price,
            source=self.provider_name,
            change_percent=change_percent,
        )

    def get_market_overview(self) -> dict:
        """Return a copy of the simulated market snapshot."""
        return deepcopy(MARKET_OVERVIEW)
