"""Market data provider protocol definitions.

Defines the price lookup capability consumed by portfolio price refresh.
Lookups are asynchronous and keyed by exchange symbol.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol


@dataclass
class Quote:
    """Latest known price for a symbol."""

    symbol: str
    price: Decimal
    source: str  # e.g., "yahoo", "static"
    price_date: date | None = None  # Trading date of the price, when known
    change_percent: Decimal | None = None


class PriceLookup(Protocol):
    """Protocol for current-price providers.

    Implementations return ``None`` when the symbol is unknown and may raise
    :class:`~integrations.exceptions.ProviderError` on failure. Callers treat
    both as "keep the last known price".
    """

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'yahoo')."""
        ...

    async def get_current_price(self, symbol: str) -> Quote | None:
        """Fetch the latest price for one symbol.

        Args:
            symbol: Exchange symbol as stored on the investment (e.g., "TCS").

        Returns:
            A Quote, or None if the provider has no price for the symbol.
        """
        ...
