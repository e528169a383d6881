"""External market data integrations.

This package contains:
- Market data protocol: Common interface for price lookup providers
- Yahoo Finance client: Live NSE/BSE quotes via yfinance
- Static client: Simulated quotes and market snapshot for offline use
"""

from integrations.exceptions import ProviderConnectionError, ProviderError
from integrations.market_data_protocol import PriceLookup, Quote

__all__ = [
    "PriceLookup",
    "ProviderConnectionError",
    "ProviderError",
    "Quote",
]
