"""Market data service: thin orchestrator over a price lookup provider."""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from config import settings
from integrations.exceptions import ProviderError
from integrations.market_data_protocol import PriceLookup, Quote
from services.exceptions import UpstreamUnavailableError
from utils.ticker import normalize_symbol

logger = logging.getLogger(__name__)


@dataclass
class PriceFetchResult:
    """Outcome of a batch of price lookups.

    Every requested symbol lands in exactly one of ``quotes`` or
    ``unavailable``.
    """

    quotes: dict[str, Quote] = field(default_factory=dict)
    unavailable: dict[str, UpstreamUnavailableError] = field(default_factory=dict)

    @property
    def prices(self) -> dict[str, Decimal]:
        """Symbol -> price for the lookups that succeeded."""
        return {symbol: quote.price for symbol, quote in self.quotes.items()}


class MarketDataService:
    """Fans price lookups out to a pluggable provider.

    A failed lookup for one symbol never fails the batch: it is logged and
    reported in :attr:`PriceFetchResult.unavailable`.
    """

    def __init__(
        self,
        provider: Optional[PriceLookup] = None,
        max_concurrency: Optional[int] = None,
    ):
        """Initialize with an optional provider for dependency injection.

        Args:
            provider: Price lookup provider. If None, one is created on first
                     use according to ``settings.PRICE_PROVIDER``.
            max_concurrency: Upper bound on in-flight lookups. Defaults to
                            ``settings.PRICE_LOOKUP_CONCURRENCY``.
        """
        self._provider = provider
        self._max_concurrency = max_concurrency or settings.PRICE_LOOKUP_CONCURRENCY

    @property
    def provider(self) -> PriceLookup:
        """Get the price lookup provider, creating if not provided."""
        if self._provider is None:
            if settings.PRICE_PROVIDER == "yahoo":
                from integrations.yahoo_finance_client import YahooFinanceClient

                self._provider = YahooFinanceClient(symbol_suffix=settings.YAHOO_SYMBOL_SUFFIX)
            else:
                from integrations.static_market_data_client import StaticMarketDataClient

                self._provider = StaticMarketDataClient()
        return self._provider

    async def get_quote(self, symbol: str) -> Quote:
        """Look up a single symbol.

        Raises:
            UpstreamUnavailableError: No price could be obtained.
        """
        result = await self.get_current_prices([symbol])
        normalized = normalize_symbol(symbol)
        if normalized in result.unavailable:
            raise result.unavailable[normalized]
        return result.quotes[normalized]

    async def get_current_prices(self, symbols: list[str]) -> PriceFetchResult:
        """Fetch current prices for ``symbols`` concurrently.

        Symbols are normalized to uppercase and de-duplicated. All lookups
        are allowed to settle before returning.

        Args:
            symbols: Exchange symbols (case-insensitive).

        Returns:
            PriceFetchResult with a quote or an unavailability error per symbol.
        """
        normalized = sorted({normalize_symbol(s) for s in symbols if s and s.strip()})
        result = PriceFetchResult()
        if not normalized:
            return result

        provider = self.provider
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def lookup(symbol: str) -> tuple[str, Quote | UpstreamUnavailableError]:
            async with semaphore:
                try:
                    quote = await provider.get_current_price(symbol)
                except ProviderError as e:
                    logger.warning("%s: price lookup failed for %s: %s", provider.provider_name, symbol, e)
                    return symbol, UpstreamUnavailableError(symbol, provider.provider_name, str(e))
                except Exception as e:
                    logger.warning(
                        "%s: unexpected error looking up %s",
                        provider.provider_name, symbol, exc_info=True,
                    )
                    return symbol, UpstreamUnavailableError(symbol, provider.provider_name, str(e))

            if quote is None:
                logger.warning("%s: no price available for %s", provider.provider_name, symbol)
                return symbol, UpstreamUnavailableError(symbol, provider.provider_name)
            if quote.price < 0:
                logger.warning(
                    "%s: ignoring negative price %s for %s",
                    provider.provider_name, quote.price, symbol,
                )
                return symbol, UpstreamUnavailableError(
                    symbol, provider.provider_name, f"negative price {quote.price}"
                )
            return symbol, quote

        outcomes = await asyncio.gather(*(lookup(s) for s in normalized))

        for symbol, outcome in outcomes:
            if isinstance(outcome, UpstreamUnavailableError):
                result.unavailable[symbol] = outcome
            else:
                result.quotes[symbol] = outcome

        logger.info(
            "%s: fetched %d of %d prices (%d unavailable)",
            provider.provider_name, len(result.quotes), len(normalized), len(result.unavailable),
        )
        return result

    def get_market_overview(self) -> dict:
        """Index levels, sentiment, movers and sector moves.

        Served from the simulated snapshot whichever price provider is
        configured.
        """
        from integrations.static_market_data_client import StaticMarketDataClient

        return StaticMarketDataClient().get_market_overview()
