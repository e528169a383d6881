"""Yahoo Finance market data provider implementation."""

import asyncio
import logging
from decimal import Decimal

import yfinance as yf

from integrations.exceptions import ProviderConnectionError, ProviderDataError
from integrations.market_data_protocol import Quote
from utils.ticker import normalize_symbol, to_yahoo_symbol

logger = logging.getLogger(__name__)

# Window wide enough to span weekends and exchange holidays
LOOKBACK_PERIOD = "5d"


class YahooFinanceClient:
    """Price lookup using Yahoo Finance (yfinance library).

    Indian listings are resolved through the NSE suffix (``TCS`` ->
    ``TCS.NS``). yfinance is blocking, so each lookup runs in a worker
    thread to let the market data service fan lookups out concurrently.
    """

    def __init__(self, symbol_suffix: str = ".NS"):
        self._symbol_suffix = symbol_suffix

    @property
    def provider_name(self) -> str:
        return "yahoo"

    async def get_current_price(self, symbol: str) -> Quote | None:
        """Fetch the most recent close for ``symbol``.

        Returns:
            A Quote keyed by the caller's symbol, or None if Yahoo has no
            data for it.

        Raises:
            ProviderConnectionError: The download itself failed.
            ProviderDataError: Yahoo returned data that could not be parsed.
        """
        return await asyncio.to_thread(self._fetch_last_close, symbol)

    def _fetch_last_close(self, symbol: str) -> Quote | None:
        yahoo_symbol = to_yahoo_symbol(symbol, self._symbol_suffix)
        logger.debug("Yahoo Finance: fetching %s as %s", symbol, yahoo_symbol)

        try:
            df = yf.download(
                tickers=yahoo_symbol,
                period=LOOKBACK_PERIOD,
                auto_adjust=True,
                progress=False,
            )
        except Exception as e:
            raise ProviderConnectionError(
                f"yfinance download failed for {yahoo_symbol}: {e}",
                provider_name=self.provider_name,
            ) from e

        if df is None or df.empty:
            return None

        try:
            if ("Close", yahoo_symbol) in df.columns:
                # MultiIndex columns: (metric, symbol)
                closes = df[("Close", yahoo_symbol)].dropna()
            elif "Close" in df.columns:
                closes = df["Close"].dropna()
            else:
                return None

            if closes.empty:
                return None

            last = closes.iloc[-1]
            change_percent = None
            if len(closes) > 1 and float(closes.iloc[-2]) != 0:
                previous = float(closes.iloc[-2])
                change_percent = Decimal(
                    str(round((float(last) - previous) / previous * 100, 4))
                )

            return Quote(
                symbol=normalize_symbol(symbol),
                price=Decimal(str(round(float(last), 6))),
                source=self.provider_name,
                price_date=closes.index[-1].date(),
                change_percent=change_percent,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ProviderDataError(
                f"Could not parse Yahoo Finance data for {yahoo_symbol}: {e}",
                provider_name=self.provider_name,
            ) from e
