"""Unit tests for MarketDataService."""

from decimal import Decimal

import pytest

from services.exceptions import UpstreamUnavailableError
from services.market_data_service import MarketDataService
from tests.fixtures.mocks import ExplodingPriceLookup, MockPriceLookup


class TestGetCurrentPrices:
    """Tests for batched price lookups."""

    @pytest.mark.asyncio
    async def test_returns_prices_for_known_symbols(self):
        service = MarketDataService(provider=MockPriceLookup())

        result = await service.get_current_prices(["TCS", "RELIANCE"])

        assert result.prices == {"TCS": Decimal("3600"), "RELIANCE": Decimal("2600")}
        assert result.unavailable == {}

    @pytest.mark.asyncio
    async def test_normalizes_and_deduplicates(self):
        """Symbols are uppercased and looked up once each."""
        provider = MockPriceLookup()
        service = MarketDataService(provider=provider)

        result = await service.get_current_prices(["tcs", " TCS ", "Tcs", "", "  "])

        assert provider.calls == ["TCS"]
        assert list(result.prices) == ["TCS"]

    @pytest.mark.asyncio
    async def test_failure_is_isolated_per_symbol(self):
        """A failing lookup never fails the batch."""
        service = MarketDataService(provider=MockPriceLookup(failing={"B"}))

        result = await service.get_current_prices(["A", "B"])

        assert result.prices == {"A": Decimal("130")}
        assert isinstance(result.unavailable["B"], UpstreamUnavailableError)
        assert result.unavailable["B"].provider_name == "mock"

    @pytest.mark.asyncio
    async def test_unknown_symbol_is_unavailable(self):
        service = MarketDataService(provider=MockPriceLookup())

        result = await service.get_current_prices(["NOPE"])

        assert result.quotes == {}
        assert result.unavailable["NOPE"].reason == "price unavailable"

    @pytest.mark.asyncio
    async def test_negative_price_is_unavailable(self):
        service = MarketDataService(provider=MockPriceLookup(negative={"TCS"}))

        result = await service.get_current_prices(["TCS"])

        assert "TCS" in result.unavailable
        assert "negative" in result.unavailable["TCS"].reason

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_unavailable(self):
        """Errors outside the provider hierarchy are still absorbed."""
        service = MarketDataService(provider=ExplodingPriceLookup())

        result = await service.get_current_prices(["TCS", "INFY"])

        assert set(result.unavailable) == {"TCS", "INFY"}
        assert result.unavailable["TCS"].reason == "boom"

    @pytest.mark.asyncio
    async def test_empty_list(self):
        provider = MockPriceLookup()
        service = MarketDataService(provider=provider)

        result = await service.get_current_prices([])

        assert result.quotes == {}
        assert provider.calls == []


class TestGetQuote:
    @pytest.mark.asyncio
    async def test_returns_quote(self):
        service = MarketDataService(provider=MockPriceLookup())

        quote = await service.get_quote("tcs")

        assert quote.symbol == "TCS"
        assert quote.price == Decimal("3600")
        assert quote.source == "mock"

    @pytest.mark.asyncio
    async def test_raises_when_unavailable(self):
        service = MarketDataService(provider=MockPriceLookup(failing={"TCS"}))

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await service.get_quote("TCS")
        assert exc_info.value.symbol == "TCS"


class TestProviderSelection:
    """Tests for the configured default provider."""

    def test_static_provider_by_default(self, monkeypatch):
        monkeypatch.setattr("services.market_data_service.settings.PRICE_PROVIDER", "static")

        assert MarketDataService().provider.provider_name == "static"

    def test_yahoo_provider_when_configured(self, monkeypatch):
        monkeypatch.setattr("services.market_data_service.settings.PRICE_PROVIDER", "yahoo")

        assert MarketDataService().provider.provider_name == "yahoo"

    def test_market_overview(self):
        overview = MarketDataService(provider=MockPriceLookup()).get_market_overview()

        assert overview["market_sentiment"] == "Positive"
        assert overview["nifty50"]["current"] == Decimal("19876.45")
