"""Unit tests for ChatService."""

from decimal import Decimal

import pytest

from schemas.chat import UserProfile
from services.chat_service import CAPABILITIES, ChatService
from services.exceptions import InvalidInputError
from services.market_data_service import MarketDataService
from services.response_formatter import DISCLAIMER
from tests.fixtures.mocks import MockPriceLookup


@pytest.fixture
def chat_service():
    return ChatService(market_data_service=MarketDataService(provider=MockPriceLookup()))


class TestRespond:
    """Tests for the common response envelope."""

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, chat_service):
        with pytest.raises(InvalidInputError) as exc_info:
            await chat_service.respond("   ")
        assert exc_info.value.field == "message"

    @pytest.mark.asyncio
    async def test_envelope(self, chat_service):
        """Intent, payload kind and formatted text agree; disclaimer is last."""
        result = await chat_service.respond("Hello there")

        assert result.intent == "general"
        assert result.payload.kind == "general"
        assert result.disclaimer == DISCLAIMER
        assert result.formatted.endswith(f"_{DISCLAIMER}_")
        assert result.timestamp is not None

    @pytest.mark.asyncio
    async def test_general_lists_capabilities(self, chat_service):
        result = await chat_service.respond("Hello there")

        assert result.payload.capabilities == list(CAPABILITIES)
        assert len(result.payload.examples) == 6


class TestStockLookup:
    @pytest.mark.asyncio
    async def test_live_price_used(self, chat_service):
        """A live quote overrides the reference price."""
        result = await chat_service.respond("What is the share price of TCS?")

        assert result.intent == "stock_lookup"
        stock = result.payload.stocks[0]
        assert stock.symbol == "TCS"
        assert stock.price == Decimal("3600")
        assert stock.change_percent == Decimal("1.5")
        assert stock.price_source == "mock"
        assert stock.valuation == "Expensive"
        assert result.payload.recommendations == []

    @pytest.mark.asyncio
    async def test_reference_price_fallback(self, chat_service):
        """No live quote: fall back to the knowledge-base price."""
        result = await chat_service.respond("How is HDFC Bank doing?")

        stock = result.payload.stocks[0]
        assert stock.price == Decimal("1678.90")
        assert stock.price_source == "reference"
        assert stock.valuation == "Attractive"

    @pytest.mark.asyncio
    async def test_fair_valuation(self, chat_service):
        result = await chat_service.respond("Tell me about Reliance")
        assert result.payload.stocks[0].valuation == "Fair"

    @pytest.mark.asyncio
    async def test_recommendations_follow_risk_profile(self, chat_service):
        """With no stock named, suggest a shortlist for the asker's risk profile."""
        result = await chat_service.respond(
            "Suggest some stocks to buy", UserProfile(risk_profile="aggressive")
        )

        assert result.payload.stocks == []
        assert [s.symbol for s in result.payload.recommendations] == ["AUBANK", "POLYMED", "SARVESHWAR"]
        assert result.payload.nifty50.name == "Nifty 50"

    @pytest.mark.asyncio
    async def test_provider_failure_falls_back(self):
        service = ChatService(
            market_data_service=MarketDataService(provider=MockPriceLookup(failing={"TCS"}))
        )

        result = await service.respond("TCS share price")

        assert result.payload.stocks[0].price == Decimal("3567.89")
        assert result.payload.stocks[0].price_source == "reference"


class TestOtherIntents:
    @pytest.mark.asyncio
    async def test_mutual_fund(self, chat_service):
        result = await chat_service.respond("Suggest a good ELSS mutual fund")

        assert result.intent == "mutual_fund"
        assert result.payload.fund_type == "elss"
        assert [f.name for f in result.payload.funds] == ["Axis Long Term Equity Fund"]
        assert "SIP" in result.payload.sip_note

    @pytest.mark.asyncio
    async def test_portfolio_advice_with_age(self, chat_service):
        result = await chat_service.respond(
            "How should I allocate my portfolio?", UserProfile(age=30, risk_profile="moderate")
        )

        assert result.intent == "portfolio_advice"
        assert result.payload.recommended_allocation == {"equity": 70, "debt": 20, "gold": 5, "cash": 5}
        assert "age 30" in result.payload.allocation_reasoning

    @pytest.mark.asyncio
    async def test_portfolio_advice_without_age(self, chat_service):
        """Without an age the model strategy allocation is used."""
        result = await chat_service.respond("How should I diversify my portfolio?")

        assert result.payload.risk_profile == "moderate"
        assert result.payload.recommended_allocation == {"equity": 60, "debt": 30, "gold": 5, "cash": 5}

    @pytest.mark.asyncio
    async def test_tax_planning(self, chat_service):
        result = await chat_service.respond("How can I save tax under 80C?")

        assert result.intent == "tax_planning"
        assert result.payload.section_80c_limit == "₹1,50,000"
        assert [o.name for o in result.payload.options] == ["ELSS Mutual Funds", "PPF", "Tax Saving FD", "NPS"]

    @pytest.mark.asyncio
    async def test_risk_profiling_uses_user_profile(self, chat_service):
        """aggressive (+20) and age under 30 (+10) from a base of 50."""
        result = await chat_service.respond(
            "I want aggressive growth, what is my risk profile?", UserProfile(age=25)
        )

        assert result.intent == "risk_profiling"
        assert result.payload.profile_type == "aggressive"
        assert result.payload.score == 80

    @pytest.mark.asyncio
    async def test_risk_profiling_amount(self, chat_service):
        result = await chat_service.respond("What is my risk profile if I invest 5 lakh?")
        assert result.payload.investment_amount == 500000

    @pytest.mark.asyncio
    async def test_market_overview_with_commodity(self, chat_service):
        result = await chat_service.respond("What is the gold price today?")

        assert result.intent == "market_overview"
        assert [i.name for i in result.payload.indices] == ["Nifty 50", "Sensex"]
        assert result.payload.sentiment == "Positive"
        assert [c.name for c in result.payload.commodities] == ["gold"]
        assert "💰 **Gold**" in result.formatted

    @pytest.mark.asyncio
    async def test_market_overview_without_commodity(self, chat_service):
        result = await chat_service.respond("How is the Nifty doing today?")

        assert result.payload.commodities == []
        assert result.payload.top_losers[0].symbol == "YESBANK"
