"""Chat assistant: classify a question and answer from the knowledge tables."""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from models import utc_now
from schemas.chat import (
    ChatPayload,
    CommoditySnapshot,
    FundSummary,
    GeneralPayload,
    IndexLevel,
    MarketOverviewPayload,
    MutualFundPayload,
    PortfolioAdvicePayload,
    RiskProfilingPayload,
    StockLookupPayload,
    StockSnapshot,
    TaxOptionSummary,
    TaxPlanningPayload,
    UserProfile,
)
from schemas.market import MarketMover
from services import knowledge_base as kb
from services.exceptions import InvalidInputError, UpstreamUnavailableError
from services.intent_classifier import Classification, IntentClassifier
from services.market_data_service import MarketDataService
from services.response_formatter import ResponseFormatter
from services.risk_profile_service import RiskProfileService

logger = logging.getLogger(__name__)

SIP_NOTE = (
    "A monthly SIP averages out your purchase cost over market cycles; "
    "compare expense ratios and stay invested for at least 5 years."
)

CAPABILITIES = (
    "📈 Stock lookups with key ratios (try a company name or NSE symbol)",
    "💰 Mutual fund shortlists by category",
    "🎯 Portfolio allocation and rebalancing guidance",
    "🧾 Tax planning under Section 80C and capital gains",
    "⚠️ A quick read of your risk profile",
    "🌐 Market overview: Nifty 50, Sensex, sectors, gold and silver",
)

EXAMPLES = (
    "What is the share price of TCS?",
    "Suggest a good ELSS mutual fund",
    "How should I allocate my portfolio?",
    "How can I save tax under 80C?",
    "I am a conservative investor with a long term horizon",
    "How is the Nifty doing today?",
)


def _valuation(pe: Decimal) -> str:
    if pe < 20:
        return "Attractive"
    if pe < 25:
        return "Fair"
    return "Expensive"


@dataclass
class ChatResult:
    intent: str
    payload: ChatPayload
    formatted: str
    disclaimer: str
    timestamp: datetime


class ChatService:
    """Answers free-text investing questions with templated, static content.

    Args:
        market_data_service: Source of quotes and the market overview.
        classifier: Intent classifier; defaults to the standard rule table.
        formatter: Markdown renderer.
    """

    def __init__(
        self,
        market_data_service: Optional[MarketDataService] = None,
        classifier: Optional[IntentClassifier] = None,
        formatter: Optional[ResponseFormatter] = None,
    ):
        self.market_data_service = market_data_service or MarketDataService()
        self.classifier = classifier or IntentClassifier()
        self.formatter = formatter or ResponseFormatter()

    async def respond(self, message: str, user_profile: Optional[UserProfile] = None) -> ChatResult:
        """Classify ``message`` and build the matching payload.

        Raises:
            InvalidInputError: The message is blank.
        """
        message = (message or "").strip()
        if not message:
            raise InvalidInputError("message", "must not be blank")
        user_profile = user_profile or UserProfile()

        classification = self.classifier.classify(message)
        payload = await self._build_payload(classification, message, user_profile)
        logger.info("Chat message answered as %s", classification.intent)

        return ChatResult(
            intent=classification.intent,
            payload=payload,
            formatted=self.formatter.format(payload),
            disclaimer=self.formatter.disclaimer,
            timestamp=utc_now(),
        )

    async def _build_payload(
        self, classification: Classification, message: str, user_profile: UserProfile
    ) -> ChatPayload:
        intent = classification.intent
        if intent == "stock_lookup":
            return await self._stock_lookup(classification, user_profile)
        if intent == "mutual_fund":
            return self._mutual_fund(message, user_profile)
        if intent == "portfolio_advice":
            return self._portfolio_advice(user_profile)
        if intent == "tax_planning":
            return self._tax_planning()
        if intent == "risk_profiling":
            return self._risk_profiling(message, user_profile)
        if intent == "market_overview":
            return self._market_overview(classification)
        return GeneralPayload(
            message="I'm NiveshAI, your investing education assistant. I can help with:",
            capabilities=list(CAPABILITIES),
            examples=list(EXAMPLES),
        )

    async def _snapshot(self, stock: kb.StockProfile) -> StockSnapshot:
        price, change, source = stock.price, stock.change_percent, "reference"
        try:
            quote = await self.market_data_service.get_quote(stock.symbol)
        except UpstreamUnavailableError:
            logger.debug("No live quote for %s, using reference price", stock.symbol)
        else:
            price, source = quote.price, quote.source
            if quote.change_percent is not None:
                change = quote.change_percent

        return StockSnapshot(
            symbol=stock.symbol,
            name=stock.name,
            sector=stock.sector,
            market_cap=stock.market_cap,
            price=price,
            change_percent=change,
            price_source=source,
            pe=stock.pe,
            pb=stock.pb,
            roe=stock.roe,
            dividend_yield=stock.dividend_yield,
            debt_to_equity=stock.debt_to_equity,
            recommendation=stock.recommendation,
            target_price=stock.target_price,
            upside=stock.upside,
            valuation=_valuation(stock.pe),
            description=stock.description,
            strengths=list(stock.strengths),
            risks=list(stock.risks),
        )

    def _nifty(self) -> IndexLevel:
        nifty = self.market_data_service.get_market_overview()["nifty50"]
        return IndexLevel(
            name="Nifty 50",
            current=nifty["current"],
            change=nifty["change"],
            change_percent=nifty["change_percent"],
        )

    async def _stock_lookup(
        self, classification: Classification, user_profile: UserProfile
    ) -> StockLookupPayload:
        stocks = [await self._snapshot(mention.stock) for mention in classification.stocks]
        recommendations = []
        if not stocks:
            picks = kb.stock_recommendations(user_profile.risk_profile or "moderate")
            recommendations = [await self._snapshot(stock) for stock in picks]
        return StockLookupPayload(stocks=stocks, recommendations=recommendations, nifty50=self._nifty())

    def _mutual_fund(self, message: str, user_profile: UserProfile) -> MutualFundPayload:
        fund_type = kb.detect_fund_type(message)
        funds = kb.mutual_fund_recommendations(fund_type, user_profile.risk_profile or "moderate")
        return MutualFundPayload(
            fund_type=fund_type,
            funds=[FundSummary.model_validate(fund) for fund in funds],
            sip_note=SIP_NOTE,
        )

    def _portfolio_advice(self, user_profile: UserProfile) -> PortfolioAdvicePayload:
        risk_profile = user_profile.risk_profile or "moderate"
        strategy = kb.PORTFOLIO_STRATEGIES.get(risk_profile, kb.PORTFOLIO_STRATEGIES["moderate"])
        if user_profile.age:
            allocation = kb.optimal_allocation(user_profile.age, risk_profile)
            reasoning = f"Based on age {user_profile.age} and {risk_profile} risk profile"
        else:
            allocation = dict(strategy.allocation)
            reasoning = f"Model allocation for a {risk_profile} investor"
        return PortfolioAdvicePayload(
            risk_profile=risk_profile,
            recommended_allocation=allocation,
            allocation_reasoning=reasoning,
            strategy_description=strategy.description,
            suitable_for=strategy.suitable_for,
            expected_returns=strategy.expected_returns,
            rebalancing_triggers=list(kb.REBALANCING_TRIGGERS),
        )

    def _tax_planning(self) -> TaxPlanningPayload:
        return TaxPlanningPayload(
            section_80c_limit=kb.SECTION_80C_LIMIT,
            options=[TaxOptionSummary.model_validate(option) for option in kb.SECTION_80C_OPTIONS],
            capital_gains_strategies=list(kb.CAPITAL_GAINS_STRATEGIES),
        )

    def _risk_profiling(self, message: str, user_profile: UserProfile) -> RiskProfilingPayload:
        assessment = RiskProfileService.assess_from_message(
            message, user_profile.model_dump(exclude_none=True)
        )
        return RiskProfilingPayload(
            profile_type=assessment.type,
            score=assessment.score,
            time_horizon=assessment.time_horizon,
            investment_amount=assessment.investment_amount,
            description=assessment.description,
            characteristics=assessment.characteristics,
            suitable_investments=assessment.suitable_investments,
            recommendations=assessment.recommendations,
        )

    def _market_overview(self, classification: Classification) -> MarketOverviewPayload:
        overview = self.market_data_service.get_market_overview()
        indices = [
            IndexLevel(
                name=label,
                current=overview[key]["current"],
                change=overview[key]["change"],
                change_percent=overview[key]["change_percent"],
            )
            for key, label in (("nifty50", "Nifty 50"), ("sensex", "Sensex"))
        ]
        return MarketOverviewPayload(
            indices=indices,
            sentiment=overview["market_sentiment"],
            vix=overview["vix"],
            top_gainers=[MarketMover(**mover) for mover in overview["top_gainers"]],
            top_losers=[MarketMover(**mover) for mover in overview["top_losers"]],
            sector_performance=overview["sector_performance"],
            commodities=[CommoditySnapshot.model_validate(c) for c in classification.commodities],
        )
