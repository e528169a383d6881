"""Pydantic schemas for the chat assistant.

Each intent has its own payload model; ``ChatPayload`` is the union of them,
discriminated on ``kind``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from schemas.market import MarketMover


class UserProfile(BaseModel):
    """Optional facts about the asker used to personalise answers."""

    age: Optional[int] = None
    income: Optional[int] = None  # Annual, in rupees
    risk_profile: Optional[str] = None


class ChatRequest(BaseModel):
    message: str
    user_profile: Optional[UserProfile] = None


class StockSnapshot(BaseModel):
    symbol: str
    name: str
    sector: str
    market_cap: str
    price: Decimal
    change_percent: Decimal
    price_source: str
    pe: Decimal
    pb: Decimal
    roe: Decimal
    dividend_yield: Decimal
    debt_to_equity: Decimal
    recommendation: str
    target_price: Decimal
    upside: Decimal
    valuation: str
    description: str
    strengths: list[str] = []
    risks: list[str] = []


class CommoditySnapshot(BaseModel):
    name: str
    price: str
    change_percent: Decimal
    trend: str
    support: str
    resistance: str
    drivers: list[str] = []
    investment_options: list[str] = []

    model_config = ConfigDict(from_attributes=True)


class FundSummary(BaseModel):
    name: str
    category: str
    aum_crore: Decimal
    expense_ratio: Decimal
    returns: dict[str, Decimal]
    risk: str
    star_rating: int
    fund_manager: str
    lock_in: Optional[str] = None
    tax_benefit: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TaxOptionSummary(BaseModel):
    name: str
    returns: str
    lock_in: str
    risk: str
    benefit: str

    model_config = ConfigDict(from_attributes=True)


class IndexLevel(BaseModel):
    name: str
    current: Decimal
    change: Decimal
    change_percent: Decimal


class StockLookupPayload(BaseModel):
    kind: Literal["stock_lookup"] = "stock_lookup"
    stocks: list[StockSnapshot] = []
    recommendations: list[StockSnapshot] = []
    nifty50: IndexLevel


class MutualFundPayload(BaseModel):
    kind: Literal["mutual_fund"] = "mutual_fund"
    fund_type: Optional[str] = None
    funds: list[FundSummary]
    sip_note: str


class PortfolioAdvicePayload(BaseModel):
    kind: Literal["portfolio_advice"] = "portfolio_advice"
    risk_profile: str
    recommended_allocation: dict[str, int]
    allocation_reasoning: str
    strategy_description: str
    suitable_for: str
    expected_returns: str
    rebalancing_triggers: list[str]


class TaxPlanningPayload(BaseModel):
    kind: Literal["tax_planning"] = "tax_planning"
    section_80c_limit: str
    options: list[TaxOptionSummary]
    capital_gains_strategies: list[str]


class RiskProfilingPayload(BaseModel):
    kind: Literal["risk_profiling"] = "risk_profiling"
    profile_type: str
    score: int
    time_horizon: str
    investment_amount: Optional[int] = None
    description: str
    characteristics: list[str]
    suitable_investments: list[str]
    recommendations: list[str]


class MarketOverviewPayload(BaseModel):
    kind: Literal["market_overview"] = "market_overview"
    indices: list[IndexLevel]
    sentiment: str
    vix: Decimal
    top_gainers: list[MarketMover]
    top_losers: list[MarketMover]
    sector_performance: dict[str, Decimal]
    commodities: list[CommoditySnapshot] = []


class GeneralPayload(BaseModel):
    kind: Literal["general"] = "general"
    message: str
    capabilities: list[str]
    examples: list[str]


ChatPayload = Annotated[
    Union[
        StockLookupPayload,
        MutualFundPayload,
        PortfolioAdvicePayload,
        TaxPlanningPayload,
        RiskProfilingPayload,
        MarketOverviewPayload,
        GeneralPayload,
    ],
    Field(discriminator="kind"),
]


class ChatResponse(BaseModel):
    intent: str
    payload: ChatPayload
    formatted: str  # Markdown, disclaimer included
    disclaimer: str
    timestamp: datetime
