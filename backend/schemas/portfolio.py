"""Pydantic schemas for portfolios, investments and their analysis."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PortfolioCreate(BaseModel):
    """Schema for creating a portfolio.

    A missing ``target_allocation`` is filled from the risk profile's
    default allocation.
    """

    user_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    risk_profile: Optional[str] = None
    target_allocation: Optional[dict[str, Decimal]] = None


class PortfolioUpdate(BaseModel):
    """Schema for updating portfolio metadata. Omitted fields are unchanged."""

    name: Optional[str] = None
    description: Optional[str] = None
    risk_profile: Optional[str] = None
    target_allocation: Optional[dict[str, Decimal]] = None


class InvestmentCreate(BaseModel):
    """Schema for adding an investment to a portfolio.

    Sign checks (quantity, prices) are done by the service so they surface
    as 400s naming the offending field.
    """

    kind: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    quantity: Decimal
    average_cost: Decimal
    current_price: Optional[Decimal] = None  # Defaults to average_cost
    sector: Optional[str] = None
    market_cap: Optional[str] = None
    isin: Optional[str] = None
    expense_ratio: Optional[Decimal] = None
    purchase_date: Optional[date] = None


class InvestmentUpdate(BaseModel):
    """Schema for updating an investment. Omitted fields are unchanged."""

    name: Optional[str] = None
    quantity: Optional[Decimal] = None
    average_cost: Optional[Decimal] = None
    current_price: Optional[Decimal] = None
    sector: Optional[str] = None
    market_cap: Optional[str] = None


class InvestmentResponse(BaseModel):
    """Schema for Investment API response."""

    id: str
    portfolio_id: str
    kind: str
    symbol: Optional[str] = None
    name: str
    sector: str
    market_cap: str
    isin: str
    expense_ratio: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    quantity: Decimal
    average_cost: Decimal
    current_price: Decimal
    invested_amount: Decimal
    current_value: Decimal
    absolute_return: Decimal
    return_percentage: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PortfolioResponse(BaseModel):
    """Schema for Portfolio API response, including its investments."""

    id: str
    user_id: str
    name: str
    description: str
    risk_profile: str
    target_allocation: dict[str, Decimal]
    total_invested: Decimal
    current_value: Decimal
    total_returns: Decimal
    return_percentage: Decimal
    investments: list[InvestmentResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RefreshResponse(BaseModel):
    """Outcome of a price refresh. Unavailable symbols kept their last price."""

    portfolio: PortfolioResponse
    updated_investment_ids: list[str]
    unavailable_symbols: list[str]


# Analysis


class AllocationBucketResponse(BaseModel):
    value: Decimal
    percentage: Decimal
    investment_ids: list[str] = []

    model_config = ConfigDict(from_attributes=True)


class PerformerResponse(BaseModel):
    investment_id: str
    name: str
    return_percentage: Decimal

    model_config = ConfigDict(from_attributes=True)


class BasicMetricsResponse(BaseModel):
    total_invested: Decimal
    current_value: Decimal
    total_returns: Decimal
    return_percentage: Decimal
    investment_count: int
    average_return: Decimal
    best_performer: Optional[PerformerResponse] = None
    worst_performer: Optional[PerformerResponse] = None

    model_config = ConfigDict(from_attributes=True)


class PerformanceResponse(BaseModel):
    mean_return: Decimal
    median_return: Decimal
    std_dev: Decimal
    positive_count: int
    negative_count: int
    positive_share: Decimal
    volatility: Decimal
    best_performer: Optional[PerformerResponse] = None
    worst_performer: Optional[PerformerResponse] = None

    model_config = ConfigDict(from_attributes=True)


class ConcentrationRiskResponse(BaseModel):
    max_sector_percentage: Decimal
    max_asset_class_percentage: Decimal
    overall: Decimal

    model_config = ConfigDict(from_attributes=True)


class RiskAnalysisResponse(BaseModel):
    concentration: ConcentrationRiskResponse
    diversification_score: int
    risk_level: str
    volatility: Decimal
    recommendations: list[str]

    model_config = ConfigDict(from_attributes=True)


class RecommendationResponse(BaseModel):
    type: str
    action: str
    priority: str
    message: str
    asset_class: Optional[str] = None
    difference: Optional[Decimal] = None
    investment_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PortfolioAnalysisResponse(BaseModel):
    """Composite analysis returned by ``GET /api/portfolio/{id}/analysis``."""

    portfolio_id: str
    basic_metrics: BasicMetricsResponse
    asset_allocation: dict[str, AllocationBucketResponse]
    sector_allocation: dict[str, AllocationBucketResponse]
    performance: PerformanceResponse
    risk_analysis: RiskAnalysisResponse
    recommendations: list[RecommendationResponse]
    diversification_score: int

    model_config = ConfigDict(from_attributes=True)
