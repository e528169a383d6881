"""Pydantic request and response schemas."""

from schemas.chat import (
    ChatPayload,
    ChatRequest,
    ChatResponse,
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
from schemas.market import IndexSnapshot, MarketMover, MarketOverviewResponse, QuoteResponse
from schemas.portfolio import (
    AllocationBucketResponse,
    BasicMetricsResponse,
    ConcentrationRiskResponse,
    InvestmentCreate,
    InvestmentResponse,
    InvestmentUpdate,
    PerformanceResponse,
    PerformerResponse,
    PortfolioAnalysisResponse,
    PortfolioCreate,
    PortfolioResponse,
    PortfolioUpdate,
    RecommendationResponse,
    RefreshResponse,
    RiskAnalysisResponse,
)
from schemas.risk_profile import (
    ProfileRecommendationsResponse,
    QuestionOptionResponse,
    QuestionResponse,
    RiskAssessmentResponse,
    RiskProfileDetail,
    RiskProfileRequest,
)

__all__ = [
    "AllocationBucketResponse",
    "BasicMetricsResponse",
    "ChatPayload",
    "ChatRequest",
    "ChatResponse",
    "CommoditySnapshot",
    "ConcentrationRiskResponse",
    "FundSummary",
    "GeneralPayload",
    "IndexLevel",
    "IndexSnapshot",
    "InvestmentCreate",
    "InvestmentResponse",
    "InvestmentUpdate",
    "MarketMover",
    "MarketOverviewPayload",
    "MarketOverviewResponse",
    "MutualFundPayload",
    "PerformanceResponse",
    "PerformerResponse",
    "PortfolioAdvicePayload",
    "PortfolioAnalysisResponse",
    "PortfolioCreate",
    "PortfolioResponse",
    "PortfolioUpdate",
    "ProfileRecommendationsResponse",
    "QuestionOptionResponse",
    "QuestionResponse",
    "QuoteResponse",
    "RecommendationResponse",
    "RefreshResponse",
    "RiskAnalysisResponse",
    "RiskAssessmentResponse",
    "RiskProfileDetail",
    "RiskProfileRequest",
    "RiskProfilingPayload",
    "StockLookupPayload",
    "StockSnapshot",
    "TaxOptionSummary",
    "TaxPlanningPayload",
    "UserProfile",
]
