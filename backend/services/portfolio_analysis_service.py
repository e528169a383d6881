"""Composite analysis of a portfolio: metrics, allocation, risk, suggestions."""

from dataclasses import dataclass, field
from decimal import Decimal

from models import Investment, Portfolio
from services import portfolio_risk_service as risk
from services.allocation_service import AllocationBucket, AllocationService
from services.portfolio_risk_service import AnalysisThresholds, ConcentrationRisk, RiskLevel
from services.recommendation_service import (
    Recommendation,
    RecommendationService,
    best_performer,
    worst_performer,
)
from utils.numbers import to_decimal


@dataclass
class PerformerSummary:
    investment_id: str
    name: str
    return_percentage: Decimal


@dataclass
class BasicMetrics:
    total_invested: Decimal
    current_value: Decimal
    total_returns: Decimal
    return_percentage: Decimal
    investment_count: int
    average_return: Decimal
    best_performer: PerformerSummary | None = None
    worst_performer: PerformerSummary | None = None


@dataclass
class PerformanceStats:
    mean_return: Decimal
    median_return: Decimal
    std_dev: Decimal
    positive_count: int
    negative_count: int
    positive_share: Decimal
    volatility: Decimal
    best_performer: PerformerSummary | None = None
    worst_performer: PerformerSummary | None = None


@dataclass
class RiskAnalysis:
    concentration: ConcentrationRisk
    diversification_score: int
    risk_level: RiskLevel
    volatility: Decimal
    recommendations: list[str] = field(default_factory=list)


@dataclass
class PortfolioAnalysis:
    portfolio_id: str
    basic_metrics: BasicMetrics
    asset_allocation: dict[str, AllocationBucket]
    sector_allocation: dict[str, AllocationBucket]
    performance: PerformanceStats
    risk_analysis: RiskAnalysis
    recommendations: list[Recommendation]
    diversification_score: int


def _summary(investment: Investment | None) -> PerformerSummary | None:
    if investment is None:
        return None
    return PerformerSummary(
        investment_id=investment.id,
        name=investment.name,
        return_percentage=to_decimal(investment.return_percentage),
    )


class PortfolioAnalysisService:
    """Read-only analytics over a portfolio whose derived fields are current.

    The caller is responsible for holding the portfolio's lock so the
    analysis sees a consistent snapshot.
    """

    def __init__(self, thresholds: AnalysisThresholds | None = None):
        self.thresholds = thresholds or AnalysisThresholds.from_settings()
        self.recommendation_service = RecommendationService(self.thresholds)

    def analyze(self, portfolio: Portfolio) -> PortfolioAnalysis:
        investments = list(portfolio.investments)
        returns = [to_decimal(inv.return_percentage) for inv in investments]

        asset_allocation = AllocationService.by_asset_class(portfolio)
        sector_allocation = AllocationService.by_sector(portfolio)

        best = _summary(best_performer(investments))
        worst = _summary(worst_performer(investments))
        mean_return = risk.mean(returns)
        volatility = risk.population_std_dev(returns)

        score = risk.diversification_score(asset_allocation, sector_allocation, self.thresholds)
        level = risk.assess_risk_level(volatility, score, self.thresholds)

        basic_metrics = BasicMetrics(
            total_invested=to_decimal(portfolio.total_invested),
            current_value=to_decimal(portfolio.current_value),
            total_returns=to_decimal(portfolio.total_returns),
            return_percentage=to_decimal(portfolio.return_percentage),
            investment_count=len(investments),
            average_return=mean_return,
            best_performer=best,
            worst_performer=worst,
        )
        performance = PerformanceStats(
            mean_return=mean_return,
            median_return=risk.median(returns),
            std_dev=volatility,
            positive_count=sum(1 for r in returns if r > 0),
            negative_count=sum(1 for r in returns if r < 0),
            positive_share=risk.positive_share(returns),
            volatility=volatility,
            best_performer=best,
            worst_performer=worst,
        )
        risk_analysis = RiskAnalysis(
            concentration=risk.concentration_risk(asset_allocation, sector_allocation),
            diversification_score=score,
            risk_level=level,
            volatility=volatility,
            recommendations=risk.risk_recommendations(level),
        )
        recommendations = self.recommendation_service.generate(
            investments,
            asset_allocation,
            portfolio.target_allocation_percentages(),
            score,
        )

        return PortfolioAnalysis(
            portfolio_id=portfolio.id,
            basic_metrics=basic_metrics,
            asset_allocation=asset_allocation,
            sector_allocation=sector_allocation,
            performance=performance,
            risk_analysis=risk_analysis,
            recommendations=recommendations,
            diversification_score=score,
        )
