"""Diversification score, return dispersion and qualitative risk level."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

import numpy as np

from config import settings
from services.allocation_service import AllocationBucket
from utils.numbers import HUNDRED, ZERO

RiskLevel = Literal["Low", "Medium", "High"]

MAX_BREADTH_POINTS = 5
MAX_SCORE = 10

RISK_RECOMMENDATIONS: dict[str, list[str]] = {
    "High": [
        "Consider reducing exposure to volatile investments",
        "Increase diversification across sectors",
        "Review stop-loss levels for high-risk investments",
    ],
    "Medium": [
        "Monitor portfolio regularly",
        "Consider rebalancing if allocation deviates significantly",
    ],
    "Low": [
        "Portfolio appears well-balanced",
        "Continue regular monitoring",
    ],
}


@dataclass(frozen=True)
class AnalysisThresholds:
    """Tunable cut-offs used by the scorer and the recommendation generator."""

    rebalance_percent: Decimal = Decimal("5")
    sector_concentration_high: Decimal = Decimal("40")
    sector_concentration_medium: Decimal = Decimal("30")
    volatility_high: Decimal = Decimal("20")
    volatility_medium: Decimal = Decimal("15")
    underperformer_return_percent: Decimal = Decimal("-20")
    diversification_alert_score: int = 5

    @classmethod
    def from_settings(cls) -> "AnalysisThresholds":
        return cls(
            rebalance_percent=settings.REBALANCE_THRESHOLD_PERCENT,
            sector_concentration_high=settings.SECTOR_CONCENTRATION_HIGH,
            sector_concentration_medium=settings.SECTOR_CONCENTRATION_MEDIUM,
            volatility_high=settings.VOLATILITY_HIGH,
            volatility_medium=settings.VOLATILITY_MEDIUM,
            underperformer_return_percent=settings.UNDERPERFORMER_RETURN_PERCENT,
            diversification_alert_score=settings.DIVERSIFICATION_ALERT_SCORE,
        )


@dataclass
class ConcentrationRisk:
    max_sector_percentage: Decimal
    max_asset_class_percentage: Decimal
    overall: Decimal


def _from_float(value) -> Decimal:
    # numpy hands back float64; round away binary noise before Decimal
    return Decimal(str(round(float(value), 10)))


def mean(values: list[Decimal]) -> Decimal:
    """Arithmetic mean; 0 for an empty list."""
    if not values:
        return ZERO
    return sum(values, ZERO) / len(values)


def median(values: list[Decimal]) -> Decimal:
    """Median; 0 for an empty list."""
    if not values:
        return ZERO
    return _from_float(np.median(np.array([float(v) for v in values])))


def population_std_dev(values: list[Decimal]) -> Decimal:
    """Population standard deviation; 0 when there are fewer than two values."""
    if len(values) <= 1:
        return ZERO
    return _from_float(np.std(np.array([float(v) for v in values]), ddof=0))


def largest_percentage(allocation: dict[str, AllocationBucket]) -> Decimal:
    return max((bucket.percentage for bucket in allocation.values()), default=ZERO)


def diversification_score(
    asset_allocation: dict[str, AllocationBucket],
    sector_allocation: dict[str, AllocationBucket],
    thresholds: AnalysisThresholds | None = None,
) -> int:
    """Score breadth of a portfolio on a 0-10 scale.

    One point per asset class holding a non-zero share (max 5), one per
    distinct sector (max 5). The largest sector then costs 2 points above
    the high concentration threshold, or 1 point above the medium one; only
    the larger penalty applies.
    """
    thresholds = thresholds or AnalysisThresholds()

    asset_points = min(
        sum(1 for bucket in asset_allocation.values() if bucket.percentage > 0),
        MAX_BREADTH_POINTS,
    )
    sector_points = min(len(sector_allocation), MAX_BREADTH_POINTS)
    score = asset_points + sector_points

    top_sector = largest_percentage(sector_allocation)
    if top_sector > thresholds.sector_concentration_high:
        score -= 2
    elif top_sector > thresholds.sector_concentration_medium:
        score -= 1

    return max(0, min(MAX_SCORE, score))


def assess_risk_level(
    volatility: Decimal,
    score: int,
    thresholds: AnalysisThresholds | None = None,
) -> RiskLevel:
    """High is checked before Medium; anything else is Low."""
    thresholds = thresholds or AnalysisThresholds()
    if volatility > thresholds.volatility_high or score < 3:
        return "High"
    if volatility > thresholds.volatility_medium or score < 6:
        return "Medium"
    return "Low"


def concentration_risk(
    asset_allocation: dict[str, AllocationBucket],
    sector_allocation: dict[str, AllocationBucket],
) -> ConcentrationRisk:
    max_sector = largest_percentage(sector_allocation)
    max_asset_class = largest_percentage(asset_allocation)
    return ConcentrationRisk(
        max_sector_percentage=max_sector,
        max_asset_class_percentage=max_asset_class,
        overall=(max_sector + max_asset_class) / 2,
    )


def risk_recommendations(level: RiskLevel) -> list[str]:
    return list(RISK_RECOMMENDATIONS[level])


def positive_share(returns: list[Decimal]) -> Decimal:
    """Percentage of returns strictly above zero; 0 for an empty list."""
    if not returns:
        return ZERO
    positive = sum(1 for r in returns if r > 0)
    return Decimal(positive) / len(returns) * HUNDRED
