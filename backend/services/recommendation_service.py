"""Rebalancing, performance review and diversification suggestions."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from models import Investment
from services.allocation_service import AllocationBucket
from services.portfolio_risk_service import AnalysisThresholds
from utils.numbers import ZERO, to_decimal

RecommendationType = Literal["rebalance", "performance", "diversification"]
RecommendationAction = Literal["buy", "sell", "review", "diversify"]
Priority = Literal["low", "medium", "high"]


@dataclass
class Recommendation:
    type: RecommendationType
    action: RecommendationAction
    priority: Priority
    message: str
    asset_class: str | None = None
    difference: Decimal | None = None
    investment_id: str | None = None


def worst_performer(investments: list[Investment]) -> Investment | None:
    """Lowest return percentage; the first one wins a tie."""
    worst = None
    for investment in investments:
        if worst is None or to_decimal(investment.return_percentage) < to_decimal(worst.return_percentage):
            worst = investment
    return worst


def best_performer(investments: list[Investment]) -> Investment | None:
    """Highest return percentage; the first one wins a tie."""
    best = None
    for investment in investments:
        if best is None or to_decimal(investment.return_percentage) > to_decimal(best.return_percentage):
            best = investment
    return best


class RecommendationService:
    """Builds the ordered recommendation list for a portfolio.

    Order: one rebalance entry per target asset class that is off by more
    than the rebalance threshold (in target order), then a review of the
    worst performer, then a diversification alert.
    """

    def __init__(self, thresholds: AnalysisThresholds | None = None):
        self.thresholds = thresholds or AnalysisThresholds()

    def generate(
        self,
        investments: list[Investment],
        asset_allocation: dict[str, AllocationBucket],
        target_allocation: dict[str, Decimal],
        score: int,
    ) -> list[Recommendation]:
        recommendations = self.rebalance(asset_allocation, target_allocation)

        review = self.performance_review(investments)
        if review is not None:
            recommendations.append(review)

        if score < self.thresholds.diversification_alert_score:
            recommendations.append(
                Recommendation(
                    type="diversification",
                    action="diversify",
                    priority="high",
                    message=(
                        "Your portfolio needs better diversification. Consider adding "
                        "investments across different sectors and asset classes."
                    ),
                )
            )
        return recommendations

    def rebalance(
        self,
        asset_allocation: dict[str, AllocationBucket],
        target_allocation: dict[str, Decimal],
    ) -> list[Recommendation]:
        """Compare target against current; absent asset classes count as 0%."""
        recommendations = []
        for asset_class, target in target_allocation.items():
            bucket = asset_allocation.get(asset_class)
            current = bucket.percentage if bucket is not None else ZERO
            difference = to_decimal(target) - current
            if abs(difference) <= self.thresholds.rebalance_percent:
                continue

            if difference > 0:
                action = "buy"
                message = (
                    f"Consider increasing {asset_class} allocation by {difference:.1f}% "
                    f"to reach target of {target}%"
                )
            else:
                action = "sell"
                message = (
                    f"Consider reducing {asset_class} allocation by {abs(difference):.1f}% "
                    f"to reach target of {target}%"
                )
            recommendations.append(
                Recommendation(
                    type="rebalance",
                    action=action,
                    priority="medium",
                    message=message,
                    asset_class=asset_class,
                    difference=difference,
                )
            )
        return recommendations

    def performance_review(self, investments: list[Investment]) -> Recommendation | None:
        worst = worst_performer(investments)
        if worst is None:
            return None
        worst_return = to_decimal(worst.return_percentage)
        if worst_return >= self.thresholds.underperformer_return_percent:
            return None
        return Recommendation(
            type="performance",
            action="review",
            priority="high",
            message=(
                f"{worst.name} has underperformed with {worst_return:.2f}% returns. "
                "Consider reviewing this investment."
            ),
            investment_id=worst.id,
        )
