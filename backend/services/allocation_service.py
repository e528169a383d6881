"""Partition portfolio value by asset class and by sector."""

from dataclasses import dataclass, field
from decimal import Decimal

from models import Portfolio
from utils.numbers import ZERO, percent_of, to_decimal

ASSET_CLASS_BUCKETS = ("equity", "debt", "gold", "cash", "other")

# Total over known kinds; anything not listed falls into "other".
KIND_TO_ASSET_CLASS: dict[str, str] = {
    "equity": "equity",
    "stock": "equity",
    "equity_fund": "equity",
    "mutual_fund": "debt",
    "bond": "debt",
    "debt_fund": "debt",
    "gold_etf": "gold",
    "gold_fund": "gold",
    "sovereign_gold_bond": "gold",
    "liquid_fund": "cash",
    "cash": "cash",
}

UNKNOWN_SECTOR = "Others"


@dataclass
class AllocationBucket:
    """Value and share of one asset class or sector."""

    value: Decimal = ZERO
    percentage: Decimal = ZERO
    investment_ids: list[str] = field(default_factory=list)


def asset_class_for_kind(kind: str | None) -> str:
    """Map an investment kind onto its asset class bucket."""
    return KIND_TO_ASSET_CLASS.get((kind or "").strip().lower(), "other")


class AllocationService:
    """Allocation breakdowns computed against live current values.

    Nothing is cached: every call sums the investments' current values at
    call time. A portfolio worth 0 reports 0% everywhere.
    """

    @staticmethod
    def by_asset_class(portfolio: Portfolio) -> dict[str, AllocationBucket]:
        """Every bucket in ``ASSET_CLASS_BUCKETS`` is present, even when empty."""
        buckets = {name: AllocationBucket() for name in ASSET_CLASS_BUCKETS}
        for investment in portfolio.investments:
            bucket = buckets[asset_class_for_kind(investment.kind)]
            bucket.value += to_decimal(investment.current_value)
            bucket.investment_ids.append(investment.id)
        return _with_percentages(buckets)

    @staticmethod
    def by_sector(portfolio: Portfolio) -> dict[str, AllocationBucket]:
        """Group by the sector label verbatim; blank sectors go to ``Others``."""
        buckets: dict[str, AllocationBucket] = {}
        for investment in portfolio.investments:
            sector = investment.sector if investment.sector and investment.sector.strip() else UNKNOWN_SECTOR
            bucket = buckets.setdefault(sector, AllocationBucket())
            bucket.value += to_decimal(investment.current_value)
            bucket.investment_ids.append(investment.id)
        return _with_percentages(buckets)


def _with_percentages(buckets: dict[str, AllocationBucket]) -> dict[str, AllocationBucket]:
    total = sum((bucket.value for bucket in buckets.values()), ZERO)
    for bucket in buckets.values():
        bucket.percentage = percent_of(bucket.value, total)
    return buckets
