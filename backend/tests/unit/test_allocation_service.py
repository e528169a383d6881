"""Unit tests for AllocationService."""

from decimal import Decimal

import pytest

from services.allocation_service import (
    ASSET_CLASS_BUCKETS,
    UNKNOWN_SECTOR,
    AllocationService,
    asset_class_for_kind,
)
from tests.fixtures import make_investment, make_portfolio


class TestAssetClassForKind:
    """Tests for the kind -> asset class map."""

    @pytest.mark.parametrize(
        "kind,expected",
        [
            ("equity", "equity"),
            ("stock", "equity"),
            ("mutual_fund", "debt"),
            ("bond", "debt"),
            ("gold_etf", "gold"),
            ("liquid_fund", "cash"),
            ("exchange_traded_fund", "other"),
            ("crypto", "other"),
            ("", "other"),
            (None, "other"),
        ],
    )
    def test_mapping(self, kind, expected):
        """Known kinds map to their bucket; anything else is other."""
        assert asset_class_for_kind(kind) == expected

    def test_case_insensitive(self):
        """Kinds are matched case-insensitively."""
        assert asset_class_for_kind(" Equity ") == "equity"


class TestByAssetClass:
    """Tests for the asset class breakdown."""

    def test_all_buckets_present(self, sample_portfolio):
        """Every bucket is reported even when empty."""
        allocation = AllocationService.by_asset_class(sample_portfolio)

        assert tuple(allocation) == ASSET_CLASS_BUCKETS
        assert allocation["equity"].percentage == Decimal("100")
        assert allocation["debt"].value == 0
        assert allocation["debt"].percentage == 0

    def test_split_across_buckets(self):
        """Shares are computed against the total current value."""
        equity = make_investment("TCS", kind="equity", quantity="1", average_cost="750")
        bond = make_investment(None, name="GSec", kind="bond", quantity="1", average_cost="250")
        portfolio = make_portfolio([equity, bond])

        allocation = AllocationService.by_asset_class(portfolio)

        assert allocation["equity"].percentage == Decimal("75")
        assert allocation["debt"].percentage == Decimal("25")
        assert allocation["equity"].investment_ids == [equity.id]
        assert allocation["debt"].investment_ids == [bond.id]

    def test_zero_value_portfolio(self):
        """A portfolio worth nothing reports 0% for every bucket."""
        portfolio = make_portfolio([make_investment("TCS", current_price="0")])

        allocation = AllocationService.by_asset_class(portfolio)

        assert all(bucket.percentage == 0 for bucket in allocation.values())

    def test_percentages_sum_to_100(self):
        """Non-empty portfolios sum to 100%."""
        portfolio = make_portfolio([
            make_investment("X", kind="equity", quantity="3", average_cost="10"),
            make_investment("Y", kind="gold_etf", quantity="3", average_cost="10"),
            make_investment("Z", kind="liquid_fund", quantity="3", average_cost="10"),
        ])

        allocation = AllocationService.by_asset_class(portfolio)
        total = sum(bucket.percentage for bucket in allocation.values())

        assert abs(total - Decimal("100")) < Decimal("0.0000001")


class TestBySector:
    """Tests for the sector breakdown."""

    def test_two_investment_example(self, sample_portfolio):
        """IT is 62.5% and Banking 37.5% of the example portfolio."""
        allocation = AllocationService.by_sector(sample_portfolio)

        assert allocation["IT"].percentage == Decimal("62.5")
        assert allocation["Banking"].percentage == Decimal("37.5")

    def test_blank_sector_goes_to_others(self):
        """Missing sector labels are grouped under Others."""
        portfolio = make_portfolio([
            make_investment("X", sector=""),
            make_investment("Y", sector="   "),
        ])

        allocation = AllocationService.by_sector(portfolio)

        assert list(allocation) == [UNKNOWN_SECTOR]
        assert allocation[UNKNOWN_SECTOR].percentage == Decimal("100")

    def test_sector_label_kept_verbatim(self):
        """Sector labels are not normalized."""
        portfolio = make_portfolio([
            make_investment("X", sector="Banking"),
            make_investment("Y", sector="banking"),
        ])

        assert set(AllocationService.by_sector(portfolio)) == {"Banking", "banking"}
