"""Unit tests for the static knowledge tables and lookups."""

import pytest

from services import knowledge_base as kb


class TestFindStocks:
    def test_by_symbol_and_name_in_order(self):
        """Mentions are returned in order of appearance."""
        mentions = kb.find_stocks("Compare TCS and HDFC Bank")

        assert [m.stock.symbol for m in mentions] == ["TCS", "HDFCBANK"]
        assert mentions[1].matched == "hdfc bank"

    def test_each_stock_once(self):
        mentions = kb.find_stocks("Reliance Industries (RELIANCE) vs RIL")
        assert [m.stock.symbol for m in mentions] == ["RELIANCE"]

    def test_whole_words_only(self):
        """'ril' inside 'April' is not Reliance."""
        assert kb.find_stocks("Results due in April") == []


class TestFindCommodities:
    def test_gold_and_silver(self):
        names = [c.name for c in kb.find_commodities("Is GOLD better than silver?")]
        assert names == ["gold", "silver"]

    def test_none(self):
        assert kb.find_commodities("goldfish") == []


class TestGetStock:
    def test_known(self):
        assert kb.get_stock(" tcs ").name == "Tata Consultancy Services"

    def test_unknown(self):
        assert kb.get_stock("NOPE") is None


class TestStockRecommendations:
    """Tests for the risk-aware stock shortlist."""

    def test_conservative(self):
        """Large caps with P/E below 25 and dividend above 1%."""
        picks = kb.stock_recommendations("conservative")
        assert [s.symbol for s in picks] == ["RELIANCE", "HDFCBANK", "TATAMOTORS"]

    def test_moderate(self):
        """Large and mid caps, capped at five."""
        picks = kb.stock_recommendations("moderate")
        assert [s.symbol for s in picks] == ["RELIANCE", "TCS", "HDFCBANK", "TATAMOTORS", "AUBANK"]

    def test_aggressive(self):
        """Any cap with more than 15% upside."""
        picks = kb.stock_recommendations("aggressive")
        assert [s.symbol for s in picks] == ["AUBANK", "POLYMED", "SARVESHWAR"]

    def test_limit(self):
        assert len(kb.stock_recommendations("moderate", limit=2)) == 2


class TestMutualFunds:
    @pytest.mark.parametrize(
        "message,expected",
        [
            ("best tax saver fund", "elss"),
            ("a good flexi cap fund", "flexi_cap"),
            ("bluechip funds", "large_cap"),
            ("any fund", None),
        ],
    )
    def test_detect_fund_type(self, message, expected):
        assert kb.detect_fund_type(message) == expected

    def test_category_funds(self):
        funds = kb.mutual_fund_recommendations("elss")
        assert [f.name for f in funds] == ["Axis Long Term Equity Fund"]

    def test_default_mix(self):
        funds = kb.mutual_fund_recommendations(None)
        assert [f.category for f in funds] == ["Large Cap", "Large Cap", "Flexi Cap"]

    def test_conservative_filters_risk(self):
        """Conservative investors only see Low or Moderate risk funds."""
        funds = kb.mutual_fund_recommendations(None, "conservative")
        assert {f.risk for f in funds} == {"Moderate"}


class TestOptimalAllocation:
    @pytest.mark.parametrize(
        "age,risk_profile,equity",
        [
            (30, "moderate", 70),
            (30, "conservative", 60),
            (25, "aggressive", 80),
            (70, "conservative", 20),
            (None, "moderate", 70),
        ],
    )
    def test_equity_share(self, age, risk_profile, equity):
        """100 minus age, nudged by risk profile, clamped to 20-80."""
        allocation = kb.optimal_allocation(age, risk_profile)

        assert allocation["equity"] == equity
        assert allocation["debt"] == 90 - equity
        assert sum(allocation.values()) == 100
