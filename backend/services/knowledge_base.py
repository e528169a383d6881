"""Static reference data for the chat assistant.

Stock profiles, commodity notes, mutual fund shortlists, model portfolio
strategies and tax-saving options for Indian retail investors. The tables
are illustrative and hand-maintained; live prices come from the market data
service.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class StockProfile:
    symbol: str
    name: str
    sector: str
    market_cap: str  # "Large Cap" | "Mid Cap" | "Small Cap"
    price: Decimal
    change_percent: Decimal
    pe: Decimal
    pb: Decimal
    roe: Decimal
    dividend_yield: Decimal
    debt_to_equity: Decimal
    recommendation: str  # BUY | HOLD
    target_price: Decimal
    upside: Decimal
    description: str
    strengths: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommodityProfile:
    name: str
    price: str
    change_percent: Decimal
    trend: str
    support: str
    resistance: str
    drivers: tuple[str, ...]
    investment_options: tuple[str, ...]


@dataclass(frozen=True)
class MutualFund:
    name: str
    category: str
    aum_crore: Decimal
    expense_ratio: Decimal
    returns: dict[str, Decimal]  # "1Y" | "3Y" | "5Y" -> % CAGR
    risk: str
    star_rating: int
    fund_manager: str
    lock_in: Optional[str] = None
    tax_benefit: Optional[str] = None


@dataclass(frozen=True)
class PortfolioStrategy:
    allocation: dict[str, int]
    description: str
    suitable_for: str
    expected_returns: str
    risk_level: str


@dataclass(frozen=True)
class TaxOption:
    name: str
    returns: str
    lock_in: str
    risk: str
    benefit: str = "Section 80C deduction"


@dataclass(frozen=True)
class StockMention:
    """A stock named in free text, with where it was found."""

    stock: StockProfile
    matched: str
    position: int = field(default=0, compare=False)


STOCKS: tuple[StockProfile, ...] = (
    StockProfile(
        symbol="RELIANCE",
        name="Reliance Industries Ltd.",
        sector="Oil & Gas",
        market_cap="Large Cap",
        price=Decimal("2543.20"),
        change_percent=Decimal("2.3"),
        pe=Decimal("22.5"),
        pb=Decimal("3.2"),
        roe=Decimal("15.2"),
        dividend_yield=Decimal("1.8"),
        debt_to_equity=Decimal("0.45"),
        recommendation="BUY",
        target_price=Decimal("2850"),
        upside=Decimal("12.1"),
        description="Diversified conglomerate with leadership in petrochemicals, retail and telecom.",
        strengths=(
            "Strong retail business growth",
            "5G rollout driving telecom growth",
            "Green energy initiatives",
            "Consistent dividend payout",
        ),
        risks=("Oil price volatility", "Regulatory challenges", "Competition in telecom"),
        aliases=("reliance", "reliance industries", "ril"),
    ),
    StockProfile(
        symbol="TCS",
        name="Tata Consultancy Services",
        sector="IT Services",
        market_cap="Large Cap",
        price=Decimal("3567.89"),
        change_percent=Decimal("1.2"),
        pe=Decimal("28.3"),
        pb=Decimal("8.9"),
        roe=Decimal("42.1"),
        dividend_yield=Decimal("2.1"),
        debt_to_equity=Decimal("0.12"),
        recommendation="BUY",
        target_price=Decimal("3800"),
        upside=Decimal("9.9"),
        description="India's largest IT services company with a global delivery footprint.",
        strengths=(
            "Strong deal pipeline",
            "Digital transformation demand",
            "Consistent margin expansion",
            "Global expansion",
        ),
        risks=("US recession concerns", "Currency fluctuation", "Talent attrition"),
        aliases=("tcs", "tata consultancy"),
    ),
    StockProfile(
        symbol="HDFCBANK",
        name="HDFC Bank Ltd.",
        sector="Banking",
        market_cap="Large Cap",
        price=Decimal("1678.90"),
        change_percent=Decimal("1.5"),
        pe=Decimal("18.7"),
        pb=Decimal("3.8"),
        roe=Decimal("16.8"),
        dividend_yield=Decimal("1.5"),
        debt_to_equity=Decimal("0.90"),
        recommendation="HOLD",
        target_price=Decimal("1850"),
        upside=Decimal("10.2"),
        description="India's largest private sector bank by assets.",
        strengths=(
            "Strong loan growth",
            "Improving asset quality",
            "Digital banking initiatives",
            "Merger synergies",
        ),
        risks=("NPA concerns", "Interest rate volatility", "Competition from fintech"),
        aliases=("hdfc bank", "hdfcbank"),
    ),
    StockProfile(
        symbol="TATAMOTORS",
        name="Tata Motors",
        sector="Automobile",
        market_cap="Large Cap",
        price=Decimal("652.34"),
        change_percent=Decimal("2.5"),
        pe=Decimal("18.5"),
        pb=Decimal("2.3"),
        roe=Decimal("14.2"),
        dividend_yield=Decimal("1.8"),
        debt_to_equity=Decimal("0.85"),
        recommendation="BUY",
        target_price=Decimal("750"),
        upside=Decimal("15.0"),
        description="Leading Indian automobile manufacturer with EV leadership.",
        strengths=("Strong brand", "EV leadership", "Global presence"),
        risks=("High competition", "Cyclical nature"),
        aliases=("tata motors", "tatamotors"),
    ),
    StockProfile(
        symbol="AUBANK",
        name="AU Small Finance Bank",
        sector="Banking",
        market_cap="Mid Cap",
        price=Decimal("632.85"),
        change_percent=Decimal("0.6"),
        pe=Decimal("15.2"),
        pb=Decimal("2.1"),
        roe=Decimal("14.3"),
        dividend_yield=Decimal("0.8"),
        debt_to_equity=Decimal("0.70"),
        recommendation="BUY",
        target_price=Decimal("750"),
        upside=Decimal("18.5"),
        description="Small finance bank with a retail lending focus.",
        strengths=(
            "Strong retail focus",
            "Digital banking leadership",
            "Expanding branch network",
            "Improving asset quality",
        ),
        risks=("Liquidity risk", "Concentration risk", "Regulatory changes"),
        aliases=("au bank", "au small finance", "aubank"),
    ),
    StockProfile(
        symbol="POLYMED",
        name="Poly Medicure Ltd.",
        sector="Medical Devices",
        market_cap="Mid Cap",
        price=Decimal("1717.25"),
        change_percent=Decimal("-0.8"),
        pe=Decimal("32.1"),
        pb=Decimal("6.8"),
        roe=Decimal("21.2"),
        dividend_yield=Decimal("0.5"),
        debt_to_equity=Decimal("0.10"),
        recommendation="BUY",
        target_price=Decimal("2100"),
        upside=Decimal("22.3"),
        description="Medical devices maker with a growing export business.",
        strengths=(
            "Growing medical devices market",
            "Export opportunities",
            "New product launches",
            "Strong R&D pipeline",
        ),
        risks=("Competition from MNCs", "Regulatory approvals", "Raw material costs"),
        aliases=("poly medicure", "polymed"),
    ),
    StockProfile(
        symbol="SARVESHWAR",
        name="Sarveshwar Foods Ltd.",
        sector="Food Processing",
        market_cap="Small Cap",
        price=Decimal("140.00"),
        change_percent=Decimal("1.4"),
        pe=Decimal("18.5"),
        pb=Decimal("2.8"),
        roe=Decimal("15.1"),
        dividend_yield=Decimal("1.2"),
        debt_to_equity=Decimal("0.60"),
        recommendation="BUY",
        target_price=Decimal("180"),
        upside=Decimal("28.6"),
        description="Basmati rice processor expanding into organic products.",
        strengths=(
            "Basmati rice market leader",
            "Export growth potential",
            "Organic product expansion",
            "Strong brand value",
        ),
        risks=("Commodity price volatility", "Weather dependency", "Export regulations"),
        aliases=("sarveshwar",),
    ),
)

COMMODITIES: dict[str, CommodityProfile] = {
    "gold": CommodityProfile(
        name="gold",
        price="₹52,000/10g",
        change_percent=Decimal("2.1"),
        trend="Bullish",
        support="₹50,500",
        resistance="₹54,000",
        drivers=("Safe-haven demand", "Central bank purchases", "Jewelry demand"),
        investment_options=("Gold ETFs", "Sovereign Gold Bonds", "Physical Gold", "Digital Gold"),
    ),
    "silver": CommodityProfile(
        name="silver",
        price="₹65,000/kg",
        change_percent=Decimal("3.2"),
        trend="Bullish",
        support="₹62,000",
        resistance="₹68,000",
        drivers=("Solar panel manufacturing surge", "EV industry demand", "Investment demand"),
        investment_options=("Silver ETFs", "Physical Silver", "Silver Futures", "Digital Silver"),
    ),
}

MUTUAL_FUNDS: dict[str, tuple[MutualFund, ...]] = {
    "large_cap": (
        MutualFund(
            name="Axis Bluechip Fund",
            category="Large Cap",
            aum_crore=Decimal("28543"),
            expense_ratio=Decimal("0.49"),
            returns={"1Y": Decimal("19.2"), "3Y": Decimal("15.1"), "5Y": Decimal("12.8")},
            risk="Moderate",
            star_rating=4,
            fund_manager="Jinesh Gopani",
        ),
        MutualFund(
            name="Mirae Asset Large Cap Fund",
            category="Large Cap",
            aum_crore=Decimal("19876"),
            expense_ratio=Decimal("0.54"),
            returns={"1Y": Decimal("18.8"), "3Y": Decimal("14.8"), "5Y": Decimal("13.1")},
            risk="Moderate",
            star_rating=4,
            fund_manager="Gaurav Misra",
        ),
    ),
    "flexi_cap": (
        MutualFund(
            name="Parag Parikh Flexi Cap Fund",
            category="Flexi Cap",
            aum_crore=Decimal("22198"),
            expense_ratio=Decimal("0.62"),
            returns={"1Y": Decimal("21.3"), "3Y": Decimal("16.8"), "5Y": Decimal("14.2")},
            risk="Moderately High",
            star_rating=5,
            fund_manager="Rajeev Thakkar",
        ),
    ),
    "elss": (
        MutualFund(
            name="Axis Long Term Equity Fund",
            category="ELSS",
            aum_crore=Decimal("28765"),
            expense_ratio=Decimal("0.82"),
            returns={"1Y": Decimal("21.2"), "3Y": Decimal("16.3"), "5Y": Decimal("13.9")},
            risk="Moderately High",
            star_rating=4,
            fund_manager="Jinesh Gopani",
            lock_in="3 years",
            tax_benefit="Section 80C",
        ),
    ),
}

# Checked in order; first hit picks the fund category for a message.
FUND_TYPE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("elss", ("elss", "tax saver", "tax saving fund")),
    ("flexi_cap", ("flexi cap", "flexicap", "multi cap", "multicap")),
    ("large_cap", ("large cap", "largecap", "bluechip", "blue chip")),
)

PORTFOLIO_STRATEGIES: dict[str, PortfolioStrategy] = {
    "conservative": PortfolioStrategy(
        allocation={"equity": 30, "debt": 60, "gold": 5, "cash": 5},
        description="Focus on capital preservation with steady returns",
        suitable_for="Retirees, low-risk investors",
        expected_returns="8-10% CAGR",
        risk_level="Low",
    ),
    "moderate": PortfolioStrategy(
        allocation={"equity": 60, "debt": 30, "gold": 5, "cash": 5},
        description="Balanced approach with growth and stability",
        suitable_for="Working professionals, medium-term goals",
        expected_returns="12-15% CAGR",
        risk_level="Medium",
    ),
    "aggressive": PortfolioStrategy(
        allocation={"equity": 80, "debt": 15, "gold": 3, "cash": 2},
        description="High growth focus with higher risk tolerance",
        suitable_for="Young investors, high-risk appetite",
        expected_returns="15-18% CAGR",
        risk_level="High",
    ),
}

REBALANCING_TRIGGERS = (
    "Asset allocation deviates by >5%",
    "Major life events (marriage, children, retirement)",
    "Significant market movements (>20%)",
)

SECTION_80C_LIMIT = "₹1,50,000"

SECTION_80C_OPTIONS: tuple[TaxOption, ...] = (
    TaxOption(name="ELSS Mutual Funds", returns="12-15%", lock_in="3 years", risk="High"),
    TaxOption(name="PPF", returns="7.1%", lock_in="15 years", risk="Low"),
    TaxOption(name="Tax Saving FD", returns="6.5-7%", lock_in="5 years", risk="Low"),
    TaxOption(
        name="NPS",
        returns="10-12%",
        lock_in="Till retirement",
        risk="Medium",
        benefit="Section 80C deduction + additional ₹50,000 under 80CCD(1B)",
    ),
)

CAPITAL_GAINS_STRATEGIES = (
    "Hold equity investments >1 year for 10% LTCG",
    "Use indexation benefits for debt funds",
    "Harvest losses to offset gains",
    "Consider tax-loss harvesting at year-end",
)


def _alias_pattern(alias: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(alias) + r"\b", re.IGNORECASE)


_STOCK_PATTERNS: tuple[tuple[re.Pattern, str, StockProfile], ...] = tuple(
    (_alias_pattern(alias), alias, stock)
    for stock in STOCKS
    for alias in sorted(set(stock.aliases) | {stock.symbol.lower()}, key=len, reverse=True)
)


def find_stocks(message: str) -> list[StockMention]:
    """Stocks named in ``message`` by name or symbol, in order of appearance."""
    found: dict[str, StockMention] = {}
    for pattern, alias, stock in _STOCK_PATTERNS:
        match = pattern.search(message)
        if match and stock.symbol not in found:
            found[stock.symbol] = StockMention(stock=stock, matched=alias, position=match.start())
    return sorted(found.values(), key=lambda m: m.position)


def find_commodities(message: str) -> list[CommodityProfile]:
    lowered = message.lower()
    return [
        commodity
        for name, commodity in COMMODITIES.items()
        if _alias_pattern(name).search(lowered)
    ]


def get_stock(symbol: str) -> Optional[StockProfile]:
    symbol = symbol.strip().upper()
    for stock in STOCKS:
        if stock.symbol == symbol:
            return stock
    return None


def stock_recommendations(risk_preference: str = "moderate", limit: int = 5) -> list[StockProfile]:
    """Shortlist by market cap and risk appetite.

    Large caps for everyone, mid caps unless conservative, small caps only
    when aggressive. Conservative investors additionally need P/E below 25
    and a dividend above 1%; aggressive ones need more than 15% upside.
    """
    caps = {"Large Cap"}
    if risk_preference != "conservative":
        caps.add("Mid Cap")
    if risk_preference == "aggressive":
        caps.add("Small Cap")

    picks = [stock for stock in STOCKS if stock.market_cap in caps]
    if risk_preference == "conservative":
        picks = [s for s in picks if s.pe < 25 and s.dividend_yield > 1]
    elif risk_preference == "aggressive":
        picks = [s for s in picks if s.upside > 15]
    return picks[:limit]


def detect_fund_type(message: str) -> Optional[str]:
    lowered = message.lower()
    for fund_type, keywords in FUND_TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return fund_type
    return None


def mutual_fund_recommendations(
    fund_type: Optional[str], risk_profile: str = "moderate", limit: int = 3
) -> list[MutualFund]:
    """Funds of the requested category (large and flexi cap when unspecified).

    Conservative investors only see funds rated Low or Moderate risk.
    """
    if fund_type in MUTUAL_FUNDS:
        funds = list(MUTUAL_FUNDS[fund_type])
    else:
        funds = [*MUTUAL_FUNDS["large_cap"], *MUTUAL_FUNDS["flexi_cap"]]
    if risk_profile == "conservative":
        funds = [f for f in funds if f.risk in ("Low", "Moderate")]
    return funds[:limit]


def optimal_allocation(age: Optional[int], risk_profile: str = "moderate") -> dict[str, int]:
    """Age-based equity split ("100 minus age"), nudged by risk profile.

    Equity is clamped to 20-80%; gold and cash are fixed at 5% each and
    debt takes the rest.
    """
    age = age or 30
    equity = 100 - age
    if risk_profile == "conservative":
        equity -= 10
    elif risk_profile == "aggressive":
        equity += 10
    equity = max(20, min(80, equity))
    return {"equity": equity, "debt": 90 - equity, "gold": 5, "cash": 5}
