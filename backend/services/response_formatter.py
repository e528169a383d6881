"""Markdown rendering of chat payloads."""

from decimal import Decimal
from typing import Callable

from schemas.chat import (
    ChatPayload,
    GeneralPayload,
    MarketOverviewPayload,
    MutualFundPayload,
    PortfolioAdvicePayload,
    RiskProfilingPayload,
    StockLookupPayload,
    TaxPlanningPayload,
)

DISCLAIMER = (
    "This is for educational purposes only and not SEBI-registered investment advice. "
    "Please consult a licensed financial advisor before investing."
)
MAX_CONTENT_LENGTH = 2000
TRUNCATION_MARKER = "\n\n_(response truncated)_"


def _signed(value: Decimal) -> str:
    return f"+{value}" if value > 0 else f"{value}"


def _bullets(items) -> str:
    return "".join(f"• {item}\n" for item in items)


def _format_stock_lookup(payload: StockLookupPayload) -> str:
    content = "📈 **Stock Insights**\n\n"
    nifty = payload.nifty50
    content += f"Nifty 50: {nifty.current} ({_signed(nifty.change_percent)}%)\n\n"

    for stock in payload.stocks:
        content += f"**{stock.name} ({stock.symbol})**\n"
        content += f"• **Current Price:** ₹{stock.price} ({_signed(stock.change_percent)}%)\n"
        content += f"• **Sector:** {stock.sector} | **Market Cap:** {stock.market_cap}\n"
        content += f"• **P/E:** {stock.pe} ({stock.valuation}) | **P/B:** {stock.pb} | **ROE:** {stock.roe}%\n"
        content += f"• **Dividend Yield:** {stock.dividend_yield}% | **Debt/Equity:** {stock.debt_to_equity}\n"
        content += f"• **View:** {stock.recommendation} | **Target:** ₹{stock.target_price} ({stock.upside}% upside)\n"
        content += f"{stock.description}\n"
        if stock.strengths:
            content += "**Strengths:**\n" + _bullets(stock.strengths)
        if stock.risks:
            content += "**Risks:**\n" + _bullets(stock.risks)
        content += "\n"

    if payload.recommendations:
        content += "🎯 **Stocks to Research**\n\n"
        for index, stock in enumerate(payload.recommendations, start=1):
            content += f"{index}. **{stock.symbol} - {stock.name}**\n"
            content += f"   Sector: {stock.sector} | Market Cap: {stock.market_cap}\n"
            content += f"   P/E: {stock.pe} | Dividend: {stock.dividend_yield}%\n"
            content += f"   View: {stock.recommendation} | Target: ₹{stock.target_price} ({stock.upside}% upside)\n\n"
    return content


def _format_mutual_fund(payload: MutualFundPayload) -> str:
    content = "💰 **Mutual Fund Recommendations**\n\n"
    if payload.fund_type:
        content += f"📊 **{payload.fund_type.replace('_', ' ').upper()} Funds**\n\n"
    for index, fund in enumerate(payload.funds, start=1):
        content += f"{index}. **{fund.name}**\n"
        content += f"   Category: {fund.category} | Risk: {fund.risk} | Rating: {'★' * fund.star_rating}\n"
        content += f"   AUM: ₹{fund.aum_crore} Cr | Expense Ratio: {fund.expense_ratio}%\n"
        returns = " | ".join(f"{period}: {value}%" for period, value in fund.returns.items())
        content += f"   Returns: {returns}\n"
        content += f"   Fund Manager: {fund.fund_manager}\n"
        if fund.lock_in:
            content += f"   Lock-in: {fund.lock_in} | Tax Benefit: {fund.tax_benefit}\n"
        content += "\n"
    content += f"💡 {payload.sip_note}\n"
    return content


def _format_portfolio_advice(payload: PortfolioAdvicePayload) -> str:
    content = "🎯 **Portfolio Management Strategy**\n\n"
    content += f"**Risk Profile:** {payload.risk_profile.capitalize()}\n"
    content += f"{payload.strategy_description}\n"
    content += f"Suitable for: {payload.suitable_for} | Expected returns: {payload.expected_returns}\n\n"
    content += "📊 **Recommended Asset Allocation**\n"
    for asset_class, percent in payload.recommended_allocation.items():
        content += f"• {asset_class.capitalize()}: {percent}%\n"
    content += f"_{payload.allocation_reasoning}_\n\n"
    content += "🔄 **Rebalance When**\n" + _bullets(payload.rebalancing_triggers)
    return content


def _format_tax_planning(payload: TaxPlanningPayload) -> str:
    content = "💰 **Tax Planning Strategies**\n\n"
    content += f"📋 **Section 80C Options** (limit {payload.section_80c_limit})\n"
    for option in payload.options:
        content += f"**{option.name}**\n"
        content += f"Returns: {option.returns} | Lock-in: {option.lock_in} | Risk: {option.risk}\n"
        content += f"Tax Benefit: {option.benefit}\n\n"
    content += "📈 **Capital Gains Tax**\n" + _bullets(payload.capital_gains_strategies)
    return content


def _format_risk_profiling(payload: RiskProfilingPayload) -> str:
    content = "⚠️ **Risk Assessment & Profile**\n\n"
    content += f"Type: {payload.profile_type.capitalize()}\n"
    content += f"Risk Score: {payload.score}/100\n"
    content += f"Time Horizon: {payload.time_horizon.replace('_', ' ')}\n"
    if payload.investment_amount is not None:
        content += f"Amount Mentioned: ₹{payload.investment_amount:,}\n"
    content += f"Description: {payload.description}\n\n"
    content += "🎯 **Risk Characteristics**\n" + _bullets(payload.characteristics) + "\n"
    content += "💼 **Suitable Investments**\n" + _bullets(payload.suitable_investments) + "\n"
    content += "✅ **Recommendations**\n" + _bullets(payload.recommendations)
    content += "\nFor a detailed profile, take the full risk questionnaire.\n"
    return content


def _format_market_overview(payload: MarketOverviewPayload) -> str:
    content = "🌐 **Market Overview**\n\n"
    for index in payload.indices:
        content += (
            f"**{index.name}:** {index.current} "
            f"({_signed(index.change)}, {_signed(index.change_percent)}%)\n"
        )
    content += f"**Sentiment:** {payload.sentiment} | **India VIX:** {payload.vix}\n\n"

    content += "**Top Gainers:**\n"
    content += "".join(f"• {m.symbol}: ₹{m.price} ({_signed(m.change_percent)}%)\n" for m in payload.top_gainers)
    content += "\n**Top Losers:**\n"
    content += "".join(f"• {m.symbol}: ₹{m.price} ({_signed(m.change_percent)}%)\n" for m in payload.top_losers)

    content += "\n**Sector Performance:**\n"
    content += "".join(
        f"• **{sector}**: {_signed(change)}%\n" for sector, change in payload.sector_performance.items()
    )

    for commodity in payload.commodities:
        content += f"\n💰 **{commodity.name.capitalize()}**: {commodity.price} ({_signed(commodity.change_percent)}%)\n"
        content += f"Trend: {commodity.trend} | Support: {commodity.support} | Resistance: {commodity.resistance}\n"
        content += "Drivers:\n" + _bullets(commodity.drivers)
        content += "Ways to invest:\n" + _bullets(commodity.investment_options)
    return content


def _format_general(payload: GeneralPayload) -> str:
    content = f"{payload.message}\n\n"
    content += _bullets(payload.capabilities) + "\n"
    content += "**Try asking:**\n" + _bullets(payload.examples)
    return content


FORMATTERS: dict[str, Callable] = {
    "stock_lookup": _format_stock_lookup,
    "mutual_fund": _format_mutual_fund,
    "portfolio_advice": _format_portfolio_advice,
    "tax_planning": _format_tax_planning,
    "risk_profiling": _format_risk_profiling,
    "market_overview": _format_market_overview,
    "general": _format_general,
}


def truncate(content: str, limit: int = MAX_CONTENT_LENGTH) -> str:
    """Cut ``content`` to at most ``limit`` characters, marking the cut."""
    if len(content) <= limit:
        return content
    return content[: limit - len(TRUNCATION_MARKER)].rstrip() + TRUNCATION_MARKER


class ResponseFormatter:
    """Renders a chat payload as markdown with the disclaimer appended.

    The body is capped at ``max_length`` characters before the disclaimer
    is added, so the disclaimer is never cut off.
    """

    def __init__(self, max_length: int = MAX_CONTENT_LENGTH, disclaimer: str = DISCLAIMER):
        self.max_length = max_length
        self.disclaimer = disclaimer

    def format_body(self, payload: ChatPayload) -> str:
        return truncate(FORMATTERS[payload.kind](payload).rstrip(), self.max_length)

    def format(self, payload: ChatPayload) -> str:
        return f"{self.format_body(payload)}\n\n---\n_{self.disclaimer}_"
