"""Test fixtures and sample data."""
import pytest
from decimal import Decimal

from models import Investment, Portfolio, generate_uuid, utc_now
from services.portfolio_valuation_service import PortfolioValuationService


def make_investment(
    symbol: str | None = "TCS",
    kind: str = "equity",
    quantity: str = "10",
    average_cost: str = "100",
    current_price: str | None = None,
    name: str | None = None,
    sector: str = "",
    **kwargs,
) -> Investment:
    """Build a transient investment with its derived fields computed."""
    now = utc_now()
    investment = Investment(
        id=generate_uuid(),
        kind=kind,
        symbol=symbol,
        name=name or symbol or "Unnamed",
        sector=sector,
        market_cap=kwargs.pop("market_cap", ""),
        isin=kwargs.pop("isin", ""),
        quantity=Decimal(quantity),
        average_cost=Decimal(average_cost),
        current_price=Decimal(current_price if current_price is not None else average_cost),
        created_at=now,
        updated_at=now,
        **kwargs,
    )
    return PortfolioValuationService.recompute_investment(investment, now)


def make_portfolio(
    investments: list[Investment] | None = None,
    user_id: str = "user-1",
    target_allocation: dict[str, str] | None = None,
    risk_profile: str = "moderate",
) -> Portfolio:
    """Build a transient portfolio holding ``investments``, aggregates computed."""
    now = utc_now()
    portfolio = Portfolio(
        id=generate_uuid(),
        user_id=user_id,
        name="Test Portfolio",
        description="",
        risk_profile=risk_profile,
        target_allocation=target_allocation if target_allocation is not None else {},
        total_invested=Decimal("0"),
        current_value=Decimal("0"),
        total_returns=Decimal("0"),
        return_percentage=Decimal("0"),
        created_at=now,
        updated_at=now,
    )
    for investment in investments or []:
        investment.portfolio_id = portfolio.id
        portfolio.investments.append(investment)
    return PortfolioValuationService.recompute_portfolio(portfolio, now)


@pytest.fixture
def sample_portfolio():
    """A: 10 @ 100 now 150 (IT); B: 5 @ 200 now 180 (Banking)."""
    return make_portfolio([
        make_investment("A", quantity="10", average_cost="100", current_price="150", sector="IT"),
        make_investment("B", quantity="5", average_cost="200", current_price="180", sector="Banking"),
    ])


@pytest.fixture
def sql_portfolio(db):
    """A persisted portfolio with one TCS holding."""
    portfolio = make_portfolio(
        [make_investment("TCS", quantity="2", average_cost="3000", current_price="3500", sector="IT Services")],
        target_allocation={"equity": "60", "debt": "30", "gold": "5", "cash": "5"},
    )
    db.add(portfolio)
    db.commit()
    return portfolio
