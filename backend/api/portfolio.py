"""Portfolio API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.helpers import translate_service_errors
from api.market_data import get_market_data_service
from config import settings
from database import get_db
from schemas import (
    InvestmentCreate,
    InvestmentResponse,
    InvestmentUpdate,
    PortfolioAnalysisResponse,
    PortfolioCreate,
    PortfolioResponse,
    PortfolioUpdate,
    RefreshResponse,
)
from services.market_data_service import MarketDataService
from services.portfolio_repository import (
    InMemoryPortfolioRepository,
    PortfolioRepository,
    SqlPortfolioRepository,
)
from services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])

# Process-wide store used when PORTFOLIO_STORE=memory
_memory_repository = InMemoryPortfolioRepository()


def _get_sql_db():
    """Yield a session only when the SQL store is configured."""
    if settings.PORTFOLIO_STORE != "sql":
        yield None
        return
    yield from get_db()


def get_portfolio_repository(db: Optional[Session] = Depends(_get_sql_db)) -> PortfolioRepository:
    """Get the configured repository; tests override this dependency."""
    if db is not None:
        return SqlPortfolioRepository(db)
    return _memory_repository


def get_portfolio_service(
    repository: PortfolioRepository = Depends(get_portfolio_repository),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> PortfolioService:
    return PortfolioService(repository, market_data_service=market_data_service)


@router.post("", response_model=PortfolioResponse, status_code=201)
def create_portfolio(
    data: PortfolioCreate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Create a portfolio with zeroed aggregates.

    A missing target allocation defaults to the risk profile's allocation.
    """
    with translate_service_errors():
        portfolio = service.create_portfolio(data)
        return service.snapshot(portfolio.id, PortfolioResponse.model_validate)


@router.get("/user/{user_id}", response_model=list[PortfolioResponse])
def list_user_portfolios(
    user_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """List every portfolio owned by a user, oldest first."""
    return service.list_snapshots(user_id, PortfolioResponse.model_validate)


@router.get("/{portfolio_id}", response_model=PortfolioResponse)
def get_portfolio(
    portfolio_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    with translate_service_errors():
        return service.snapshot(portfolio_id, PortfolioResponse.model_validate)


@router.patch("/{portfolio_id}", response_model=PortfolioResponse)
def update_portfolio(
    portfolio_id: str,
    data: PortfolioUpdate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    with translate_service_errors():
        service.update_portfolio(portfolio_id, data)
        return service.snapshot(portfolio_id, PortfolioResponse.model_validate)


@router.delete("/{portfolio_id}", status_code=204)
def delete_portfolio(
    portfolio_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Delete a portfolio and all of its investments."""
    with translate_service_errors():
        service.delete_portfolio(portfolio_id)
    return Response(status_code=204)


@router.post(
    "/{portfolio_id}/investments",
    response_model=InvestmentResponse,
    status_code=201,
)
def add_investment(
    portfolio_id: str,
    data: InvestmentCreate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Add an investment; the portfolio aggregates are recomputed.

    Raises:
        HTTPException:
            - 404 Not Found: unknown portfolio
            - 400 Bad Request: negative quantity or price, non-positive
              average cost, missing kind or name/symbol
    """
    with translate_service_errors():
        investment = service.add_investment(portfolio_id, data)
        return service.snapshot(portfolio_id, lambda _: InvestmentResponse.model_validate(investment))


@router.put(
    "/{portfolio_id}/investments/{investment_id}",
    response_model=InvestmentResponse,
)
def update_investment(
    portfolio_id: str,
    investment_id: str,
    data: InvestmentUpdate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    with translate_service_errors():
        investment = service.update_investment(portfolio_id, investment_id, data)
        return service.snapshot(portfolio_id, lambda _: InvestmentResponse.model_validate(investment))


@router.delete(
    "/{portfolio_id}/investments/{investment_id}",
    response_model=PortfolioResponse,
)
def remove_investment(
    portfolio_id: str,
    investment_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Remove an investment and return the recomputed portfolio."""
    with translate_service_errors():
        service.remove_investment(portfolio_id, investment_id)
        return service.snapshot(portfolio_id, PortfolioResponse.model_validate)


@router.post("/{portfolio_id}/refresh", response_model=RefreshResponse)
async def refresh_prices(
    portfolio_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Refresh current prices from the market data provider.

    Always 200 for a known portfolio: symbols whose lookup failed keep
    their last price and are listed in ``unavailable_symbols``.
    """
    with translate_service_errors():
        result = await service.refresh_prices(portfolio_id)
        portfolio = service.snapshot(portfolio_id, PortfolioResponse.model_validate)
    return RefreshResponse(
        portfolio=portfolio,
        updated_investment_ids=result.updated_investment_ids,
        unavailable_symbols=result.unavailable_symbols,
    )


@router.get("/{portfolio_id}/analysis", response_model=PortfolioAnalysisResponse)
def get_analysis(
    portfolio_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Allocation, performance, risk and recommendations for a portfolio."""
    with translate_service_errors():
        analysis = service.get_analysis(portfolio_id)
    return PortfolioAnalysisResponse.model_validate(analysis)
