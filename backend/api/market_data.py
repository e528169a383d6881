"""Market data API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from schemas import MarketOverviewResponse, QuoteResponse
from services.exceptions import UpstreamUnavailableError
from services.market_data_service import MarketDataService

router = APIRouter(prefix="/api/market", tags=["market"])


def get_market_data_service() -> MarketDataService:
    """Get MarketDataService instance; tests override this dependency."""
    return MarketDataService()


@router.get("/overview", response_model=MarketOverviewResponse)
def get_market_overview(
    service: MarketDataService = Depends(get_market_data_service),
):
    """Index levels, sentiment, top gainers/losers and sector performance."""
    return service.get_market_overview()


@router.get("/quote/{symbol}", response_model=QuoteResponse)
async def get_quote(
    symbol: str,
    service: MarketDataService = Depends(get_market_data_service),
):
    """Latest price for a symbol.

    Raises:
        HTTPException: 404 if no provider price is available for the symbol.
    """
    try:
        return await service.get_quote(symbol)
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=404, detail=f"No price available for {e.symbol}") from e
