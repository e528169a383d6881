"""Pydantic schemas for market data responses."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class QuoteResponse(BaseModel):
    """Latest price for one symbol."""

    symbol: str
    price: Decimal
    source: str
    price_date: Optional[date] = None
    change_percent: Optional[Decimal] = None

    model_config = ConfigDict(from_attributes=True)


class IndexSnapshot(BaseModel):
    current: Decimal
    change: Decimal
    change_percent: Decimal
    pe: Decimal
    pb: Decimal
    dividend_yield: Decimal


class MarketMover(BaseModel):
    symbol: str
    price: Decimal
    change_percent: Decimal


class MarketOverviewResponse(BaseModel):
    """Nifty 50 / Sensex levels, sentiment, top movers and sector moves."""

    nifty50: IndexSnapshot
    sensex: IndexSnapshot
    market_sentiment: str
    vix: Decimal
    top_gainers: list[MarketMover]
    top_losers: list[MarketMover]
    sector_performance: dict[str, Decimal]
