"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import chat, market_data, portfolio, risk_profile
from config import settings
from database import init_db
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup when portfolios are stored in SQL."""
    if settings.PORTFOLIO_STORE == "sql":
        init_db()
        logger.info("Portfolio store: sql (%s)", settings.DATABASE_URL)
    else:
        logger.info("Portfolio store: memory")
    logger.info("Price provider: %s", settings.PRICE_PROVIDER)
    yield


app = FastAPI(
    title="NiveshAI",
    description="Portfolio analytics and investing assistant for Indian retail investors",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(portfolio.router)
app.include_router(risk_profile.router)
app.include_router(chat.router)
app.include_router(market_data.router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
