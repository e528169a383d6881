"""API route handlers."""
from . import chat, market_data, portfolio, risk_profile

__all__ = ["chat", "market_data", "portfolio", "risk_profile"]
