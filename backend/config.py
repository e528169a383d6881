"""Application configuration using pydantic-settings."""

from decimal import Decimal
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()

    # Storage
    DATABASE_URL: str = "sqlite:///./niveshai.db"
    PORTFOLIO_STORE: Literal["memory", "sql"] = "memory"

    # Market data
    PRICE_PROVIDER: Literal["static", "yahoo"] = "static"
    YAHOO_SYMBOL_SUFFIX: str = ".NS"  # NSE listing on Yahoo Finance
    PRICE_LOOKUP_CONCURRENCY: int = 8

    # Portfolio analytics thresholds (percent unless noted)
    REBALANCE_THRESHOLD_PERCENT: Decimal = Decimal("5")
    SECTOR_CONCENTRATION_HIGH: Decimal = Decimal("40")
    SECTOR_CONCENTRATION_MEDIUM: Decimal = Decimal("30")
    VOLATILITY_HIGH: Decimal = Decimal("20")
    VOLATILITY_MEDIUM: Decimal = Decimal("15")
    UNDERPERFORMER_RETURN_PERCENT: Decimal = Decimal("-20")
    DIVERSIFICATION_ALERT_SCORE: int = 5  # score, not percent
    TARGET_ALLOCATION_TOLERANCE: Decimal = Decimal("1")

    # App settings
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"


settings = Settings()
