"""Tests for application settings."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        """Defaults run fully in memory with simulated prices."""
        for name in ("PORTFOLIO_STORE", "PRICE_PROVIDER", "YAHOO_SYMBOL_SUFFIX"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.PORTFOLIO_STORE == "memory"
        assert settings.PRICE_PROVIDER == "static"
        assert settings.YAHOO_SYMBOL_SUFFIX == ".NS"
        assert settings.REBALANCE_THRESHOLD_PERCENT == Decimal("5")
        assert settings.TARGET_ALLOCATION_TOLERANCE == Decimal("1")

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORTFOLIO_STORE", "sql")
        monkeypatch.setenv("REBALANCE_THRESHOLD_PERCENT", "2.5")

        settings = Settings(_env_file=None)

        assert settings.PORTFOLIO_STORE == "sql"
        assert settings.REBALANCE_THRESHOLD_PERCENT == Decimal("2.5")

    def test_unknown_store_rejected(self, monkeypatch):
        monkeypatch.setenv("PORTFOLIO_STORE", "redis")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
