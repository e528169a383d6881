"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from api.market_data import get_market_data_service
from api.portfolio import get_portfolio_repository
from database import Base
from main import app
from services.market_data_service import MarketDataService
from services.portfolio_repository import InMemoryPortfolioRepository
# Pytest fixtures - imported to make them available to tests
from tests.fixtures import sample_portfolio, sql_portfolio  # noqa: F401
from tests.fixtures.mocks import MockPriceLookup


@pytest.fixture(name="db")
def db_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="price_lookup")
def price_lookup_fixture():
    """Mock price lookup with sample prices; B's lookup fails."""
    return MockPriceLookup(failing={"B"})


@pytest.fixture(name="repository")
def repository_fixture():
    """Fresh in-memory portfolio store."""
    return InMemoryPortfolioRepository()


@pytest.fixture(name="client")
def client_fixture(repository, price_lookup):
    """Create a test client over a fresh in-memory store and mock prices."""
    market_data_service = MarketDataService(provider=price_lookup)

    app.dependency_overrides[get_portfolio_repository] = lambda: repository
    app.dependency_overrides[get_market_data_service] = lambda: market_data_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
