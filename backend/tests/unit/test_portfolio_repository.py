"""Unit tests for the in-memory and SQL portfolio repositories."""

from datetime import timedelta

import pytest

from models import Investment, Portfolio
from services.portfolio_repository import InMemoryPortfolioRepository, SqlPortfolioRepository
from tests.fixtures import make_investment, make_portfolio


@pytest.fixture(params=["memory", "sql"])
def store(request, db):
    if request.param == "memory":
        return InMemoryPortfolioRepository()
    return SqlPortfolioRepository(db)


class TestRepositoryContract:
    """Behaviour shared by both stores."""

    def test_add_and_get(self, store):
        portfolio = store.add(make_portfolio([make_investment("TCS")]))

        loaded = store.get(portfolio.id)

        assert loaded is not None
        assert loaded.id == portfolio.id
        assert [inv.symbol for inv in loaded.investments] == ["TCS"]

    def test_get_unknown_returns_none(self, store):
        assert store.get("missing") is None

    def test_list_for_user_oldest_first(self, store):
        """Only the user's portfolios, ordered by creation time."""
        newer = make_portfolio(user_id="u1")
        older = make_portfolio(user_id="u1")
        older.created_at = newer.created_at - timedelta(days=1)
        other = make_portfolio(user_id="u2")
        for portfolio in (newer, older, other):
            store.add(portfolio)

        listed = store.list_for_user("u1")

        assert [p.id for p in listed] == [older.id, newer.id]

    def test_delete(self, store):
        portfolio = store.add(make_portfolio([make_investment("TCS")]))

        assert store.delete(portfolio.id) is True
        assert store.get(portfolio.id) is None
        assert store.delete(portfolio.id) is False


class TestSqlRepository:
    """SQL-specific behaviour."""

    def test_delete_cascades_to_investments(self, db, sql_portfolio):
        """Investments are removed with their portfolio."""
        repo = SqlPortfolioRepository(db)

        repo.delete(sql_portfolio.id)

        assert db.query(Investment).count() == 0
        assert db.query(Portfolio).count() == 0

    def test_save_persists_changes(self, db, sql_portfolio):
        repo = SqlPortfolioRepository(db)
        sql_portfolio.name = "Renamed"

        repo.save(sql_portfolio)
        db.expire_all()

        assert repo.get(sql_portfolio.id).name == "Renamed"

    def test_removed_investment_is_deleted(self, db, sql_portfolio):
        """Dropping an investment from the collection deletes its row."""
        repo = SqlPortfolioRepository(db)
        sql_portfolio.investments.clear()

        repo.save(sql_portfolio)

        assert db.query(Investment).count() == 0


class TestInMemoryRepository:
    def test_delete_discards_investments(self):
        repo = InMemoryPortfolioRepository()
        portfolio = repo.add(make_portfolio([make_investment("TCS")]))

        repo.delete(portfolio.id)

        assert portfolio.investments == []

    def test_clear(self):
        repo = InMemoryPortfolioRepository()
        portfolio = repo.add(make_portfolio())

        repo.clear()

        assert repo.get(portfolio.id) is None
