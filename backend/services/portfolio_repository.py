"""Storage for portfolios, swappable between process memory and SQL."""

import logging
import threading
from typing import Protocol

from sqlalchemy.orm import Session, selectinload

from models import Portfolio

logger = logging.getLogger(__name__)


class PortfolioRepository(Protocol):
    """What the portfolio service needs from a store.

    ``save`` is called after every mutation; stores that track objects
    themselves (in-memory) may treat it as a no-op beyond bookkeeping.
    """

    def add(self, portfolio: Portfolio) -> Portfolio:
        ...

    def get(self, portfolio_id: str) -> Portfolio | None:
        ...

    def list_for_user(self, user_id: str) -> list[Portfolio]:
        ...

    def save(self, portfolio: Portfolio) -> Portfolio:
        ...

    def delete(self, portfolio_id: str) -> bool:
        ...


class InMemoryPortfolioRepository:
    """Process-wide map of portfolio id -> Portfolio.

    Portfolios are transient ORM objects; their investments live only in
    the ``investments`` collection, so dropping the portfolio drops them too.
    """

    def __init__(self):
        self._portfolios: dict[str, Portfolio] = {}
        self._lock = threading.Lock()

    def add(self, portfolio: Portfolio) -> Portfolio:
        with self._lock:
            self._portfolios[portfolio.id] = portfolio
        return portfolio

    def get(self, portfolio_id: str) -> Portfolio | None:
        return self._portfolios.get(portfolio_id)

    def list_for_user(self, user_id: str) -> list[Portfolio]:
        with self._lock:
            portfolios = list(self._portfolios.values())
        return sorted(
            (p for p in portfolios if p.user_id == user_id),
            key=lambda p: p.created_at,
        )

    def save(self, portfolio: Portfolio) -> Portfolio:
        return portfolio

    def delete(self, portfolio_id: str) -> bool:
        with self._lock:
            portfolio = self._portfolios.pop(portfolio_id, None)
        if portfolio is None:
            return False
        portfolio.investments.clear()
        return True

    def clear(self) -> None:
        with self._lock:
            self._portfolios.clear()


class SqlPortfolioRepository:
    """Portfolios persisted through a SQLAlchemy session.

    Deleting a portfolio removes its investments through the
    ``all, delete-orphan`` cascade on the relationship.
    """

    def __init__(self, db: Session):
        self.db = db

    def add(self, portfolio: Portfolio) -> Portfolio:
        self.db.add(portfolio)
        self.db.commit()
        return portfolio

    def get(self, portfolio_id: str) -> Portfolio | None:
        return (
            self.db.query(Portfolio)
            .options(selectinload(Portfolio.investments))
            .filter(Portfolio.id == portfolio_id)
            .first()
        )

    def list_for_user(self, user_id: str) -> list[Portfolio]:
        return (
            self.db.query(Portfolio)
            .options(selectinload(Portfolio.investments))
            .filter(Portfolio.user_id == user_id)
            .order_by(Portfolio.created_at)
            .all()
        )

    def save(self, portfolio: Portfolio) -> Portfolio:
        self.db.add(portfolio)
        self.db.commit()
        return portfolio

    def delete(self, portfolio_id: str) -> bool:
        portfolio = self.db.get(Portfolio, portfolio_id)
        if portfolio is None:
            return False
        self.db.delete(portfolio)
        self.db.commit()
        logger.debug("Deleted portfolio %s from database", portfolio_id)
        return True
