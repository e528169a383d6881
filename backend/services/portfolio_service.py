"""Portfolio and investment lifecycle: CRUD, price refresh and analysis."""

import asyncio
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterator, Optional, TypeVar

from config import settings
from models import Investment, Portfolio, generate_uuid, utc_now
from schemas.portfolio import InvestmentCreate, InvestmentUpdate, PortfolioCreate, PortfolioUpdate
from services.allocation_service import ASSET_CLASS_BUCKETS
from services.exceptions import InvalidInputError, NotFoundError
from services.market_data_service import MarketDataService
from services.portfolio_analysis_service import PortfolioAnalysis, PortfolioAnalysisService
from services.portfolio_repository import PortfolioRepository
from services.portfolio_valuation_service import PortfolioValuationService
from utils.numbers import HUNDRED, ZERO, to_decimal
from utils.ticker import normalize_symbol

logger = logging.getLogger(__name__)

T = TypeVar("T")

RISK_PROFILES = ("conservative", "moderate", "aggressive")
DEFAULT_RISK_PROFILE = "moderate"
DEFAULT_PORTFOLIO_NAME = "My Portfolio"

DEFAULT_TARGET_ALLOCATIONS: dict[str, dict[str, str]] = {
    "conservative": {"equity": "30", "debt": "60", "gold": "5", "cash": "5"},
    "moderate": {"equity": "60", "debt": "30", "gold": "5", "cash": "5"},
    "aggressive": {"equity": "80", "debt": "15", "gold": "3", "cash": "2"},
}


@dataclass
class RefreshResult:
    """Outcome of a price refresh.

    ``unavailable_symbols`` kept their last known price.
    """

    portfolio: Portfolio
    updated_investment_ids: list[str] = field(default_factory=list)
    unavailable_symbols: list[str] = field(default_factory=list)


class PortfolioService:
    """Owns every mutation of portfolios and their investments.

    Each mutation validates its input first, then changes the records,
    recomputes the derived fields and saves, all while holding that
    portfolio's lock. At most one writer runs per portfolio id; analysis
    takes the same lock so it never observes a half-applied change.
    """

    # Shared across instances: the API builds a service per request.
    _locks: dict[str, threading.RLock] = {}
    _locks_guard = threading.Lock()

    def __init__(
        self,
        repository: PortfolioRepository,
        market_data_service: Optional[MarketDataService] = None,
        analysis_service: Optional[PortfolioAnalysisService] = None,
    ):
        self.repository = repository
        self._market_data_service = market_data_service
        self._analysis_service = analysis_service

    @property
    def market_data_service(self) -> MarketDataService:
        if self._market_data_service is None:
            self._market_data_service = MarketDataService()
        return self._market_data_service

    @property
    def analysis_service(self) -> PortfolioAnalysisService:
        if self._analysis_service is None:
            self._analysis_service = PortfolioAnalysisService()
        return self._analysis_service

    @classmethod
    def _lock_for(cls, portfolio_id: str) -> threading.RLock:
        with cls._locks_guard:
            lock = cls._locks.get(portfolio_id)
            if lock is None:
                lock = cls._locks[portfolio_id] = threading.RLock()
            return lock

    @classmethod
    def _discard_lock(cls, portfolio_id: str) -> None:
        with cls._locks_guard:
            cls._locks.pop(portfolio_id, None)

    @contextmanager
    def _locked(self, portfolio_id: str) -> Iterator[Portfolio]:
        """Hold the portfolio's lock and yield it, or raise NotFoundError.

        Unknown ids never get a lock entry.
        """
        if self.repository.get(portfolio_id) is None:
            raise NotFoundError("Portfolio", portfolio_id)
        with self._lock_for(portfolio_id):
            portfolio = self.repository.get(portfolio_id)
            if portfolio is None:
                # Deleted while we waited for the lock
                self._discard_lock(portfolio_id)
                raise NotFoundError("Portfolio", portfolio_id)
            yield portfolio

    def snapshot(self, portfolio_id: str, render: Callable[[Portfolio], T]) -> T:
        """Run ``render`` over the portfolio while holding its lock.

        API responses are built here, so they never show a half-applied
        mutation.
        """
        with self._locked(portfolio_id) as portfolio:
            return render(portfolio)

    def list_snapshots(self, user_id: str, render: Callable[[Portfolio], T]) -> list[T]:
        """Render each of a user's portfolios under its own lock, oldest first."""
        snapshots = []
        for portfolio in self.repository.list_for_user(user_id):
            try:
                snapshots.append(self.snapshot(portfolio.id, render))
            except NotFoundError:
                logger.debug("Portfolio %s deleted while listing", portfolio.id)
        return snapshots

    # Validation

    @staticmethod
    def validate_risk_profile(risk_profile: str) -> str:
        normalized = (risk_profile or "").strip().lower()
        if normalized not in RISK_PROFILES:
            raise InvalidInputError(
                "risk_profile", f"must be one of {', '.join(RISK_PROFILES)}, got {risk_profile!r}"
            )
        return normalized

    @staticmethod
    def validate_target_allocation(target_allocation: dict) -> dict[str, str]:
        """Check buckets and percentages; return the allocation as decimal strings.

        Keys must be asset class buckets, each value within [0, 100], and the
        total within ``TARGET_ALLOCATION_TOLERANCE`` of 100.
        """
        if not isinstance(target_allocation, dict) or not target_allocation:
            raise InvalidInputError("target_allocation", "must be a non-empty mapping")

        validated: dict[str, Decimal] = {}
        for raw_key, raw_value in target_allocation.items():
            key = str(raw_key).strip().lower()
            field_name = f"target_allocation.{raw_key}"
            if key not in ASSET_CLASS_BUCKETS:
                raise InvalidInputError(
                    field_name, f"unknown asset class; expected one of {', '.join(ASSET_CLASS_BUCKETS)}"
                )
            if key in validated:
                raise InvalidInputError(field_name, "duplicate asset class")
            try:
                value = to_decimal(raw_value)
            except ValueError:
                raise InvalidInputError(field_name, f"must be a number, got {raw_value!r}")
            if value < 0 or value > HUNDRED:
                raise InvalidInputError(field_name, f"must be between 0 and 100, got {value}")
            validated[key] = value

        total = sum(validated.values(), ZERO)
        if abs(total - HUNDRED) > settings.TARGET_ALLOCATION_TOLERANCE:
            raise InvalidInputError(
                "target_allocation", f"percentages must add up to 100, got {total}"
            )
        return {key: str(value) for key, value in validated.items()}

    # Portfolios

    def create_portfolio(self, data: PortfolioCreate) -> Portfolio:
        """Create an empty portfolio with zeroed aggregates.

        Raises:
            InvalidInputError: Missing user id, unknown risk profile or a
                malformed target allocation.
        """
        user_id = (data.user_id or "").strip()
        if not user_id:
            raise InvalidInputError("user_id", "is required")

        risk_profile = (
            self.validate_risk_profile(data.risk_profile)
            if data.risk_profile is not None
            else DEFAULT_RISK_PROFILE
        )
        if data.target_allocation is not None:
            target_allocation = self.validate_target_allocation(data.target_allocation)
        else:
            target_allocation = dict(DEFAULT_TARGET_ALLOCATIONS[risk_profile])

        now = utc_now()
        portfolio = Portfolio(
            id=generate_uuid(),
            user_id=user_id,
            name=(data.name or "").strip() or DEFAULT_PORTFOLIO_NAME,
            description=data.description or "",
            risk_profile=risk_profile,
            target_allocation=target_allocation,
            total_invested=ZERO,
            current_value=ZERO,
            total_returns=ZERO,
            return_percentage=ZERO,
            created_at=now,
            updated_at=now,
        )
        self.repository.add(portfolio)
        logger.info("Created portfolio %s for user %s", portfolio.id, user_id)
        return portfolio

    def get_portfolio(self, portfolio_id: str) -> Portfolio:
        with self._locked(portfolio_id) as portfolio:
            return portfolio

    def list_portfolios(self, user_id: str) -> list[Portfolio]:
        return self.repository.list_for_user(user_id)

    def update_portfolio(self, portfolio_id: str, data: PortfolioUpdate) -> Portfolio:
        """Update name, description, risk profile or target allocation.

        Changing only the risk profile leaves the target allocation as is.
        """
        with self._locked(portfolio_id) as portfolio:
            risk_profile = (
                self.validate_risk_profile(data.risk_profile)
                if data.risk_profile is not None
                else None
            )
            target_allocation = (
                self.validate_target_allocation(data.target_allocation)
                if data.target_allocation is not None
                else None
            )

            if data.name is not None:
                portfolio.name = data.name.strip() or DEFAULT_PORTFOLIO_NAME
            if data.description is not None:
                portfolio.description = data.description
            if risk_profile is not None:
                portfolio.risk_profile = risk_profile
            if target_allocation is not None:
                portfolio.target_allocation = target_allocation
            portfolio.updated_at = utc_now()

            self.repository.save(portfolio)
            logger.info("Updated portfolio %s", portfolio_id)
            return portfolio

    def delete_portfolio(self, portfolio_id: str) -> None:
        """Delete a portfolio together with all of its investments."""
        with self._lock_for(portfolio_id):
            deleted = self.repository.delete(portfolio_id)
        self._discard_lock(portfolio_id)
        if not deleted:
            raise NotFoundError("Portfolio", portfolio_id)
        logger.info("Deleted portfolio %s", portfolio_id)

    # Investments

    def add_investment(self, portfolio_id: str, data: InvestmentCreate) -> Investment:
        """Add an investment and recompute the portfolio.

        ``current_price`` defaults to ``average_cost`` when not given.

        Raises:
            NotFoundError: Unknown portfolio.
            InvalidInputError: A required field is missing, or quantity,
                cost or price is out of range.
        """
        kind = (data.kind or "").strip().lower()
        if not kind:
            raise InvalidInputError("kind", "is required")
        symbol = normalize_symbol(data.symbol) if data.symbol and data.symbol.strip() else None
        name = (data.name or "").strip() or symbol
        if not name:
            raise InvalidInputError("name", "either name or symbol is required")

        quantity = PortfolioValuationService.validate_quantity(data.quantity)
        average_cost = PortfolioValuationService.validate_average_cost(data.average_cost)
        current_price = (
            PortfolioValuationService.validate_price(data.current_price)
            if data.current_price is not None
            else average_cost
        )
        expense_ratio = None
        if data.expense_ratio is not None:
            expense_ratio = to_decimal(data.expense_ratio)
            if expense_ratio < 0:
                raise InvalidInputError("expense_ratio", f"must not be negative, got {expense_ratio}")

        with self._locked(portfolio_id) as portfolio:
            now = utc_now()
            investment = Investment(
                id=generate_uuid(),
                portfolio_id=portfolio.id,
                kind=kind,
                symbol=symbol,
                name=name,
                sector=(data.sector or "").strip(),
                market_cap=(data.market_cap or "").strip(),
                isin=(data.isin or "").strip(),
                expense_ratio=expense_ratio,
                purchase_date=data.purchase_date,
                quantity=quantity,
                average_cost=average_cost,
                current_price=current_price,
                created_at=now,
                updated_at=now,
            )
            PortfolioValuationService.recompute_investment(investment, now)
            portfolio.investments.append(investment)
            PortfolioValuationService.recompute_portfolio(portfolio, now)

            self.repository.save(portfolio)
            logger.info(
                "Added investment %s (%s) to portfolio %s",
                investment.id, symbol or name, portfolio_id,
            )
            return investment

    def update_investment(
        self, portfolio_id: str, investment_id: str, data: InvestmentUpdate
    ) -> Investment:
        """Update an investment's position or labels and recompute.

        All numeric fields are validated before anything changes.
        """
        quantity = (
            PortfolioValuationService.validate_quantity(data.quantity)
            if data.quantity is not None
            else None
        )
        average_cost = (
            PortfolioValuationService.validate_average_cost(data.average_cost)
            if data.average_cost is not None
            else None
        )
        current_price = (
            PortfolioValuationService.validate_price(data.current_price)
            if data.current_price is not None
            else None
        )
        if data.name is not None and not data.name.strip():
            raise InvalidInputError("name", "must not be blank")

        with self._locked(portfolio_id) as portfolio:
            investment = portfolio.find_investment(investment_id)
            if investment is None:
                raise NotFoundError("Investment", investment_id)

            if quantity is not None:
                investment.quantity = quantity
            if average_cost is not None:
                investment.average_cost = average_cost
            if current_price is not None:
                investment.current_price = current_price
            if data.name is not None:
                investment.name = data.name.strip()
            if data.sector is not None:
                investment.sector = data.sector.strip()
            if data.market_cap is not None:
                investment.market_cap = data.market_cap.strip()

            now = utc_now()
            PortfolioValuationService.recompute_investment(investment, now)
            PortfolioValuationService.recompute_portfolio(portfolio, now)

            self.repository.save(portfolio)
            logger.info("Updated investment %s in portfolio %s", investment_id, portfolio_id)
            return investment

    def remove_investment(self, portfolio_id: str, investment_id: str) -> Portfolio:
        """Remove an investment; the aggregates drop its contribution."""
        with self._locked(portfolio_id) as portfolio:
            investment = portfolio.find_investment(investment_id)
            if investment is None:
                raise NotFoundError("Investment", investment_id)

            portfolio.investments.remove(investment)
            PortfolioValuationService.recompute_portfolio(portfolio)

            self.repository.save(portfolio)
            logger.info("Removed investment %s from portfolio %s", investment_id, portfolio_id)
            return portfolio

    # Prices and analysis

    async def refresh_prices(self, portfolio_id: str) -> RefreshResult:
        """Look up current prices for every symbol in the portfolio.

        The lock is released while lookups are pending and reacquired to
        apply all prices with a single recompute. A symbol whose lookup
        fails keeps its last known price; it is reported in
        ``unavailable_symbols`` rather than raised.

        The locked sections run in a worker thread so a writer holding the
        lock never stalls the event loop.
        """
        symbols = await asyncio.to_thread(self._symbols_of, portfolio_id)
        fetch = await self.market_data_service.get_current_prices(symbols)
        portfolio, updated_ids = await asyncio.to_thread(self._apply_prices, portfolio_id, fetch.prices)

        unavailable = sorted(fetch.unavailable)
        logger.info(
            "Refreshed portfolio %s: %d investments updated, %d symbols unavailable",
            portfolio_id, len(updated_ids), len(unavailable),
        )
        return RefreshResult(
            portfolio=portfolio,
            updated_investment_ids=updated_ids,
            unavailable_symbols=unavailable,
        )

    def _symbols_of(self, portfolio_id: str) -> list[str]:
        with self._locked(portfolio_id) as portfolio:
            return sorted({inv.symbol.upper() for inv in portfolio.investments if inv.symbol})

    def _apply_prices(self, portfolio_id: str, prices: dict[str, Decimal]) -> tuple[Portfolio, list[str]]:
        with self._locked(portfolio_id) as portfolio:
            updated_ids = PortfolioValuationService.apply_prices(portfolio, prices)
            self.repository.save(portfolio)
            return portfolio, updated_ids

    def get_analysis(self, portfolio_id: str) -> PortfolioAnalysis:
        with self._locked(portfolio_id) as portfolio:
            return self.analysis_service.analyze(portfolio)
