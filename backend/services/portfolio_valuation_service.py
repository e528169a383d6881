"""Valuation engine: keeps investment and portfolio derived fields consistent.

Every derived number is recomputed from the stored inputs (quantity,
average cost, current price); nothing is patched incrementally. After any
mutation the caller runs :meth:`PortfolioValuationService.recompute_portfolio`
once, so aggregates never include contributions from removed investments.
"""

import logging
from datetime import datetime
from decimal import Decimal

from models import Investment, Portfolio, utc_now
from services.exceptions import InvalidPriceError, InvalidQuantityError
from utils.numbers import ZERO, percent_of, to_decimal

logger = logging.getLogger(__name__)


class PortfolioValuationService:
    """Recomputes derived valuation fields in place."""

    @staticmethod
    def validate_quantity(quantity, field: str = "quantity") -> Decimal:
        """Return ``quantity`` as a Decimal, rejecting negatives."""
        try:
            value = to_decimal(quantity)
        except ValueError:
            raise InvalidQuantityError(quantity, field)
        if value < 0:
            raise InvalidQuantityError(value, field)
        return value

    @staticmethod
    def validate_price(price, field: str = "current_price") -> Decimal:
        """Return ``price`` as a Decimal, rejecting negatives."""
        try:
            value = to_decimal(price)
        except ValueError:
            raise InvalidPriceError(price, field, f"must be a number, got {price!r}")
        if value < 0:
            raise InvalidPriceError(value, field)
        return value

    @staticmethod
    def validate_average_cost(cost, field: str = "average_cost") -> Decimal:
        """Return ``cost`` as a Decimal; average cost must be strictly positive."""
        try:
            value = to_decimal(cost)
        except ValueError:
            raise InvalidPriceError(cost, field, f"must be a number, got {cost!r}")
        if value <= 0:
            raise InvalidPriceError(value, field, f"must be positive, got {value}")
        return value

    @staticmethod
    def recompute_investment(investment: Investment, now: datetime | None = None) -> Investment:
        """Derive invested amount, current value and returns for one investment.

        ``return_percentage`` is 0 when nothing is invested (zero quantity).
        """
        quantity = to_decimal(investment.quantity)
        average_cost = to_decimal(investment.average_cost)
        current_price = to_decimal(investment.current_price)

        invested_amount = quantity * average_cost
        current_value = quantity * current_price
        absolute_return = current_value - invested_amount

        investment.invested_amount = invested_amount
        investment.current_value = current_value
        investment.absolute_return = absolute_return
        investment.return_percentage = percent_of(absolute_return, invested_amount)
        investment.updated_at = now or utc_now()
        return investment

    @staticmethod
    def recompute_portfolio(portfolio: Portfolio, now: datetime | None = None) -> Portfolio:
        """Sum the contained investments into the portfolio aggregates."""
        total_invested = sum(
            (to_decimal(inv.invested_amount) for inv in portfolio.investments), ZERO
        )
        current_value = sum(
            (to_decimal(inv.current_value) for inv in portfolio.investments), ZERO
        )
        total_returns = current_value - total_invested

        portfolio.total_invested = total_invested
        portfolio.current_value = current_value
        portfolio.total_returns = total_returns
        portfolio.return_percentage = percent_of(total_returns, total_invested)
        portfolio.updated_at = now or utc_now()
        return portfolio

    @classmethod
    def recompute_all(cls, portfolio: Portfolio, now: datetime | None = None) -> Portfolio:
        """Recompute every investment, then the portfolio."""
        now = now or utc_now()
        for investment in portfolio.investments:
            cls.recompute_investment(investment, now)
        return cls.recompute_portfolio(portfolio, now)

    @classmethod
    def apply_prices(
        cls,
        portfolio: Portfolio,
        prices: dict[str, Decimal],
        now: datetime | None = None,
    ) -> list[str]:
        """Set current prices from ``prices`` (keyed by uppercase symbol).

        Investments without a symbol, or whose symbol is missing from
        ``prices``, keep their last known price and derived fields. The
        portfolio is recomputed once after all prices are applied.

        Returns:
            Ids of the investments whose price was updated.

        Raises:
            InvalidPriceError: A supplied price is negative. Raised before
                any investment is touched.
        """
        validated = {
            symbol.upper(): cls.validate_price(price, f"prices[{symbol}]")
            for symbol, price in prices.items()
        }
        now = now or utc_now()

        updated_ids = []
        for investment in portfolio.investments:
            if not investment.symbol:
                continue
            price = validated.get(investment.symbol.upper())
            if price is None:
                continue
            investment.current_price = price
            cls.recompute_investment(investment, now)
            updated_ids.append(investment.id)

        cls.recompute_portfolio(portfolio, now)
        logger.debug(
            "Portfolio %s: applied %d prices to %d investments",
            portfolio.id, len(validated), len(updated_ids),
        )
        return updated_ids
