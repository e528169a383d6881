"""Investment model - a single holding inside a portfolio."""

from decimal import Decimal

from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid, utc_now


class Investment(Base):
    """One position (stock, fund, bond, ...) held in a portfolio.

    ``invested_amount``, ``current_value``, ``absolute_return`` and
    ``return_percentage`` are derived from quantity, average cost and
    current price and are never set independently.
    """

    __tablename__ = "investments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    portfolio_id = Column(
        String(36), ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Classification
    kind = Column(String, nullable=False)  # e.g., "equity", "mutual_fund", "bond"
    symbol = Column(String, nullable=True)  # NSE symbol, used as the price lookup key
    name = Column(String, nullable=False)
    sector = Column(String, nullable=False, default="")
    market_cap = Column(String, nullable=False, default="")  # e.g., "Large Cap"
    isin = Column(String, nullable=False, default="")
    expense_ratio = Column(Numeric(6, 3), nullable=True)  # Mutual funds only
    purchase_date = Column(Date, nullable=True)

    # Position
    quantity = Column(Numeric(18, 6), nullable=False, default=Decimal("0"))
    average_cost = Column(Numeric(18, 4), nullable=False)
    current_price = Column(Numeric(18, 4), nullable=False)

    # Derived
    invested_amount = Column(Numeric(28, 10), nullable=False, default=Decimal("0"))
    current_value = Column(Numeric(28, 10), nullable=False, default=Decimal("0"))
    absolute_return = Column(Numeric(28, 10), nullable=False, default=Decimal("0"))
    return_percentage = Column(Numeric(18, 6), nullable=False, default=Decimal("0"))

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now)

    # Relationships
    portfolio = relationship("Portfolio", back_populates="investments")
