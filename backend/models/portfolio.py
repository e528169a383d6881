"""Portfolio model - a user's collection of investments plus policy metadata."""

from decimal import Decimal

from sqlalchemy import JSON, Column, DateTime, Numeric, String
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid, utc_now


class Portfolio(Base):
    """A named portfolio owned by an external user id.

    Aggregate columns (``total_invested`` .. ``return_percentage``) are
    derived from the contained investments and are only ever written by
    :mod:`services.portfolio_valuation_service`.

    ``target_allocation`` maps asset class bucket -> target percent. Values
    are stored as decimal strings so they survive the JSON column intact.
    """

    __tablename__ = "portfolios"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, default="My Portfolio")
    description = Column(String, nullable=False, default="")
    risk_profile = Column(String, nullable=False, default="moderate")  # conservative | moderate | aggressive
    target_allocation = Column(JSON, nullable=False, default=dict)

    total_invested = Column(Numeric(28, 10), nullable=False, default=Decimal("0"))
    current_value = Column(Numeric(28, 10), nullable=False, default=Decimal("0"))
    total_returns = Column(Numeric(28, 10), nullable=False, default=Decimal("0"))
    return_percentage = Column(Numeric(18, 6), nullable=False, default=Decimal("0"))

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now)

    # Relationships
    investments = relationship(
        "Investment",
        back_populates="portfolio",
        cascade="all, delete-orphan",
        order_by="Investment.created_at",
    )

    def target_allocation_percentages(self) -> dict[str, Decimal]:
        """Return the target allocation with ``Decimal`` values."""
        return {
            asset_class: Decimal(str(percent))
            for asset_class, percent in (self.target_allocation or {}).items()
        }

    def find_investment(self, investment_id: str):
        """Return the contained investment with this id, or None."""
        for investment in self.investments:
            if investment.id == investment_id:
                return investment
        return None
