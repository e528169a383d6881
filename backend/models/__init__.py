"""SQLAlchemy ORM models."""

from .investment import Investment
from .portfolio import Portfolio
from .utils import generate_uuid, utc_now

__all__ = ["Investment", "Portfolio", "generate_uuid", "utc_now"]
