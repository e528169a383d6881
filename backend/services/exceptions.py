"""Typed exception hierarchy for portfolio service errors.

The API layer maps these onto HTTP responses:
``NotFoundError`` -> 404, ``InvalidInputError`` -> 400.
``UpstreamUnavailableError`` never leaves a price refresh; it is collected
per symbol and summarized in the refresh result.
"""


class PortfolioError(Exception):
    """Base exception for all portfolio-service errors."""

    pass


class NotFoundError(PortfolioError):
    """An unknown portfolio or investment id was requested."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidInputError(PortfolioError):
    """A request failed validation before any mutation took place.

    Carries the offending field name so callers can point at it.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidQuantityError(InvalidInputError):
    """Quantity was negative."""

    def __init__(self, value, field: str = "quantity"):
        self.value = value
        super().__init__(field, f"must not be negative, got {value}")


class InvalidPriceError(InvalidInputError):
    """A price or cost was negative (or non-positive where required)."""

    def __init__(self, value, field: str = "current_price", message: str | None = None):
        self.value = value
        super().__init__(field, message or f"must not be negative, got {value}")


class UpstreamUnavailableError(PortfolioError):
    """A price lookup for one symbol failed or returned nothing."""

    def __init__(self, symbol: str, provider_name: str = "", reason: str = "price unavailable"):
        self.symbol = symbol
        self.provider_name = provider_name
        self.reason = reason
        super().__init__(f"{symbol}: {reason}")
