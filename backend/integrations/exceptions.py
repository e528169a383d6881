"""Errors raised by price lookup clients.

The market data service turns either kind into a per-symbol
``UpstreamUnavailableError``, so one bad symbol never sinks a batch.
"""


class ProviderError(Exception):
    """A price lookup failed inside ``provider_name``."""

    def __init__(self, message: str, provider_name: str = ""):
        self.provider_name = provider_name
        super().__init__(message)


class ProviderConnectionError(ProviderError):
    """The provider could not be reached (timeout, refused connection)."""


class ProviderDataError(ProviderError):
    """The provider answered with data that could not be parsed."""
