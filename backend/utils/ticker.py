"""Utility functions for handling ticker symbols."""


def normalize_symbol(symbol: str) -> str:
    """Trim and uppercase a symbol as entered by a user."""
    return symbol.strip().upper()


def to_yahoo_symbol(symbol: str, suffix: str = ".NS") -> str:
    """Map an exchange symbol to its Yahoo Finance ticker.

    Plain NSE symbols get the exchange suffix (``TCS`` -> ``TCS.NS``).
    Index tickers (``^NSEI``) and symbols that already carry an exchange
    suffix (``RELIANCE.BO``) are returned unchanged.
    """
    normalized = normalize_symbol(symbol)
    if not suffix or normalized.startswith("^") or "." in normalized:
        return normalized
    return f"{normalized}{suffix.upper()}"
