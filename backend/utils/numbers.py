"""Decimal helpers shared by the analytics services."""

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Convert ints, floats, strings and Decimals to ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.

    Raises:
        ValueError: The value is None, not numeric, or not finite.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return result


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100``, defined as 0 when ``whole`` is 0."""
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED
