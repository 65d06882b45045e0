"""Decimal helpers shared by the fee calculators"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from mahnung_gateway.domain.exceptions import InvalidInputError

CENT = Decimal("0.01")

# Largest amount, claim value or multiplier a calculator accepts (one trillion)
MAX_AMOUNT = Decimal("1E12")

# Working precision for fee arithmetic; amounts up to MAX_AMOUNT never get near it
ARITHMETIC_PRECISION = 50


def round2(value: Decimal) -> Decimal:
    """Round to cents, half away from zero (0.005 -> 0.01, -0.005 -> -0.01)"""
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidInputError(f"Amount {value} is too large to round to cents") from None


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Coerce a numeric input into a finite Decimal.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    Booleans are rejected even though they are ints.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{field} must be a number, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidInputError(f"{field} is not a valid number: {value!r}") from None
    else:
        raise InvalidInputError(f"{field} must be a number, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}")

    return result


def to_positive_decimal(value: Any, field: str = "value", maximum: Decimal = MAX_AMOUNT) -> Decimal:
    """Coerce and require a strictly positive amount no larger than maximum"""
    result = to_decimal(value, field)
    if result <= 0:
        raise InvalidInputError(f"{field} must be greater than zero, got {result}")
    if result > maximum:
        raise InvalidInputError(f"{field} must not exceed {maximum}, got {result}")
    return result
