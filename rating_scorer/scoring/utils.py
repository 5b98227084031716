"""Validation and rounding helpers shared by the scoring functions.

Scores are computed in IEEE-754 floats. Decimal is only used for display
rounding, where ROUND_HALF_UP gives the familiar "2.345 -> 2.35" behaviour
instead of Python's banker's rounding.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Integral, Real

DISPLAY_PLACES = 2


class InvalidParameterError(ValueError):
    """A scoring parameter is outside the domain the formulas are defined on."""


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert a number to Decimal with explicit precision and ROUND_HALF_UP rounding.

    Args:
        value: Numeric value to convert.
        places: Number of decimal places to quantize to.

    Returns:
        Decimal with the specified precision.
    """
    if isinstance(value, Decimal):
        return value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places,
        rounding=ROUND_HALF_UP,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).to_integral_value(rounding=ROUND_HALF_UP))


def round_display(value: float, places: int = DISPLAY_PLACES) -> float:
    """Round a score to display precision (2 decimals by default)."""
    return float(to_decimal(value, places))


def clamp(value: float, min_val: float = 0.0, max_val: float = math.inf) -> float:
    """Clamp a value to [min_val, max_val].

    Args:
        value: Value to clamp.
        min_val: Lower bound (default 0).
        max_val: Upper bound (default unbounded).

    Returns:
        Clamped value.
    """
    return max(min_val, min(max_val, value))


def require_rating(value, name: str = "average_rating") -> float:
    """Validate a finite, non-negative rating and return it as float.

    Raises:
        InvalidParameterError: If the value is not a finite number >= 0.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    if value < 0:
        raise InvalidParameterError(f"{name} must be >= 0, got {value}")
    return value


def require_count(value, name: str = "rating_count", minimum: int = 0) -> int:
    """Validate a whole-number count >= ``minimum`` and return it as int.

    Integral floats (``70.0``) are accepted; fractional ones are not.

    Raises:
        InvalidParameterError: If the value is not a whole number >= minimum.
    """
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, Integral):
        count = int(value)
    elif isinstance(value, Real) and math.isfinite(value) and float(value).is_integer():
        count = int(value)
    else:
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if count < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {count}")
    return count
