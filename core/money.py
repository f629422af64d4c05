"""
Fixed-point money helpers.

Every monetary value in pricing is a Decimal quantized to cents with
round-half-up. Rounding happens at each sub-computation (tax, fee,
discount), never only at the final total.
"""

from decimal import Decimal, ROUND_HALF_UP, ROUND_FLOOR

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value) -> Decimal:
    """Round to 2 decimal places, half-up."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def non_negative(value) -> Decimal:
    """Clamp at zero, then round to cents."""
    return max(ZERO, round2(value))


def percent_of(amount: Decimal, percent: Decimal) -> Decimal:
    """amount * percent / 100, rounded to cents."""
    return round2(to_decimal(amount) * to_decimal(percent) / HUNDRED)


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    return max(lower, min(value, upper))


def floor_int(value) -> int:
    """Floor to a whole number (loyalty points are never rounded up)."""
    return int(to_decimal(value).to_integral_value(rounding=ROUND_FLOOR))
