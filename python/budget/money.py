"""
Money and Percentage Utilities

Rounding, cent conversion, percentage and formatting helpers shared by the
budget modules. All arithmetic is done on Decimal; floats are only accepted
as input and converted through their string form.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .exceptions import DivisionError, ValidationError

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Convert a number or numeric string to Decimal.

    Args:
        value: int, float, str or Decimal

    Returns:
        Decimal value

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}")
    if not result.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    return result


def round_money(amount: Any) -> Decimal:
    """Round to 2 decimal places, half up."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Any) -> int:
    """Convert an amount to integer cents (half up)."""
    return int(round_money(amount) * 100)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a 2dp Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def round_percentage(value: Any, places: int = 1) -> Decimal:
    """Round a percentage to the given number of decimal places, half up."""
    exponent = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def percentage_of(part: Any, whole: Any, places: int = 1) -> Decimal:
    """Return part as a percentage of whole.

    Raises:
        DivisionError: If whole is zero
    """
    whole = to_decimal(whole)
    if whole == 0:
        raise DivisionError("Cannot compute a percentage of a zero amount")
    return round_percentage(to_decimal(part) / whole * HUNDRED, places)


def format_currency(amount: Any, symbol: str = "$") -> str:
    """Format an amount as currency, e.g. ``$1,250.00`` or ``-$5.00``."""
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: Any) -> str:
    """Format a percentage, dropping a trailing ``.0`` (``85`` / ``85.5``)."""
    pct = round_percentage(value)
    if pct == pct.to_integral_value():
        return str(int(pct))
    return str(pct)
