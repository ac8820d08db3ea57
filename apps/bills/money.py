"""
Money helpers.

Amounts are ``Decimal`` throughout. Calculations never round, and settled
bills store amounts exactly as entered; rounding to cents happens only when
formatting for display.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings

ZERO = Decimal('0')
CENT = Decimal('0.01')

# Stored precision of settled amounts
AMOUNT_MAX_DIGITS = 18
AMOUNT_DECIMAL_PLACES = 6

# Largest bill total that can be stored and rendered to cents
MAX_AMOUNT = Decimal('999999999999.99')


def to_money(value) -> Decimal:
    """
    Coerce an int, float, str or Decimal to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1 instead of its binary
    expansion.

    Raises:
        ValueError: If value is not a finite number
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Not an amount: {value!r}")
    else:
        raise ValueError(f"Not an amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return amount


def safe_divide(numerator: Decimal, denominator) -> Decimal:
    """Divide, returning zero instead of raising when denominator is zero."""
    if not denominator:
        return ZERO
    return numerator / denominator


def quantize(amount: Decimal) -> Decimal:
    """Round half-up to currency precision."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, symbol: str = None) -> str:
    """Render an amount for display, e.g. ``₹55.00``."""
    if symbol is None:
        symbol = settings.CURRENCY_SYMBOL
    return f"{symbol}{quantize(amount):.2f}"


def decimal_places(amount: Decimal) -> int:
    """Number of significant digits after the decimal point (``2.50`` has 1)."""
    exponent = amount.normalize().as_tuple().exponent
    return max(-exponent, 0)
