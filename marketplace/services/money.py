"""
Money Utilities - Safe Decimal operations for monetary values.

Prices travel as integer cents; Decimal is only produced for display
totals so no float ever takes part in cart arithmetic.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "$",
    "EUR": "€",
}


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def from_cents(cents: int) -> Decimal:
    """
    Convert integer cents to a major-unit Decimal.

    Args:
        cents: Amount in cents (e.g., 1050)

    Returns:
        Amount in major units as Decimal (e.g., 10.50)
    """
    return Decimal(cents) / Decimal(100)


def parse_cents(value: Union[str, int, float, Decimal, None]) -> int:
    """
    Parse a cents field coming from JSON or a form.

    Raises:
        ValueError: If the value is not a non-negative whole number
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"price_in_cents must be a non-negative integer, got {value!r}")
    if isinstance(value, int):
        cents = value
    else:
        try:
            decimal_value = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"price_in_cents must be a non-negative integer, got {value!r}")
        if not decimal_value.is_finite() or decimal_value != decimal_value.to_integral_value():
            raise ValueError(f"price_in_cents must be a non-negative integer, got {value!r}")
        cents = int(decimal_value)
    if cents < 0:
        raise ValueError(f"price_in_cents must be a non-negative integer, got {value!r}")
    return cents


def round_money(value: Union[str, int, float, Decimal]) -> Decimal:
    """Round monetary value to two decimal places."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Union[str, int, float, Decimal], currency: str = "BRL") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (BRL, USD, EUR)

    Returns:
        Formatted string with currency symbol, e.g. "R$ 10.50"
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol} {round_money(value):,.2f}"


def to_float(value: Union[str, int, float, Decimal]) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
