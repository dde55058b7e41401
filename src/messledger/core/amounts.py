#!/usr/bin/env python3
"""
Amount Handling Utilities

Exact decimal arithmetic for every amount that flows through the ledger.

Key Principles:
- Amounts are ``decimal.Decimal``, never float
- Sums and products run in a fixed local context (28 digits), so results do
  not depend on the caller's decimal settings; the meal-rate division is the
  only step that rounds for realistic amounts
- Rounding for display happens here, never inside the settlement engine
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Union

ZERO = Decimal(0)

# Context for all settlement arithmetic, independent of the caller's context.
DIVISION_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)

AmountLike = Union[Decimal, int, float, str]


def parse_amount(value: AmountLike) -> Decimal:
    """
    Convert a raw amount to Decimal.

    Floats are converted through ``str`` so 0.1 becomes Decimal("0.1") rather
    than its binary expansion. Currency symbols and thousands separators are
    stripped from strings.

    Args:
        value: Amount as Decimal, int, float or string like "1,250.50"

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value is not a finite number

    Examples:
        parse_amount("1,250.50") -> Decimal("1250.50")
        parse_amount(12.5) -> Decimal("12.5")
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        clean = value.replace(",", "").replace("$", "").replace("৳", "").strip()
        if not clean:
            raise ValueError("Empty amount")
        try:
            result = Decimal(clean)
        except InvalidOperation as e:
            raise ValueError(f"Not an amount: {value!r}") from e
    else:
        raise ValueError(f"Not an amount: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return result


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum of Decimal amounts in DIVISION_CONTEXT; the empty sum is Decimal(0)."""
    with localcontext(DIVISION_CONTEXT):
        return sum(amounts, ZERO)


def safe_divide(numerator: Decimal, denominator: Union[Decimal, int]) -> Decimal:
    """
    Divide using the fixed division context.

    A zero denominator yields exactly Decimal(0) instead of raising.

    Args:
        numerator: Amount to divide
        denominator: Divisor

    Returns:
        Quotient, or Decimal(0) when the denominator is zero
    """
    if denominator == 0:
        return ZERO
    return DIVISION_CONTEXT.divide(Decimal(numerator), Decimal(denominator))


def quantize_display(amount: Decimal, places: int = 2) -> Decimal:
    """
    Round an amount for presentation (half-up, like a receipt).

    Examples:
        quantize_display(Decimal("20.005")) -> Decimal("20.01")
        quantize_display(Decimal("6.666666")) -> Decimal("6.67")
    """
    exponent = Decimal(1).scaleb(-places)
    return Decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, symbol: str = "৳", places: int = 2) -> str:
    """
    Format an amount with a currency symbol for display.

    Examples:
        format_amount(Decimal("1000")) -> "৳1,000.00"
        format_amount(Decimal("-12.5"), symbol="$") -> "-$12.50"
    """
    rounded = quantize_display(amount, places)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{places}f}"


def amount_to_str(amount: Decimal) -> str:
    """Serialize an amount for JSON without losing precision."""
    normalized = amount.normalize()
    # normalize() turns 1000 into 1E+3
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal(1)))
    return format(normalized, "f")


def amounts_close(a: Decimal, b: Decimal, tolerance: Decimal = Decimal("1e-9")) -> bool:
    """Check that two amounts agree within a tolerance."""
    return abs(a - b) <= tolerance
