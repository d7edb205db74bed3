"""
Amount Handling Module

Decimal conversion and cent rounding for balances and transfer amounts.
NEVER uses float arithmetic for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Union
import re

from .errors import InvalidArgumentError

# Set global decimal context for financial precision
getcontext().prec = 28

# Balances and amounts are kept to cents
AMOUNT_PRECISION = 2
CENT = Decimal('0.1') ** AMOUNT_PRECISION
ZERO = Decimal('0.00')

AmountLike = Union[Decimal, int, str, float]

# Stored amounts: optional minus sign, ASCII digits, optional fraction
AMOUNT_FIELD = re.compile(r"-?[0-9]+(\.[0-9]+)?")


def to_decimal(value: AmountLike) -> Decimal:
    """
    Convert a value to a cent-rounded Decimal

    Args:
        value: Decimal, int, numeric string or float (converted via str)

    Returns:
        Decimal rounded to AMOUNT_PRECISION places

    Raises:
        InvalidArgumentError: If value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Not a monetary amount: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidArgumentError(f"Cannot convert {value!r} to Decimal")

    if not amount.is_finite():
        raise InvalidArgumentError(f"Amount must be finite, got {value!r}")

    try:
        amount = quantize_amount(amount)
    except InvalidOperation:
        raise InvalidArgumentError(f"Amount out of range: {value!r}")

    # Collapse -0.00 so it never reaches a record
    if amount == ZERO:
        return ZERO
    return amount


def quantize_amount(value: Decimal) -> Decimal:
    """Round a Decimal to cent precision"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal) -> str:
    """Format for file records: plain digits, exactly two decimals"""
    return f"{quantize_amount(value):.{AMOUNT_PRECISION}f}"


def amount_from_field(raw: str, field_name: str = "amount") -> Decimal:
    """
    Parse an amount read back from a ledger file

    Stricter than to_decimal: exponents, digit separators, signs other than
    a leading minus and non-ASCII digits are all rejected.

    Raises:
        ValueError: If raw is not a plain decimal number
    """
    value = raw.strip()
    if not AMOUNT_FIELD.fullmatch(value):
        raise ValueError(f"{field_name} is not a plain decimal number: {raw!r}")
    return to_decimal(value)
