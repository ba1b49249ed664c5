"""
Amount Parsing Module

Converts user-entered text into Decimal amounts and integer account numbers
with proper precision. NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Optional, Union
import re

from .errors import InvalidNumericInput

# Set global decimal context for financial precision
getcontext().prec = 28

# Account numbers are signed 64-bit keys
MAX_ACCOUNT_NUMBER = 2 ** 63 - 1

CURRENCY_SYMBOLS = "$€£¥"

_ACCOUNT_NUMBER_RE = re.compile(r'^\+?\d+$')


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Coerce a numeric value to Decimal without float artifacts

    Raises:
        InvalidNumericInput: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidNumericInput(str(value))
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidNumericInput(str(value))
    if not value.is_finite():
        raise InvalidNumericInput(str(value))
    return value


def quantize_amount(value: Decimal, precision: Optional[int] = 2) -> Decimal:
    """
    Round a decimal to the given number of places

    Args:
        value: Decimal to round
        precision: Decimal places, or None to leave the value untouched

    Returns:
        Properly rounded Decimal

    Raises:
        InvalidNumericInput: If the rounded value needs more digits than the context holds
    """
    if precision is None:
        return value
    try:
        return value.quantize(Decimal('0.1') ** precision, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidNumericInput(str(value))


def parse_amount(value: str, precision: Optional[int] = 2) -> Decimal:
    """
    Parse an amount typed by a user, handling common formats

    Args:
        value: String representation of the amount
        precision: Decimal places to round to (None keeps full precision)

    Returns:
        Decimal value

    Raises:
        InvalidNumericInput: If the string is empty or not a finite number
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidNumericInput(value)

    clean_value = value.strip().lstrip(CURRENCY_SYMBOLS).strip()

    # Handle comma as decimal separator (European format)
    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif clean_value.count(',') == 1:
        whole, fraction = clean_value.split(',')
        if len(fraction) <= 2:
            clean_value = f"{whole}.{fraction}"
        else:
            clean_value = whole + fraction

    try:
        amount = Decimal(clean_value)
    except InvalidOperation:
        raise InvalidNumericInput(value)

    if not amount.is_finite():
        raise InvalidNumericInput(value)

    return quantize_amount(amount, precision)


def parse_account_number(value: str) -> int:
    """
    Parse an account number typed by a user

    Raises:
        InvalidNumericInput: If the text is not a non-negative 64-bit integer
    """
    if value is None or not isinstance(value, str):
        raise InvalidNumericInput(value)

    clean_value = value.strip()
    if not _ACCOUNT_NUMBER_RE.match(clean_value):
        raise InvalidNumericInput(value)

    number = int(clean_value)
    if number > MAX_ACCOUNT_NUMBER:
        raise InvalidNumericInput(value)
    return number


def format_amount(value: Decimal) -> str:
    """Format an amount for display and logs"""
    return str(value)
