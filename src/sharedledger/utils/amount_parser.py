"""Amount parsing and formatting utilities.

Amounts cross the user boundary as decimal strings and are stored as integer
counts of the currency's minor unit (cents for two minor units).
"""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str, minor_units: int = 2) -> int:
    """Parse an amount string into integer minor units.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - "-123.45"

    Args:
        amount_str: Amount string
        minor_units: Number of decimal digits of the currency's minor unit

    Returns:
        Amount in minor units

    Raises:
        ValueError: If amount string cannot be parsed or has more decimal
            places than the currency allows
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    scaled = amount.scaleb(minor_units)
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"Amount '{amount_str}' has more than {minor_units} decimal places"
        )

    minor = int(scaled)
    return -minor if is_negative else minor


def format_amount(minor: int, minor_units: int = 2) -> str:
    """Format integer minor units as a decimal string with thousands separators."""
    value = Decimal(minor).scaleb(-minor_units)
    return f"{value:,.{minor_units}f}"
