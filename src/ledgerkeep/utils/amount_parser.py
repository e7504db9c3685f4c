"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from ledgerkeep.domain.validation import require_money


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money string into a Decimal with two fractional digits.

    Handles various formats:
    - "123.45", "+123.45", "-123.45"
    - "$123.45", "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount quantized to cents

    Raises:
        ValueError: If the string is not a number or has more than two
            fractional digits
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    text = re.sub(r"[$€£¥,\s]", "", text)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'") from None

    amount = require_money(amount)
    return -amount if is_negative else amount
