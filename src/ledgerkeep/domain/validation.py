"""Input validation helpers shared by the domain services."""

import re
from decimal import Decimal
from enum import Enum
from typing import Optional, TypeVar

from ledgerkeep.domain.entities import TransactionType
from ledgerkeep.domain.errors import ValidationError, invalid_choice

E = TypeVar("E", bound=Enum)

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
MAX_NAME_LENGTH = 255
CENT = Decimal("0.01")


def coerce_choice(enum_cls: type[E], value, field: str) -> E:
    """Convert a raw value (or an enum member) into a member of enum_cls.

    Raises:
        ValidationError: If the value is not one of the enum's values
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise ValidationError(invalid_choice(field, value, enum_cls)) from None


def coerce_optional_choice(enum_cls: type[E], value, field: str) -> Optional[E]:
    if value is None or value == "":
        return None
    return coerce_choice(enum_cls, value, field)


def require_name(value: Optional[str], field: str = "name") -> str:
    """Strip a required name and check its length."""
    name = (value or "").strip()
    if not name:
        raise ValidationError(f"{field.capitalize()} is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"{field.capitalize()} must be at most {MAX_NAME_LENGTH} characters")
    return name


def validate_color(color: str) -> str:
    """Check a #RRGGBB color and return it upper-cased."""
    if not COLOR_PATTERN.match(color or ""):
        raise ValidationError(f"Invalid color '{color}'. Expected format #RRGGBB")
    return color.upper()


def validate_currency(currency: str) -> str:
    code = (currency or "").strip().upper()
    if not CURRENCY_PATTERN.match(code):
        raise ValidationError(f"Invalid currency '{currency}'. Expected a 3-letter code")
    return code


def require_money(amount, field: str = "amount") -> Decimal:
    """Check that a money value is a finite Decimal with at most two decimal places.

    Returns:
        The amount quantized to cents

    Raises:
        ValidationError: If the value is not a Decimal, not finite, or finer than a cent
    """
    if not isinstance(amount, Decimal) or not amount.is_finite():
        raise ValidationError(f"Invalid {field} '{amount}'. Expected a finite decimal number")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field.capitalize()} '{amount}' has more than two decimal places")
    return amount.quantize(CENT)


def signed_amount(amount: Decimal, txn_type: TransactionType) -> Decimal:
    """Apply the sign convention for a transaction type.

    Expenses are outflows and always negative, income is always positive.
    Transfers keep the sign given by the caller, positive for money coming in.
    """
    if txn_type == TransactionType.EXPENSE:
        return -abs(amount)
    if txn_type == TransactionType.INCOME:
        return abs(amount)
    return amount
