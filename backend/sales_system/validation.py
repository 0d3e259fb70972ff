from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from .errors import InvalidArgument

# Matches Numeric(10, 2): 99,999,999.99
MAX_MONEY = Decimal("99999999.99")
CENT = Decimal("0.01")

# Column widths shared with the models
NAME_MAX = 100
PHONE_MAX = 20
DESCRIPTION_MAX = 500
ADDRESS_MAX = 200


def coerce_int(value: Any, field: str) -> int:
    """
    Strict integer parsing for JSON payloads and path/query values.

    Accepts ints and plain-digit strings. Rejects bools, floats, decimals
    and scientific notation ("1e3").
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise InvalidArgument(f"{field} must be an integer")
        if "e" in stripped.lower():
            raise InvalidArgument(f"{field} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise InvalidArgument(f"{field} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise InvalidArgument(f"{field} must be an integer")
    if isinstance(value, float):
        raise InvalidArgument(f"{field} must be an integer, not a decimal")
    raise InvalidArgument(f"{field} must be an integer")


def require_id(value: Any, field: str) -> int:
    if value is None or value == "":
        raise InvalidArgument(f"{field} is required")
    ident = coerce_int(value, field)
    if ident <= 0:
        raise InvalidArgument(f"{field} must be a positive integer")
    return ident


def require_positive_int(value: Any, field: str) -> int:
    if value is None:
        raise InvalidArgument(f"{field} is required")
    number = coerce_int(value, field)
    if number <= 0:
        raise InvalidArgument(f"{field} must be greater than zero")
    return number


def require_non_negative_int(value: Any, field: str) -> int:
    if value is None:
        raise InvalidArgument(f"{field} is required")
    number = coerce_int(value, field)
    if number < 0:
        raise InvalidArgument(f"{field} must not be negative")
    return number


def to_money(value: Any, field: str, *, allow_zero: bool = True) -> Decimal:
    """Parse a JSON number or numeric string into a 2-place Decimal."""
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidArgument(f"{field} is required")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidArgument(f"{field} must be a decimal number")
    if not amount.is_finite():
        raise InvalidArgument(f"{field} must be a finite number")

    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount < 0 or (amount == 0 and not allow_zero):
        qualifier = "zero or more" if allow_zero else "greater than zero"
        raise InvalidArgument(f"{field} must be {qualifier}")
    if amount > MAX_MONEY:
        raise InvalidArgument(f"{field} cannot exceed {MAX_MONEY}")
    return amount


def money_to_json(amount: Decimal | None) -> float | None:
    if amount is None:
        return None
    return float(amount)


def require_choice(value: Any, field: str, choices: Iterable[str]) -> str:
    allowed = tuple(choices)
    if value not in allowed:
        raise InvalidArgument(f"{field} must be one of: {', '.join(allowed)}")
    return value


def require_text(value: Any, field: str, *, max_length: int = NAME_MAX) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgument(f"{field} is required")
    return _bounded(str(value).strip(), field, max_length)


def optional_text(value: Any, field: str, *, max_length: int) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return _bounded(text, field, max_length)


def _bounded(text: str, field: str, max_length: int) -> str:
    if len(text) > max_length:
        raise InvalidArgument(f"{field} must be at most {max_length} characters")
    return text
