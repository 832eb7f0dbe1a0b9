"""
Input rules shared by the room and personal ledgers.

Zero is not an acceptable amount or head count: an expense of 0 (or shared by
0 people) is rejected exactly like a missing value. The only zero-amount rows
in the ledger are the join markers the system writes itself.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from app.exceptions.http import ValidationError

MISSING_FIELDS_MESSAGE = "All fields are required"
INVALID_ROOM_ID_MESSAGE = "Invalid room ID"

# Upper bound of a 32-bit SERIAL primary key
MAX_ROOM_ID = 2**31 - 1

# Amount columns are DECIMAL(14, 2)
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal(10) ** 12


def normalize_username(username: str | None) -> str:
    """The single identity policy: trimmed and lower-cased."""
    return (username or "").strip().lower()


def require_text(value: str | None, message: str = MISSING_FIELDS_MESSAGE) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(message)
    return text


def require_amount(value: Any) -> Decimal:
    """Parses a positive, finite amount. None and zero count as missing."""
    if value is None or isinstance(value, bool):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError("Amount must be a number") from exc

    if not amount.is_finite():
        raise ValidationError("Amount must be a number")
    if amount == 0:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if amount < 0:
        raise ValidationError("Amount must not be negative")
    if amount >= MAX_AMOUNT:
        raise ValidationError("Amount is too large")
    if amount != amount.quantize(AMOUNT_QUANTUM):
        raise ValidationError("Amount must have at most 2 decimal places")
    return amount


def require_people(value: Any) -> int:
    """Parses the head count of a personal expense. None and zero count as missing."""
    if value is None or isinstance(value, bool):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    try:
        people = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("People must be a whole number") from exc

    if people != value and not isinstance(value, str):
        raise ValidationError("People must be a whole number")
    if people == 0:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if people < 0:
        raise ValidationError("People must not be negative")
    return people


def parse_room_id(value: Any) -> int:
    """Accepts an int or a decimal string; anything else is not a room identifier."""
    if isinstance(value, bool):
        raise ValidationError(INVALID_ROOM_ID_MESSAGE)
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise ValidationError(INVALID_ROOM_ID_MESSAGE)
        value = int(value)
    if not isinstance(value, int) or not 1 <= value <= MAX_ROOM_ID:
        raise ValidationError(INVALID_ROOM_ID_MESSAGE)
    return value
