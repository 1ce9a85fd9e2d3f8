from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_AMOUNT, MAX_NOTE_LENGTH, MONEY_PLACES
from ..core.enums import PaymentMethod, PaymentType
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} is invalid")
    if v <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return v


def require_amount(value: Any, field_name: str) -> Decimal:
    """Parse a non-negative money amount (2 decimal places)."""
    if value is None or value == "":
        return Decimal("0.00")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field_name} is too large")
    try:
        return amount.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"{field_name} is too large")


def optional_note(value: Any) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError("Note must be text")
    note = (value or "").strip()
    if len(note) > MAX_NOTE_LENGTH:
        raise ValidationError(f"Note must be at most {MAX_NOTE_LENGTH} characters")
    return note or None


def parse_payment_method(value: Any) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    if value is None or value == "":
        return PaymentMethod.CASH
    try:
        return PaymentMethod(str(value))
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"Payment method must be one of: {allowed}")


def parse_payment_type(value: Any) -> PaymentType:
    if isinstance(value, PaymentType):
        return value
    if value is None or value == "":
        return PaymentType.SALARY
    try:
        return PaymentType(str(value))
    except ValueError:
        raise ValidationError("Payment type must be salary or overtime")


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None
