from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import MONEY_PLACES

ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Round half-up to 2 decimal places."""
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def final_amount(base: Decimal, bonus: Decimal, deduction: Decimal) -> Decimal:
    """base + bonus - deduction, floored at zero."""
    return max(ZERO, to_money(base + bonus - deduction))
