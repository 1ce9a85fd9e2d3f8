from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from ..common.datetime_utils import MonthRange, now_local, parse_month
from ..common.money import final_amount
from ..common.validators import (
    optional_note,
    parse_payment_method,
    parse_payment_type,
    require_amount,
    require_positive_id,
)
from ..core.constants import MAX_AMOUNT
from ..core.context import Actor, require_payroll_write
from ..core.enums import PaymentType
from ..core.exceptions import AlreadyPaidError, DuplicateRecordError, NotFoundError, ValidationError
from ..staff.repository import StaffRepository
from .lock import PayrollLockService
from .model import PaymentRecord
from .repository import PaymentRepository

log = logging.getLogger(__name__)


def default_payment_note(
    *,
    payment_type: PaymentType,
    month: MonthRange,
    note: Optional[str],
    bonus: Decimal,
    deduction: Decimal,
) -> str:
    """'Salary & Wages Payment for March 2026 (Bonus: 500.00, Deduction: 200.00)'."""
    category = "Overtime" if payment_type == PaymentType.OVERTIME else "Salary & Wages"
    base = note or f"{category} Payment for {month.label}"

    details = []
    if bonus:
        details.append(f"Bonus: {bonus}")
    if deduction:
        details.append(f"Deduction: {deduction}")
    return f"{base} ({', '.join(details)})" if details else base


class PaymentLedger:
    """Sole writer of payment records.

    The repository's unique key decides races; the pre-check only gives a
    cleaner error in the common case.
    """

    def __init__(
        self,
        payments: PaymentRepository,
        staff: StaffRepository,
        locks: PayrollLockService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payments = payments
        self._staff = staff
        self._locks = locks
        self._clock = clock

    def process_payment(
        self,
        *,
        actor: Actor,
        staff_id: Any,
        month: str,
        amount: Any,
        bonus: Any = None,
        deduction: Any = None,
        method: Any = None,
        note: Optional[str] = None,
        payment_type: Any = None,
    ) -> PaymentRecord:
        require_payroll_write(actor)
        return self.record_payment(
            created_by=actor.user_id,
            staff_id=staff_id,
            month=parse_month(month),
            amount=amount,
            bonus=bonus,
            deduction=deduction,
            method=method,
            note=note,
            payment_type=payment_type,
        )

    def record_payment(
        self,
        *,
        created_by: int,
        staff_id: Any,
        month: MonthRange,
        amount: Any,
        bonus: Any = None,
        deduction: Any = None,
        method: Any = None,
        note: Optional[str] = None,
        payment_type: Any = None,
        check_lock: bool = True,
    ) -> PaymentRecord:
        """Validate and persist one payment. Callers have already checked permission."""

        staff_id = require_positive_id(staff_id, "Staff")
        base = require_amount(amount, "Amount")
        bonus_d = require_amount(bonus, "Bonus")
        deduction_d = require_amount(deduction, "Deduction")
        method_e = parse_payment_method(method)
        type_e = parse_payment_type(payment_type)
        note = optional_note(note)
        final = final_amount(base, bonus_d, deduction_d)
        if final > MAX_AMOUNT:
            raise ValidationError("Final amount is too large")

        if check_lock:
            self._locks.ensure_unlocked(month.month)

        staff = self._staff.get_by_id(staff_id)
        if not staff:
            raise NotFoundError("Staff not found")

        if self._payments.get_active(staff_id=staff_id, month=month.month, payment_type=type_e):
            raise AlreadyPaidError(f"{staff.name} has already been paid for {month.month}")

        try:
            record = self._payments.create(
                staff_id=staff_id,
                month=month.month,
                payment_type=type_e,
                base_amount=base,
                bonus=bonus_d,
                deduction=deduction_d,
                final_amount=final,
                payment_method=method_e,
                note=default_payment_note(
                    payment_type=type_e,
                    month=month,
                    note=note,
                    bonus=bonus_d,
                    deduction=deduction_d,
                ),
                created_by=int(created_by),
                created_at=self._clock(),
            )
        except DuplicateRecordError:
            raise AlreadyPaidError(f"{staff.name} has already been paid for {month.month}")

        log.info(
            "Recorded %s payment %s for staff %s (%s): %s by user %s",
            type_e.value,
            record.payment_id,
            staff_id,
            month.month,
            record.final_amount,
            created_by,
        )
        return record

    def undo_payment(
        self,
        *,
        actor: Actor,
        staff_id: Any,
        month: str,
        payment_type: Any = None,
    ) -> PaymentRecord:
        require_payroll_write(actor)
        staff_id = require_positive_id(staff_id, "Staff")
        month = parse_month(month).month
        type_e = parse_payment_type(payment_type)

        self._locks.ensure_unlocked(month)

        voided = self._payments.void_active(
            staff_id=staff_id,
            month=month,
            payment_type=type_e,
            voided_by=actor.user_id,
            voided_at=self._clock(),
        )
        if not voided:
            raise NotFoundError("Payroll record not found for this month")

        log.info(
            "Voided %s payment %s for staff %s (%s) by user %s",
            type_e.value,
            voided.payment_id,
            staff_id,
            month,
            actor.user_id,
        )
        return voided
