from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from ..common.money import ZERO
from ..core.enums import PaymentMethod, PaymentStatus, PaymentType, PayrollStatus


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


@dataclass(frozen=True)
class StaffPayrollRecord:
    """Read-model: one row of the payroll preview. Recomputed on every request."""

    staff_id: int
    name: str
    branch_id: Optional[int]
    branch: Optional[str]
    designation: Optional[str]
    bank_name: Optional[str]
    bank_account_no: Optional[str]
    salary: Decimal
    work_days: int
    present: int
    absent: int
    late: int
    on_leave: int
    holiday: int
    graced: int
    per_day_salary: Decimal
    payable_salary: Decimal
    status: PayrollStatus
    paid_amount: Optional[Decimal] = None
    payment_id: Optional[int] = None
    ot_minutes: int = 0
    ot_payable: Decimal = ZERO
    ot_status: PayrollStatus = PayrollStatus.UNPAID
    ot_paid_amount: Optional[Decimal] = None
    flags: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "staff_id": self.staff_id,
            "name": self.name,
            "branch_id": self.branch_id,
            "branch": self.branch,
            "designation": self.designation,
            "bank_name": self.bank_name,
            "bank_account_no": self.bank_account_no,
            "salary": _money(self.salary),
            "work_days": self.work_days,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "on_leave": self.on_leave,
            "holiday": self.holiday,
            "graced": self.graced,
            "per_day_salary": _money(self.per_day_salary),
            "payable_salary": _money(self.payable_salary),
            "status": self.status.value,
            "paid_amount": _money(self.paid_amount),
            "payment_id": self.payment_id,
            "ot_minutes": self.ot_minutes,
            "ot_payable": _money(self.ot_payable),
            "ot_status": self.ot_status.value,
            "ot_paid_amount": _money(self.ot_paid_amount),
            "flags": list(self.flags),
        }


@dataclass(frozen=True)
class PaymentRecord:
    """Domain entity: a committed payment for staff + month + payment type."""

    payment_id: int
    staff_id: int
    month: str
    payment_type: PaymentType
    base_amount: Decimal
    bonus: Decimal
    deduction: Decimal
    final_amount: Decimal
    payment_method: PaymentMethod
    note: Optional[str]
    created_by: int
    created_at: datetime
    status: PaymentStatus = PaymentStatus.ACTIVE
    voided_by: Optional[int] = None
    voided_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == PaymentStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "payment_id": self.payment_id,
            "staff_id": self.staff_id,
            "month": self.month,
            "payment_type": self.payment_type.value,
            "base_amount": _money(self.base_amount),
            "bonus": _money(self.bonus),
            "deduction": _money(self.deduction),
            "final_amount": _money(self.final_amount),
            "payment_method": self.payment_method.value,
            "note": self.note,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "status": self.status.value,
            "voided_by": self.voided_by,
            "voided_at": self.voided_at.isoformat() if self.voided_at else None,
        }


@dataclass(frozen=True)
class PayrollLock:
    month: str
    locked_by: int
    locked_at: datetime

    def to_dict(self) -> dict:
        return {"month": self.month, "locked_by": self.locked_by, "locked_at": self.locked_at.isoformat()}


@dataclass(frozen=True)
class BulkPaymentEntry:
    staff_id: int
    amount: Decimal
    bonus: Decimal = ZERO
    deduction: Decimal = ZERO
    note: Optional[str] = None


@dataclass(frozen=True)
class AdjustmentDraft:
    """Pre-payment adjustments held by the caller until a payment is submitted.

    base_amount overrides the computed payable salary when set.
    """

    staff_id: int
    bonus: Decimal = ZERO
    deduction: Decimal = ZERO
    note: Optional[str] = None
    base_amount: Optional[Decimal] = None

    def base_for(self, payable: Decimal) -> Decimal:
        return self.base_amount if self.base_amount is not None else payable

    def to_entry(self, payable: Decimal) -> BulkPaymentEntry:
        return BulkPaymentEntry(
            staff_id=self.staff_id,
            amount=self.base_for(payable),
            bonus=self.bonus,
            deduction=self.deduction,
            note=self.note,
        )


@dataclass(frozen=True)
class BulkPaymentError:
    staff_id: Any
    message: str
    error: str

    def to_dict(self) -> dict:
        return {"staff_id": self.staff_id, "status": "failed", "error": self.error, "message": self.message}


@dataclass(frozen=True)
class BulkPaymentResult:
    results: List[PaymentRecord] = field(default_factory=list)
    errors: List[BulkPaymentError] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict:
        return {
            "success_count": self.success_count,
            "error_count": self.error_count,
            "results": [
                {"staff_id": r.staff_id, "status": "success", "payment_id": r.payment_id} for r in self.results
            ],
            "errors": [e.to_dict() for e in self.errors],
        }

