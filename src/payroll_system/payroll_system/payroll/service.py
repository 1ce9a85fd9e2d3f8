from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..attendance.aggregator import AttendanceAggregator, AttendanceSummary
from ..common.datetime_utils import MonthRange, now_local, parse_month
from ..common.validators import require_positive_id
from ..core.constants import FLAG_DEFAULT_SCHEDULE, FLAG_NO_WORK_DAYS, FLAG_ZERO_SALARY
from ..core.context import Actor, require_payroll_read
from ..core.enums import PaymentType, PayrollStatus
from ..overtime.repository import OvertimeRepository
from ..staff.model import Staff
from ..staff.repository import StaffRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PaymentRecord, StaffPayrollRecord
from .repository import PaymentRepository


class PayrollPreviewService:
    """Builds the monthly payroll preview. Read-only, safe to poll."""

    def __init__(
        self,
        staff: StaffRepository,
        aggregator: AttendanceAggregator,
        payments: PaymentRepository,
        overtime: OvertimeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._staff = staff
        self._aggregator = aggregator
        self._payments = payments
        self._overtime = overtime
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def preview(self, *, actor: Actor, month: str, branch_id: Any = None) -> List[StaffPayrollRecord]:
        require_payroll_read(actor)
        month_range = parse_month(month)
        branch = require_positive_id(branch_id, "Branch") if branch_id not in (None, "") else None

        staff = list(self._staff.list_active(branch_id=branch))
        return self.build_records(staff, month_range)

    def build_records(self, staff: List[Staff], month: MonthRange) -> List[StaffPayrollRecord]:
        if not staff:
            return []

        summaries = self._aggregator.summarize_many(staff, month, as_of=self._clock().date())
        ot_minutes = self._overtime.approved_minutes(
            [s.staff_id for s in staff],
            start=month.start,
            end=month.end,
        )
        paid: Dict[PaymentType, Dict[int, PaymentRecord]] = {t: {} for t in PaymentType}
        for p in self._payments.list_active_for_month(month=month.month):
            paid[p.payment_type][p.staff_id] = p

        return [
            self._build_record(
                s,
                summaries[s.staff_id],
                ot_minutes=ot_minutes.get(s.staff_id, 0),
                salary_payment=paid[PaymentType.SALARY].get(s.staff_id),
                ot_payment=paid[PaymentType.OVERTIME].get(s.staff_id),
            )
            for s in staff
        ]

    def _build_record(
        self,
        staff: Staff,
        summary: AttendanceSummary,
        *,
        ot_minutes: int,
        salary_payment: Optional[PaymentRecord],
        ot_payment: Optional[PaymentRecord],
    ) -> StaffPayrollRecord:
        flags = []
        if staff.salary <= 0:
            flags.append(FLAG_ZERO_SALARY)
        if summary.work_days <= 0:
            flags.append(FLAG_NO_WORK_DAYS)
        if summary.default_schedule:
            flags.append(FLAG_DEFAULT_SCHEDULE)

        return StaffPayrollRecord(
            staff_id=staff.staff_id,
            name=staff.name,
            branch_id=staff.branch_id,
            branch=staff.branch_name,
            designation=staff.designation,
            bank_name=staff.bank_name,
            bank_account_no=staff.bank_account_no,
            salary=staff.salary,
            work_days=summary.work_days,
            present=summary.present,
            absent=summary.absent,
            late=summary.late,
            on_leave=summary.on_leave,
            holiday=summary.holiday,
            graced=summary.graced,
            per_day_salary=self._calculator.per_day_salary(staff.salary, summary.work_days),
            payable_salary=self._calculator.payable_salary(staff.salary, summary),
            status=PayrollStatus.PAID if salary_payment else PayrollStatus.UNPAID,
            paid_amount=salary_payment.final_amount if salary_payment else None,
            payment_id=salary_payment.payment_id if salary_payment else None,
            ot_minutes=ot_minutes,
            ot_payable=self._calculator.overtime_payable(staff.salary, summary.work_days, ot_minutes),
            ot_status=PayrollStatus.PAID if ot_payment else PayrollStatus.UNPAID,
            ot_paid_amount=ot_payment.final_amount if ot_payment else None,
            flags=tuple(flags),
        )
