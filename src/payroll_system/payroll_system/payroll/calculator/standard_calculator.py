from __future__ import annotations

from decimal import Decimal

from ...attendance.aggregator import AttendanceSummary
from ...common.money import ZERO, to_money
from ...core.constants import DEFAULT_LATE_CREDIT, DEFAULT_OVERTIME_HOURS_PER_DAY
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary / work_days per paid day.

    Paid days are present + on leave + holiday + late * late_credit. With the
    default credit of 1 a late day is paid in full. Rounding happens once, at
    the end, so preview and payment always agree.
    """

    def __init__(
        self,
        *,
        late_credit: Decimal = DEFAULT_LATE_CREDIT,
        hours_per_day: int = DEFAULT_OVERTIME_HOURS_PER_DAY,
    ):
        if not (Decimal("0") <= Decimal(late_credit) <= Decimal("1")):
            raise ValueError("late_credit must be between 0 and 1")
        if int(hours_per_day) <= 0:
            raise ValueError("hours_per_day must be positive")
        self._late_credit = Decimal(late_credit)
        self._hours_per_day = int(hours_per_day)

    def per_day_salary(self, salary: Decimal, work_days: int) -> Decimal:
        if salary <= 0 or work_days <= 0:
            return ZERO
        return to_money(salary / work_days)

    def paid_days(self, summary: AttendanceSummary) -> Decimal:
        return Decimal(summary.present + summary.on_leave + summary.holiday) + self._late_credit * summary.late

    def payable_salary(self, salary: Decimal, summary: AttendanceSummary) -> Decimal:
        if salary <= 0 or summary.work_days <= 0:
            return ZERO
        return to_money(salary * self.paid_days(summary) / summary.work_days)

    def overtime_payable(self, salary: Decimal, work_days: int, minutes: int) -> Decimal:
        if salary <= 0 or work_days <= 0 or minutes <= 0:
            return ZERO
        hourly = salary / work_days / self._hours_per_day
        return to_money(hourly * minutes / 60)
