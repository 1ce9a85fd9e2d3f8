from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...attendance.aggregator import AttendanceSummary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def per_day_salary(self, salary: Decimal, work_days: int) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def payable_salary(self, salary: Decimal, summary: AttendanceSummary) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def overtime_payable(self, salary: Decimal, work_days: int, minutes: int) -> Decimal:
        raise NotImplementedError
