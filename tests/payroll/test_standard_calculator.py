from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.attendance.aggregator import AttendanceSummary
from src.payroll_system.payroll_system.common.money import final_amount
from src.payroll_system.payroll_system.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_standard_calculator_example_figures():
    calc = StandardPayrollCalculator()
    summary = AttendanceSummary(work_days=26, present=25, absent=1)

    assert calc.per_day_salary(Decimal("30000"), 26) == Decimal("1153.85")
    payable = calc.payable_salary(Decimal("30000"), summary)
    assert payable == Decimal("28846.15")
    assert final_amount(payable, Decimal("500"), Decimal("200")) == Decimal("29146.15")


def test_zero_salary_or_zero_work_days_pays_nothing():
    calc = StandardPayrollCalculator()

    assert calc.payable_salary(Decimal("0"), AttendanceSummary(work_days=26, present=26)) == Decimal("0.00")
    assert calc.per_day_salary(Decimal("30000"), 0) == Decimal("0.00")
    assert calc.payable_salary(Decimal("30000"), AttendanceSummary(work_days=0)) == Decimal("0.00")


def test_leave_and_holiday_are_paid():
    calc = StandardPayrollCalculator()
    summary = AttendanceSummary(work_days=26, present=20, on_leave=3, holiday=3)

    assert calc.payable_salary(Decimal("26000"), summary) == Decimal("26000.00")


def test_late_credit():
    summary = AttendanceSummary(work_days=26, present=24, late=2)

    assert StandardPayrollCalculator().payable_salary(Decimal("26000"), summary) == Decimal("26000.00")
    half = StandardPayrollCalculator(late_credit=Decimal("0.5"))
    assert half.payable_salary(Decimal("26000"), summary) == Decimal("25000.00")


def test_invalid_late_credit_rejected():
    with pytest.raises(ValueError):
        StandardPayrollCalculator(late_credit=Decimal("2"))


def test_overtime_payable():
    calc = StandardPayrollCalculator(hours_per_day=8)

    # 26000 / 26 / 8 = 125 per hour
    assert calc.overtime_payable(Decimal("26000"), 26, 90) == Decimal("187.50")
    assert calc.overtime_payable(Decimal("26000"), 26, 0) == Decimal("0.00")


def test_final_amount_never_negative():
    assert final_amount(Decimal("100"), Decimal("0"), Decimal("500")) == Decimal("0.00")
