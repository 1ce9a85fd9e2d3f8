from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.common.datetime_utils import parse_iso_date, parse_month
from src.payroll_system.payroll_system.common.validators import (
    optional_note,
    optional_text,
    require_amount,
    require_non_empty,
    require_positive_id,
)
from src.payroll_system.payroll_system.core.exceptions import ValidationError


def test_parse_month_range():
    m = parse_month("2024-02")

    assert (m.start, m.end) == (date(2024, 2, 1), date(2024, 2, 29))
    assert m.label == "February 2024"
    assert len(list(m.days())) == 29


def test_parse_iso_date_accepts_datetime_strings():
    assert parse_iso_date("2026-03-02T00:00:00.000Z") == date(2026, 3, 2)


def test_require_amount_rounds_half_up():
    assert require_amount("10.005", "Amount") == Decimal("10.01")
    assert require_amount(None, "Amount") == Decimal("0.00")


@pytest.mark.parametrize("value", [True, "NaN", "Infinity", "-0.01", [1]])
def test_require_amount_rejects(value):
    with pytest.raises(ValidationError):
        require_amount(value, "Amount")


def test_optional_note():
    assert optional_note("  ") is None
    assert optional_note(" ok ") == "ok"
    with pytest.raises(ValidationError):
        optional_note("x" * 501)


@pytest.mark.parametrize("value", [202603, None, ["2026-03"]])
def test_parse_month_rejects_non_text(value):
    with pytest.raises(ValidationError):
        parse_month(value)


@pytest.mark.parametrize("value", [20260302, None, {"date": "2026-03-02"}])
def test_parse_iso_date_rejects_non_text(value):
    with pytest.raises(ValidationError):
        parse_iso_date(value)


def test_text_validators_reject_non_text():
    with pytest.raises(ValidationError):
        optional_note(7)
    with pytest.raises(ValidationError):
        require_non_empty(5, "Bank name")
    with pytest.raises(ValidationError):
        optional_text(["Gulshan"], "Branch name")
    assert optional_text(None, "Branch name") is None


def test_require_amount_upper_bound():
    assert require_amount("9999999999.99", "Amount") == Decimal("9999999999.99")
    with pytest.raises(ValidationError):
        require_amount("1e30", "Amount")


def test_require_positive_id_rejects_overflow():
    with pytest.raises(ValidationError):
        require_positive_id(float("inf"), "Staff")
