from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by the requesting actor."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    HR_MANAGER = "hr_manager"
    TEAM_LEADER = "team_leader"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored by the attendance module."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half_day"
    EARLY_EXIT = "early_exit"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"


class DayResolution(str, Enum):
    """How a scheduled work day counts for payroll."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"
    PENDING = "pending"


class PaymentType(str, Enum):
    SALARY = "salary"
    OVERTIME = "overtime"


class PaymentMethod(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    BKASH = "bkash"
    NAGAD = "nagad"


class PaymentStatus(str, Enum):
    """Lifecycle of a persisted payment record."""

    ACTIVE = "active"
    VOIDED = "voided"


class PayrollStatus(str, Enum):
    """Derived status shown in the payroll preview."""

    UNPAID = "unpaid"
    PAID = "paid"
