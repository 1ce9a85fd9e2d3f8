from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Set

import pytest

from src.payroll_system.payroll_system.attendance.model import AttendanceDay
from src.payroll_system.payroll_system.banking.model import BankSetting
from src.payroll_system.payroll_system.common.datetime_utils import parse_month
from src.payroll_system.payroll_system.container import Container, wire_container
from src.payroll_system.payroll_system.core.context import Actor
from src.payroll_system.payroll_system.core.enums import AttendanceStatus, PaymentStatus, Role
from src.payroll_system.payroll_system.core.exceptions import DuplicateRecordError
from src.payroll_system.payroll_system.grace.model import GraceRecord
from src.payroll_system.payroll_system.payroll.model import PaymentRecord, PayrollLock
from src.payroll_system.payroll_system.shifts.model import Shift
from src.payroll_system.payroll_system.staff.model import Staff

# March 2026 starts on a Sunday: Monday..Saturday gives 26 work days.
FIXED_NOW = datetime(2026, 4, 15, 10, 0)

HR = Actor(user_id=100, role=Role.HR_MANAGER)
LEADER = Actor(user_id=200, role=Role.TEAM_LEADER)
STAFF = Actor(user_id=300, role=Role.STAFF)


class InMemoryStaff:
    def __init__(self):
        self.by_id: Dict[int, Staff] = {}

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        return self.by_id.get(staff_id)

    def get_many(self, staff_ids: Iterable[int]) -> Dict[int, Staff]:
        return {i: self.by_id[i] for i in staff_ids if i in self.by_id}

    def list_active(self, *, branch_id: Optional[int] = None):
        items = [s for s in self.by_id.values() if s.is_active and (branch_id is None or s.branch_id == branch_id)]
        return sorted(items, key=lambda s: (s.name, s.staff_id))


class InMemoryShifts:
    def __init__(self):
        self.by_id: Dict[int, Shift] = {}

    def get_many(self, shift_ids: Iterable[int], *, start: date, end: date) -> Dict[int, Shift]:
        return {i: self.by_id[i] for i in shift_ids if i in self.by_id}


class InMemoryAttendance:
    def __init__(self):
        self.days: Dict[tuple, AttendanceDay] = {}

    def list_for_staff(self, staff_ids: Iterable[int], *, start: date, end: date):
        ids = set(staff_ids)
        return [d for d in self.days.values() if d.staff_id in ids and start <= d.work_date <= end]


class InMemoryGraces:
    def __init__(self):
        self.records: List[GraceRecord] = []
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def graced_dates(self, staff_ids: Iterable[int], *, start: date, end: date) -> Dict[int, Set[date]]:
        ids = set(staff_ids)
        out: Dict[int, Set[date]] = {}
        for r in self.records:
            if r.staff_id in ids and start <= r.grace_date <= end:
                out.setdefault(r.staff_id, set()).add(r.grace_date)
        return out

    def create(self, *, staff_id, grace_date, note, applied_by, applied_at) -> GraceRecord:
        with self._lock:
            if any(r.staff_id == staff_id and r.grace_date == grace_date for r in self.records):
                raise DuplicateRecordError("grace exists")
            record = GraceRecord(
                grace_id=next(self._ids),
                staff_id=staff_id,
                grace_date=grace_date,
                note=note,
                applied_by=applied_by,
                applied_at=applied_at,
            )
            self.records.append(record)
            return record


class InMemoryOvertime:
    def __init__(self):
        self.entries: List[tuple] = []

    def approved_minutes(self, staff_ids: Iterable[int], *, start: date, end: date) -> Dict[int, int]:
        ids = set(staff_ids)
        out: Dict[int, int] = {}
        for staff_id, day, minutes in self.entries:
            if staff_id in ids and start <= day <= end:
                out[staff_id] = out.get(staff_id, 0) + minutes
        return out


class InMemoryPayments:
    """Enforces one active record per (staff, month, type) like the MySQL unique key."""

    def __init__(self):
        self.records: List[PaymentRecord] = []
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def _find_active(self, staff_id, month, payment_type) -> Optional[int]:
        for i, r in enumerate(self.records):
            if r.is_active and r.staff_id == staff_id and r.month == month and r.payment_type == payment_type:
                return i
        return None

    def get_active(self, *, staff_id, month, payment_type):
        i = self._find_active(staff_id, month, payment_type)
        return self.records[i] if i is not None else None

    def list_active_for_month(self, *, month, payment_type=None):
        return [
            r
            for r in self.records
            if r.is_active and r.month == month and (payment_type is None or r.payment_type == payment_type)
        ]

    def create(self, **kwargs) -> PaymentRecord:
        with self._lock:
            if self._find_active(kwargs["staff_id"], kwargs["month"], kwargs["payment_type"]) is not None:
                raise DuplicateRecordError("active payment exists")
            record = PaymentRecord(payment_id=next(self._ids), **kwargs)
            self.records.append(record)
            return record

    def void_active(self, *, staff_id, month, payment_type, voided_by, voided_at):
        with self._lock:
            i = self._find_active(staff_id, month, payment_type)
            if i is None:
                return None
            voided = replace(self.records[i], status=PaymentStatus.VOIDED, voided_by=voided_by, voided_at=voided_at)
            self.records[i] = voided
            return voided


class InMemoryLocks:
    def __init__(self):
        self.by_month: Dict[str, PayrollLock] = {}

    def get(self, month: str) -> Optional[PayrollLock]:
        return self.by_month.get(month)

    def create(self, *, month, locked_by, locked_at) -> PayrollLock:
        if month in self.by_month:
            raise DuplicateRecordError("locked")
        lock = PayrollLock(month=month, locked_by=locked_by, locked_at=locked_at)
        self.by_month[month] = lock
        return lock

    def delete(self, month: str) -> bool:
        return self.by_month.pop(month, None) is not None


class InMemoryBankSettings:
    def __init__(self):
        self.items: List[BankSetting] = []
        self._ids = itertools.count(1)

    def list_all(self):
        return sorted(self.items, key=lambda s: (not s.is_default, s.bank_name))

    def get_default(self):
        return next((s for s in self.items if s.is_default), None)

    def create(self, *, bank_name, bank_account_no, company_name, branch_name, branch_location, is_default):
        if is_default:
            self.items = [replace(s, is_default=False) for s in self.items]
        setting = BankSetting(
            bank_setting_id=next(self._ids),
            bank_name=bank_name,
            bank_account_no=bank_account_no,
            company_name=company_name,
            branch_name=branch_name,
            branch_location=branch_location,
            is_default=is_default,
        )
        self.items.append(setting)
        return setting


class InMemoryStore:
    def __init__(self):
        self.staff = InMemoryStaff()
        self.shifts = InMemoryShifts()
        self.attendance = InMemoryAttendance()
        self.graces = InMemoryGraces()
        self.overtime = InMemoryOvertime()
        self.payments = InMemoryPayments()
        self.locks = InMemoryLocks()
        self.bank_settings = InMemoryBankSettings()
        self.shifts.by_id[1] = Shift(shift_id=1, shift_name="Day")

    def add_staff(
        self,
        staff_id: int,
        *,
        name: Optional[str] = None,
        salary: str = "30000",
        branch_id: int = 1,
        join_date: Optional[date] = date(2025, 1, 1),
        shift_id: Optional[int] = 1,
        bank_account_no: Optional[str] = None,
    ) -> Staff:
        staff = Staff(
            staff_id=staff_id,
            name=name or f"Staff {staff_id}",
            branch_id=branch_id,
            branch_name=f"Branch {branch_id}",
            designation="Officer",
            salary=Decimal(salary),
            join_date=join_date,
            shift_id=shift_id,
            bank_name="City Bank" if bank_account_no else None,
            bank_account_no=bank_account_no,
        )
        self.staff.by_id[staff_id] = staff
        return staff

    def mark(self, staff_id: int, day: date, status: AttendanceStatus) -> None:
        self.attendance.days[(staff_id, day)] = AttendanceDay(staff_id=staff_id, work_date=day, status=status)

    def fill_month(self, staff_id: int, month: str, status: AttendanceStatus = AttendanceStatus.PRESENT) -> None:
        """Mark every Monday..Saturday of the month."""
        for day in parse_month(month).days():
            if day.weekday() != 6:
                self.mark(staff_id, day, status)

    def add_overtime(self, staff_id: int, day: date, minutes: int) -> None:
        self.overtime.entries.append((staff_id, day, minutes))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store: InMemoryStore) -> Container:
    return wire_container(
        staff_repo=store.staff,
        shifts_repo=store.shifts,
        attendance_repo=store.attendance,
        graces_repo=store.graces,
        overtime_repo=store.overtime,
        payments_repo=store.payments,
        locks_repo=store.locks,
        bank_settings_repo=store.bank_settings,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def hr() -> Actor:
    return HR


@pytest.fixture
def leader() -> Actor:
    return LEADER


@pytest.fixture
def staff_actor() -> Actor:
    return STAFF
