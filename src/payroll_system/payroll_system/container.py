from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from .attendance.aggregator import AttendanceAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .banking.mysql_bank_settings_repository import MySQLBankSettingsRepository
from .banking.repository import BankSettingsRepository
from .banking.service import BankTransferService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_LATE_CREDIT, DEFAULT_OVERTIME_HOURS_PER_DAY
from .database.connection import DBConfig, DatabaseConnection
from .grace.mysql_grace_repository import MySQLGraceRepository
from .grace.repository import GraceRepository
from .grace.service import GraceService
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .payroll.bulk import BulkPaymentOrchestrator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.ledger import PaymentLedger
from .payroll.lock import PayrollLockService
from .payroll.mysql_lock_repository import MySQLPayrollLockRepository
from .payroll.mysql_payment_repository import MySQLPaymentRepository
from .payroll.repository import PaymentRepository, PayrollLockRepository
from .payroll.service import PayrollPreviewService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    staff_repo: StaffRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository
    graces_repo: GraceRepository
    overtime_repo: OvertimeRepository
    payments_repo: PaymentRepository
    locks_repo: PayrollLockRepository
    bank_settings_repo: BankSettingsRepository

    aggregator: AttendanceAggregator
    preview_service: PayrollPreviewService
    grace_service: GraceService
    lock_service: PayrollLockService
    payment_ledger: PaymentLedger
    bulk_orchestrator: BulkPaymentOrchestrator
    bank_transfer_service: BankTransferService


def wire_container(
    *,
    staff_repo: StaffRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    graces_repo: GraceRepository,
    overtime_repo: OvertimeRepository,
    payments_repo: PaymentRepository,
    locks_repo: PayrollLockRepository,
    bank_settings_repo: BankSettingsRepository,
    conn: Optional[DatabaseConnection] = None,
    late_credit: Decimal = DEFAULT_LATE_CREDIT,
    hours_per_day: int = DEFAULT_OVERTIME_HOURS_PER_DAY,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Assemble services on top of any set of repositories."""

    aggregator = AttendanceAggregator(attendance_repo, shifts_repo, graces_repo)
    calculator = StandardPayrollCalculator(late_credit=late_credit, hours_per_day=hours_per_day)
    lock_service = PayrollLockService(locks_repo, clock=clock)
    payment_ledger = PaymentLedger(payments_repo, staff_repo, lock_service, clock=clock)

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        graces_repo=graces_repo,
        overtime_repo=overtime_repo,
        payments_repo=payments_repo,
        locks_repo=locks_repo,
        bank_settings_repo=bank_settings_repo,
        aggregator=aggregator,
        preview_service=PayrollPreviewService(
            staff_repo,
            aggregator,
            payments_repo,
            overtime_repo,
            calculator=calculator,
            clock=clock,
        ),
        grace_service=GraceService(graces_repo, staff_repo, aggregator, clock=clock),
        lock_service=lock_service,
        payment_ledger=payment_ledger,
        bulk_orchestrator=BulkPaymentOrchestrator(payment_ledger, lock_service),
        bank_transfer_service=BankTransferService(bank_settings_repo, payments_repo, staff_repo),
    )


def build_container(*, db_config: dict, settings: Optional[dict] = None) -> Container:
    settings = settings or {}
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection(config)

    return wire_container(
        conn=conn,
        staff_repo=MySQLStaffRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        graces_repo=MySQLGraceRepository(conn),
        overtime_repo=MySQLOvertimeRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        locks_repo=MySQLPayrollLockRepository(conn),
        bank_settings_repo=MySQLBankSettingsRepository(conn),
        late_credit=Decimal(str(settings.get("late_credit", DEFAULT_LATE_CREDIT))),
        hours_per_day=int(settings.get("overtime_hours_per_day", DEFAULT_OVERTIME_HOURS_PER_DAY)),
    )
