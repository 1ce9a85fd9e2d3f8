from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import PayrollLock
from .repository import PayrollLockRepository


class MySQLPayrollLockRepository(PayrollLockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, month: str) -> Optional[PayrollLock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT pay_month, locked_by, locked_at FROM payroll_locks WHERE pay_month=%s", (month,))
            r = fetchone(cur)
            if not r:
                return None
            return PayrollLock(month=r["pay_month"], locked_by=int(r["locked_by"]), locked_at=r["locked_at"])

    def create(self, *, month: str, locked_by: int, locked_at: datetime) -> PayrollLock:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO payroll_locks(pay_month, locked_by, locked_at) VALUES(%s,%s,%s)",
                (month, int(locked_by), locked_at),
            )
            return PayrollLock(month=month, locked_by=int(locked_by), locked_at=locked_at)

    def delete(self, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_locks WHERE pay_month=%s", (month,))
            return cur.rowcount > 0
