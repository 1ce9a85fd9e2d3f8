from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import AttendanceDay
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_staff(self, staff_ids: Iterable[int], *, start: date, end: date) -> Sequence[AttendanceDay]:
        ids = sorted({int(i) for i in staff_ids})
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT staff_id, work_date, status, note
                FROM attendance_days
                WHERE staff_id IN ({in_clause(ids)}) AND work_date BETWEEN %s AND %s
                ORDER BY staff_id ASC, work_date ASC
                """,
                (*ids, start, end),
            )
            return [
                AttendanceDay(
                    staff_id=int(r["staff_id"]),
                    work_date=r["work_date"],
                    status=AttendanceStatus(r["status"]),
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]
