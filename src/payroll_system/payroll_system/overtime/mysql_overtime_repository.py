from __future__ import annotations

from datetime import date
from typing import Dict, Iterable

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .repository import OvertimeRepository


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def approved_minutes(self, staff_ids: Iterable[int], *, start: date, end: date) -> Dict[int, int]:
        ids = sorted({int(i) for i in staff_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT staff_id, COALESCE(SUM(duration_minutes), 0) AS total_minutes
                FROM overtime_requests
                WHERE staff_id IN ({in_clause(ids)})
                  AND work_date BETWEEN %s AND %s
                  AND status='approved'
                GROUP BY staff_id
                """,
                (*ids, start, end),
            )
            return {int(r["staff_id"]): int(r["total_minutes"] or 0) for r in fetchall(cur)}
