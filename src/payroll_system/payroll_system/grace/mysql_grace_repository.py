from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, Optional, Set

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import GraceRecord
from .repository import GraceRepository


class MySQLGraceRepository(GraceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def graced_dates(self, staff_ids: Iterable[int], *, start: date, end: date) -> Dict[int, Set[date]]:
        ids = sorted({int(i) for i in staff_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT staff_id, grace_date
                FROM grace_records
                WHERE staff_id IN ({in_clause(ids)}) AND grace_date BETWEEN %s AND %s
                """,
                (*ids, start, end),
            )
            out: Dict[int, Set[date]] = {}
            for r in fetchall(cur):
                out.setdefault(int(r["staff_id"]), set()).add(r["grace_date"])
            return out

    def create(
        self,
        *,
        staff_id: int,
        grace_date: date,
        note: Optional[str],
        applied_by: int,
        applied_at: datetime,
    ) -> GraceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO grace_records(staff_id, grace_date, note, applied_by, applied_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(staff_id), grace_date, note, int(applied_by), applied_at),
            )
            return GraceRecord(
                grace_id=int(cur.lastrowid),
                staff_id=int(staff_id),
                grace_date=grace_date,
                note=note,
                applied_by=int(applied_by),
                applied_at=applied_at,
            )
