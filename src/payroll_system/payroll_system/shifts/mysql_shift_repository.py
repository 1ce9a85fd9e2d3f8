from __future__ import annotations

from datetime import date
from typing import Dict, FrozenSet, Iterable

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import Shift
from .repository import ShiftRepository


def parse_weekdays(value: str | None) -> FrozenSet[int]:
    """'0,1,2,3,4,5' -> frozenset({0..5}); out-of-range entries are dropped."""
    days = set()
    for part in (value or "").split(","):
        part = part.strip()
        if part.isdigit() and 0 <= int(part) <= 6:
            days.add(int(part))
    return frozenset(days)


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_many(self, shift_ids: Iterable[int], *, start: date, end: date) -> Dict[int, Shift]:
        ids = sorted({int(i) for i in shift_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT shift_id, shift_name, work_weekdays FROM shifts WHERE shift_id IN ({in_clause(ids)})",
                tuple(ids),
            )
            shift_rows = fetchall(cur)

            cur.execute(
                f"""
                SELECT shift_id, off_date
                FROM shift_off_dates
                WHERE shift_id IN ({in_clause(ids)}) AND off_date BETWEEN %s AND %s
                """,
                (*ids, start, end),
            )
            off_rows = fetchall(cur)

        off_by_shift: Dict[int, set] = {}
        for r in off_rows:
            off_by_shift.setdefault(int(r["shift_id"]), set()).add(r["off_date"])

        return {
            int(r["shift_id"]): Shift(
                shift_id=int(r["shift_id"]),
                shift_name=r["shift_name"],
                work_weekdays=parse_weekdays(r.get("work_weekdays")),
                off_dates=frozenset(off_by_shift.get(int(r["shift_id"]), ())),
            )
            for r in shift_rows
        }
