from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, in_clause
from .model import Staff
from .repository import StaffRepository

_SELECT = """
    SELECT
        s.staff_id, s.full_name, s.branch_id, b.branch_name, s.designation,
        s.salary, s.join_date, s.shift_id, s.bank_name, s.bank_account_no, s.status
    FROM staff s
    LEFT JOIN branches b ON b.branch_id = s.branch_id
"""


def _to_staff(r: Dict[str, Any]) -> Staff:
    return Staff(
        staff_id=int(r["staff_id"]),
        name=r["full_name"],
        branch_id=int(r["branch_id"]) if r.get("branch_id") is not None else None,
        branch_name=r.get("branch_name"),
        designation=r.get("designation"),
        salary=as_decimal(r.get("salary")),
        join_date=r.get("join_date"),
        shift_id=int(r["shift_id"]) if r.get("shift_id") is not None else None,
        bank_name=r.get("bank_name"),
        bank_account_no=r.get("bank_account_no"),
        is_active=r.get("status") == "active",
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.staff_id=%s", (int(staff_id),))
            r = fetchone(cur)
            return _to_staff(r) if r else None

    def list_active(self, *, branch_id: Optional[int] = None) -> Sequence[Staff]:
        clauses = ["s.status='active'"]
        params: list[object] = []
        if branch_id is not None:
            clauses.append("s.branch_id=%s")
            params.append(int(branch_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY s.full_name ASC, s.staff_id ASC",
                tuple(params),
            )
            return [_to_staff(r) for r in fetchall(cur)]

    def get_many(self, staff_ids: Iterable[int]) -> Dict[int, Staff]:
        ids = sorted({int(i) for i in staff_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE s.staff_id IN ({in_clause(ids)})", tuple(ids))
            return {s.staff_id: s for s in (_to_staff(r) for r in fetchall(cur))}
