from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PaymentMethod, PaymentStatus, PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import PaymentRecord
from .repository import PaymentRepository

_COLUMNS = """
    payment_id, staff_id, pay_month, payment_type, base_amount, bonus, deduction,
    final_amount, payment_method, note, created_by, created_at, status, voided_by, voided_at
"""


def _to_payment(r: Dict[str, Any]) -> PaymentRecord:
    return PaymentRecord(
        payment_id=int(r["payment_id"]),
        staff_id=int(r["staff_id"]),
        month=r["pay_month"],
        payment_type=PaymentType(r["payment_type"]),
        base_amount=as_decimal(r["base_amount"]),
        bonus=as_decimal(r["bonus"]),
        deduction=as_decimal(r["deduction"]),
        final_amount=as_decimal(r["final_amount"]),
        payment_method=PaymentMethod(r["payment_method"]),
        note=r.get("note"),
        created_by=int(r["created_by"]),
        created_at=r["created_at"],
        status=PaymentStatus(r["status"]),
        voided_by=int(r["voided_by"]) if r.get("voided_by") is not None else None,
        voided_at=r.get("voided_at"),
    )


class MySQLPaymentRepository(PaymentRepository):
    """payment_records keeps voided rows; `active_marker` is 1 for the active row and NULL otherwise.

    UNIQUE(staff_id, pay_month, payment_type, active_marker) therefore allows any
    number of voided rows but only one active row per key.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self, *, staff_id: int, month: str, payment_type: PaymentType) -> Optional[PaymentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payment_records
                WHERE staff_id=%s AND pay_month=%s AND payment_type=%s AND active_marker=1
                """,
                (int(staff_id), month, payment_type.value),
            )
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def list_active_for_month(
        self,
        *,
        month: str,
        payment_type: Optional[PaymentType] = None,
    ) -> Sequence[PaymentRecord]:
        clauses = ["pay_month=%s", "active_marker=1"]
        params: list[object] = [month]
        if payment_type is not None:
            clauses.append("payment_type=%s")
            params.append(payment_type.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payment_records WHERE {' AND '.join(clauses)} ORDER BY staff_id ASC",
                tuple(params),
            )
            return [_to_payment(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        staff_id: int,
        month: str,
        payment_type: PaymentType,
        base_amount: Decimal,
        bonus: Decimal,
        deduction: Decimal,
        final_amount: Decimal,
        payment_method: PaymentMethod,
        note: Optional[str],
        created_by: int,
        created_at: datetime,
    ) -> PaymentRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payment_records(
                    staff_id, pay_month, payment_type, base_amount, bonus, deduction, final_amount,
                    payment_method, note, created_by, created_at, status, active_marker
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    int(staff_id),
                    month,
                    payment_type.value,
                    base_amount,
                    bonus,
                    deduction,
                    final_amount,
                    payment_method.value,
                    note,
                    int(created_by),
                    created_at,
                    PaymentStatus.ACTIVE.value,
                ),
            )
            return PaymentRecord(
                payment_id=int(cur.lastrowid),
                staff_id=int(staff_id),
                month=month,
                payment_type=payment_type,
                base_amount=base_amount,
                bonus=bonus,
                deduction=deduction,
                final_amount=final_amount,
                payment_method=payment_method,
                note=note,
                created_by=int(created_by),
                created_at=created_at,
            )

    def void_active(
        self,
        *,
        staff_id: int,
        month: str,
        payment_type: PaymentType,
        voided_by: int,
        voided_at: datetime,
    ) -> Optional[PaymentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payment_records
                WHERE staff_id=%s AND pay_month=%s AND payment_type=%s AND active_marker=1
                FOR UPDATE
                """,
                (int(staff_id), month, payment_type.value),
            )
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                """
                UPDATE payment_records
                SET status=%s, active_marker=NULL, voided_by=%s, voided_at=%s
                WHERE payment_id=%s AND active_marker=1
                """,
                (PaymentStatus.VOIDED.value, int(voided_by), voided_at, int(r["payment_id"])),
            )
            if cur.rowcount == 0:
                return None

            r.update(status=PaymentStatus.VOIDED.value, voided_by=int(voided_by), voided_at=voided_at)
            return _to_payment(r)
