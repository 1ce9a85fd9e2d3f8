from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BankSetting
from .repository import BankSettingsRepository

_COLUMNS = "bank_setting_id, bank_name, bank_account_no, company_name, branch_name, branch_location, is_default"


def _row_to_setting(r: dict) -> BankSetting:
    return BankSetting(
        bank_setting_id=int(r["bank_setting_id"]),
        bank_name=r["bank_name"],
        bank_account_no=r["bank_account_no"],
        company_name=r["company_name"],
        branch_name=r.get("branch_name"),
        branch_location=r.get("branch_location"),
        is_default=bool(r.get("is_default")),
    )


class MySQLBankSettingsRepository(BankSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[BankSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_bank_settings ORDER BY is_default DESC, bank_name")
            return [_row_to_setting(r) for r in fetchall(cur)]

    def get_default(self) -> Optional[BankSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_bank_settings WHERE is_default=1 LIMIT 1")
            r = fetchone(cur)
            return _row_to_setting(r) if r else None

    def create(
        self,
        *,
        bank_name: str,
        bank_account_no: str,
        company_name: str,
        branch_name: Optional[str],
        branch_location: Optional[str],
        is_default: bool,
    ) -> BankSetting:
        with db_cursor(self._conn_factory) as (_, cur):
            if is_default:
                cur.execute("UPDATE payroll_bank_settings SET is_default=0 WHERE is_default=1")
            cur.execute(
                """
                INSERT INTO payroll_bank_settings(
                    bank_name, bank_account_no, company_name, branch_name, branch_location, is_default
                )
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (bank_name, bank_account_no, company_name, branch_name, branch_location, 1 if is_default else 0),
            )
            return BankSetting(
                bank_setting_id=int(cur.lastrowid),
                bank_name=bank_name,
                bank_account_no=bank_account_no,
                company_name=company_name,
                branch_name=branch_name,
                branch_location=branch_location,
                is_default=is_default,
            )
