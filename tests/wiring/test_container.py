from __future__ import annotations

from src.payroll_system.payroll_system.container import build_container


def _db_config(database: str) -> dict:
    return {"host": "localhost", "port": 3306, "user": "root", "password": "", "database": database}


def test_each_container_gets_its_own_database_target():
    first = build_container(db_config=_db_config("payroll_db"))
    second = build_container(db_config=_db_config("payroll_test_db"))

    assert first.conn is not second.conn
    assert first.conn.config.database == "payroll_db"
    assert second.conn.config.database == "payroll_test_db"
