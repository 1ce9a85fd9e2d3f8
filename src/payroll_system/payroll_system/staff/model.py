from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Staff:
    """Domain entity: a staff member as seen by payroll (read-only collaborator)."""

    staff_id: int
    name: str
    branch_id: Optional[int]
    branch_name: Optional[str]
    designation: Optional[str]
    salary: Decimal
    join_date: Optional[date]
    shift_id: Optional[int] = None
    bank_name: Optional[str] = None
    bank_account_no: Optional[str] = None
    is_active: bool = True
