from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one staff member's attendance for one calendar day."""

    staff_id: int
    work_date: date
    status: AttendanceStatus
    note: Optional[str] = None
