from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class GraceRecord:
    """A persisted correction: an absent day counts as present for payroll."""

    grace_id: int
    staff_id: int
    grace_date: date
    note: Optional[str]
    applied_by: int
    applied_at: datetime

    def to_dict(self) -> dict:
        return {
            "grace_id": self.grace_id,
            "staff_id": self.staff_id,
            "date": self.grace_date.isoformat(),
            "note": self.note,
            "applied_by": self.applied_by,
            "applied_at": self.applied_at.isoformat(),
        }
