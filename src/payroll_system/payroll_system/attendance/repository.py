from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def list_for_staff(self, staff_ids: Iterable[int], *, start: date, end: date) -> Sequence[AttendanceDay]:
        """Attendance days for the given staff within [start, end]."""

        raise NotImplementedError
