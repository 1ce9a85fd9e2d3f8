from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet

from ..core.constants import DEFAULT_WORK_WEEKDAYS


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift. Weekdays use Python numbering (Monday=0)."""

    shift_id: int
    shift_name: str
    work_weekdays: FrozenSet[int] = DEFAULT_WORK_WEEKDAYS
    off_dates: FrozenSet[date] = frozenset()

    def works_on(self, day: date) -> bool:
        return day.weekday() in self.work_weekdays and day not in self.off_dates
