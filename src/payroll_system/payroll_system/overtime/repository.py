from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Protocol


class OvertimeRepository(Protocol):
    def approved_minutes(self, staff_ids: Iterable[int], *, start: date, end: date) -> Dict[int, int]:
        """Total approved overtime minutes per staff within [start, end]."""

        raise NotImplementedError
