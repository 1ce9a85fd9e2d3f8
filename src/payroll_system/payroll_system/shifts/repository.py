from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Protocol

from .model import Shift


class ShiftRepository(Protocol):
    def get_many(self, shift_ids: Iterable[int], *, start: date, end: date) -> Dict[int, Shift]:
        """Shifts by id, with off dates limited to [start, end]."""

        raise NotImplementedError
