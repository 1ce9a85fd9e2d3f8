from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, Optional, Protocol, Set

from .model import GraceRecord


class GraceRepository(Protocol):
    def graced_dates(self, staff_ids: Iterable[int], *, start: date, end: date) -> Dict[int, Set[date]]:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_id: int,
        grace_date: date,
        note: Optional[str],
        applied_by: int,
        applied_at: datetime,
    ) -> GraceRecord:
        """Persist a grace record.

        Raises DuplicateRecordError if (staff_id, grace_date) already exists.
        """

        raise NotImplementedError
