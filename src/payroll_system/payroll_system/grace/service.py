from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, List, Optional

from ..attendance.aggregator import AttendanceAggregator
from ..common.datetime_utils import month_of, now_local, parse_iso_date, parse_month
from ..common.validators import optional_note, require_positive_id
from ..core.context import Actor, require_payroll_read, require_payroll_write
from ..core.exceptions import DuplicateRecordError, NotFoundError, ValidationError
from ..staff.model import Staff
from ..staff.repository import StaffRepository
from .model import GraceRecord
from .repository import GraceRepository

log = logging.getLogger(__name__)


class GraceService:
    """Forgives an absent day so that payroll counts it as present.

    Attendance itself is never touched; the grace record is overlaid by the
    aggregator at preview time.
    """

    def __init__(
        self,
        graces: GraceRepository,
        staff: StaffRepository,
        aggregator: AttendanceAggregator,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._graces = graces
        self._staff = staff
        self._aggregator = aggregator
        self._clock = clock

    def _get_staff(self, staff_id: Any) -> Staff:
        staff = self._staff.get_by_id(require_positive_id(staff_id, "Staff"))
        if not staff:
            raise NotFoundError("Staff not found")
        return staff

    def get_absent_dates(self, *, actor: Actor, staff_id: Any, month: str) -> List[date]:
        """Ungraced absent dates of one staff member in the month."""
        require_payroll_read(actor)
        month_range = parse_month(month)
        staff = self._get_staff(staff_id)

        summary = self._aggregator.summarize(staff, month_range, as_of=self._clock().date())
        return list(summary.absent_dates)

    def apply_grace(
        self,
        *,
        actor: Actor,
        staff_id: Any,
        work_date: Any,
        note: Optional[str] = None,
    ) -> GraceRecord:
        require_payroll_write(actor)
        day = work_date if isinstance(work_date, date) else parse_iso_date(work_date)
        note = optional_note(note)
        staff = self._get_staff(staff_id)

        absent = self._aggregator.summarize(staff, parse_month(month_of(day)), as_of=self._clock().date())
        if day not in absent.absent_dates:
            raise ValidationError(f"{day.isoformat()} is not an absent day for {staff.name}")

        try:
            record = self._graces.create(
                staff_id=staff.staff_id,
                grace_date=day,
                note=note,
                applied_by=actor.user_id,
                applied_at=self._clock(),
            )
        except DuplicateRecordError:
            raise ValidationError(f"Grace already applied for {day.isoformat()}")

        log.info("Grace applied for staff %s on %s by user %s", staff.staff_id, day, actor.user_id)
        return record
