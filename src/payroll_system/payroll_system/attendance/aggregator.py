from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Collection, Dict, List, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import MonthRange
from ..core.enums import AttendanceStatus, DayResolution
from ..grace.repository import GraceRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from ..staff.model import Staff
from .repository import AttendanceRepository

DEFAULT_SHIFT = Shift(shift_id=0, shift_name="Default")

_STATUS_RESOLUTION = {
    AttendanceStatus.PRESENT: DayResolution.PRESENT,
    AttendanceStatus.HALF_DAY: DayResolution.PRESENT,
    AttendanceStatus.EARLY_EXIT: DayResolution.PRESENT,
    AttendanceStatus.LATE: DayResolution.LATE,
    AttendanceStatus.ABSENT: DayResolution.ABSENT,
    AttendanceStatus.ON_LEAVE: DayResolution.ON_LEAVE,
    AttendanceStatus.HOLIDAY: DayResolution.HOLIDAY,
    AttendanceStatus.WEEKEND: DayResolution.HOLIDAY,
}


@dataclass(frozen=True)
class AttendanceSummary:
    """Per-staff monthly attendance counts, with grace already applied.

    Only scheduled work days are counted, so present + absent + late never
    exceeds work_days. Days after the as-of date without a record are pending.
    """

    work_days: int
    present: int = 0
    absent: int = 0
    late: int = 0
    on_leave: int = 0
    holiday: int = 0
    graced: int = 0
    pending: int = 0
    absent_dates: Tuple[date, ...] = ()
    default_schedule: bool = False


def scheduled_days(month: MonthRange, *, shift: Shift, join_date: Optional[date]) -> List[date]:
    """Days the shift works in this month, excluding days before joining."""
    return [d for d in month.days() if shift.works_on(d) and (join_date is None or d >= join_date)]


def resolve_day(
    day: date,
    *,
    status: Optional[AttendanceStatus],
    graced: bool,
    as_of: date,
) -> DayResolution:
    if status is None:
        resolution = DayResolution.ABSENT if day <= as_of else DayResolution.PENDING
    else:
        resolution = _STATUS_RESOLUTION[status]

    # Grace only ever overlays absences.
    if resolution == DayResolution.ABSENT and graced:
        return DayResolution.PRESENT
    return resolution


def summarize_month(
    month: MonthRange,
    *,
    shift: Optional[Shift],
    join_date: Optional[date],
    records: Mapping[date, AttendanceStatus],
    graced_dates: Collection[date],
    as_of: date,
) -> AttendanceSummary:
    days = scheduled_days(month, shift=shift or DEFAULT_SHIFT, join_date=join_date)
    counts = {r: 0 for r in DayResolution}
    absent_dates: List[date] = []
    graced = 0

    for day in days:
        status = records.get(day)
        is_graced = day in graced_dates
        resolution = resolve_day(day, status=status, graced=is_graced, as_of=as_of)
        counts[resolution] += 1

        if resolution == DayResolution.ABSENT:
            absent_dates.append(day)
        elif is_graced and resolution == DayResolution.PRESENT and _is_absence(status, day, as_of):
            graced += 1

    return AttendanceSummary(
        work_days=len(days),
        present=counts[DayResolution.PRESENT],
        absent=counts[DayResolution.ABSENT],
        late=counts[DayResolution.LATE],
        on_leave=counts[DayResolution.ON_LEAVE],
        holiday=counts[DayResolution.HOLIDAY],
        graced=graced,
        pending=counts[DayResolution.PENDING],
        absent_dates=tuple(absent_dates),
        default_schedule=shift is None,
    )


def _is_absence(status: Optional[AttendanceStatus], day: date, as_of: date) -> bool:
    return resolve_day(day, status=status, graced=False, as_of=as_of) == DayResolution.ABSENT


class AttendanceAggregator:
    """Reads attendance, shifts and grace records and summarizes them per staff/month."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        graces: GraceRepository,
    ):
        self._attendance = attendance
        self._shifts = shifts
        self._graces = graces

    def summarize_many(self, staff: Sequence[Staff], month: MonthRange, *, as_of: date) -> Dict[int, AttendanceSummary]:
        if not staff:
            return {}

        staff_ids = [s.staff_id for s in staff]
        shifts = self._shifts.get_many(
            [s.shift_id for s in staff if s.shift_id],
            start=month.start,
            end=month.end,
        )
        graced = self._graces.graced_dates(staff_ids, start=month.start, end=month.end)

        records: Dict[int, Dict[date, AttendanceStatus]] = {}
        for day in self._attendance.list_for_staff(staff_ids, start=month.start, end=month.end):
            records.setdefault(day.staff_id, {})[day.work_date] = day.status

        return {
            s.staff_id: summarize_month(
                month,
                shift=shifts.get(s.shift_id) if s.shift_id else None,
                join_date=s.join_date,
                records=records.get(s.staff_id, {}),
                graced_dates=graced.get(s.staff_id, set()),
                as_of=as_of,
            )
            for s in staff
        }

    def summarize(self, staff: Staff, month: MonthRange, *, as_of: date) -> AttendanceSummary:
        return self.summarize_many([staff], month, as_of=as_of)[staff.staff_id]
