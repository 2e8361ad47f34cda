from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.model import AbsenteeRecord
from ..attendance.repository import AttendanceRepository
from ..cache.repository import LocalCache
from ..common.datetime_utils import now_local
from ..common.logging import get_logger
from ..core.constants import CACHE_KEY_ABSENTEE_HOURS, CACHE_KEY_ABSENTEE_RECORDS, CACHE_KEY_REPORTS
from ..core.enums import ReportType
from ..core.exceptions import NotFoundError, ReportUnavailableError
from ..students.model import Student
from ..students.repository import StudentRepository
from .calculator.base import SessionDurationCalculator
from .calculator.time_slot_calculator import TimeSlotDurationCalculator
from .model import (
    AbsenteeHoursReport,
    AbsenteeReport,
    AbsentSession,
    FieldGroup,
    ReportFilters,
    StudentAbsenteeHours,
)
from .risk import is_high_risk

logger = get_logger(__name__)

HOURS_LOAD_ERROR = "Failed to load absentee hours data. Please try again."
REPORT_LOAD_ERROR = "Failed to load absentee report. Please try again."

_REPORT_TITLES = {
    ReportType.DAILY: "Daily Absentee Report",
    ReportType.WEEKLY: "Weekly Absentee Report",
    ReportType.MONTHLY: "Monthly Absentee Report",
}


def aggregate_absentee_hours(
    students: Iterable[Student],
    records: Sequence[AbsenteeRecord],
    calculator: SessionDurationCalculator,
) -> list[StudentAbsenteeHours]:
    """One entry per student, including students with no absences.

    A record belongs to a student when either the id or the matricule matches.
    """
    out: list[StudentAbsenteeHours] = []
    for student in students:
        sessions = tuple(
            AbsentSession(
                date=r.date,
                course=r.course_title,
                course_code=r.course_code,
                duration=calculator.duration_hours(r.time_slot),
                time_slot=r.time_slot,
            )
            for r in records
            if r.student_id == student.student_id or r.matricule == student.matricule
        )
        out.append(
            StudentAbsenteeHours(
                student_id=student.student_id,
                student_name=student.name,
                matricule=student.matricule,
                field=student.field,
                level=student.level,
                total_absent_hours=sum(s.duration for s in sessions),
                absent_sessions=sessions,
            )
        )
    return out


def summarize_absentee_hours(
    hours: Sequence[StudentAbsenteeHours],
    *,
    field: Optional[str] = None,
    stale: bool = False,
    error: Optional[str] = None,
) -> AbsenteeHoursReport:
    """Headline figures cover every student; ``field`` only narrows the listing."""
    total = sum(h.total_absent_hours for h in hours)
    average = math.floor(total / len(hours) + 0.5) if hours else 0

    fields: list[str] = []
    for h in hours:
        if h.field not in fields:
            fields.append(h.field)

    return AbsenteeHoursReport(
        students=[h for h in hours if not field or h.field == field],
        total_students=len(hours),
        high_risk_count=sum(1 for h in hours if is_high_risk(h.total_absent_hours)),
        average_hours=int(average),
        fields=fields,
        stale=stale,
        error=error,
    )


def group_by_field(records: Iterable[AbsenteeRecord]) -> list[FieldGroup]:
    grouped: dict[str, list[AbsenteeRecord]] = {}
    for r in records:
        grouped.setdefault(r.field_name, []).append(r)
    return [FieldGroup(field_name=name, records=items) for name, items in grouped.items()]


class AbsenteeHoursService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        cache: LocalCache,
        *,
        calculator: Optional[SessionDurationCalculator] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._cache = cache
        self._calculator = calculator or TimeSlotDurationCalculator()

    def build_report(self, *, field: Optional[str] = None) -> AbsenteeHoursReport:
        try:
            records = self._attendance.list_absentees()
            students = self._students.list_all()
        except Exception as e:
            logger.warning("Failed to load absentee hours, trying cache: %s", e)
            return summarize_absentee_hours(self._load_cached_hours(e), field=field, stale=True, error=HOURS_LOAD_ERROR)

        hours = aggregate_absentee_hours(students, records, self._calculator)
        self._cache.cache_data(CACHE_KEY_ABSENTEE_HOURS, [h.to_dict() for h in hours])
        self._cache.cache_data(CACHE_KEY_ABSENTEE_RECORDS, [r.to_api_dict() for r in records])
        return summarize_absentee_hours(hours, field=field)

    def for_student(self, matricule: str) -> StudentAbsenteeHours:
        student = self._students.get_by_matricule(matricule)
        if not student:
            raise NotFoundError(f"Student {matricule} not found")
        records = self._attendance.list_absentees()
        return aggregate_absentee_hours([student], records, self._calculator)[0]

    def _load_cached_hours(self, cause: Exception) -> list[StudentAbsenteeHours]:
        cached = self._cache.get_cached_data(CACHE_KEY_ABSENTEE_HOURS)
        if cached is None:
            raise ReportUnavailableError(HOURS_LOAD_ERROR) from cause
        try:
            return [StudentAbsenteeHours.from_dict(d) for d in cached]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Cached absentee hours are unreadable: %s", e)
            raise ReportUnavailableError(HOURS_LOAD_ERROR) from cause


class AbsenteeReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        cache: LocalCache,
        *,
        clock: Callable = now_local,
    ):
        self._attendance = attendance
        self._cache = cache
        self._clock = clock

    def build_report(self, filters: ReportFilters) -> AbsenteeReport:
        stale = False
        error = None
        try:
            records = list(
                self._attendance.list_absentees(
                    date_from=filters.date_from,
                    date_to=filters.date_to,
                    field=filters.field,
                    level=filters.level,
                )
            )
        except Exception as e:
            logger.warning("Failed to load absentee report, using cached roll-call records: %s", e)
            records = self._load_cached_records(e)
            stale = True
            error = REPORT_LOAD_ERROR

        filtered = [r for r in records if filters.matches(r)]
        if filtered:
            self._cache.cache_data(CACHE_KEY_REPORTS, [r.to_api_dict() for r in filtered])

        return AbsenteeReport(
            filters=filters,
            records=filtered,
            groups=group_by_field(filtered),
            title=_REPORT_TITLES[filters.report_type],
            description=self._describe(filters.report_type),
            stale=stale,
            error=error,
        )

    def _describe(self, report_type: ReportType) -> str:
        if report_type == ReportType.WEEKLY:
            return "This week's absentees"
        if report_type == ReportType.MONTHLY:
            return "This month's absentees"
        return f"Today's absentees ({self._clock().date().isoformat()})"

    def _load_cached_records(self, cause: Exception) -> list[AbsenteeRecord]:
        """Union of the last report rows and the last full roll-call rows.

        Rows are de-duplicated by attendance id and put back in query order
        (newest first, then student name).
        """
        merged: dict[int, AbsenteeRecord] = {}
        for key in (CACHE_KEY_REPORTS, CACHE_KEY_ABSENTEE_RECORDS):
            cached = self._cache.get_cached_data(key) or []
            try:
                for d in cached:
                    record = AbsenteeRecord.from_api_dict(d)
                    merged.setdefault(record.attendance_id, record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Cached %s rows are unreadable: %s", key, e)
                raise ReportUnavailableError(REPORT_LOAD_ERROR) from cause

        records = sorted(merged.values(), key=lambda r: r.student_name)
        return sorted(records, key=lambda r: r.date, reverse=True)
