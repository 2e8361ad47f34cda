from __future__ import annotations

from datetime import datetime

import pytest

from rollcall.attendance.model import AbsenteeRecord
from rollcall.core.constants import CACHE_KEY_ABSENTEE_HOURS, CACHE_KEY_ABSENTEE_RECORDS
from rollcall.core.enums import RiskLevel
from rollcall.core.exceptions import NotFoundError, ReportUnavailableError
from rollcall.reports.calculator.time_slot_calculator import TimeSlotDurationCalculator
from rollcall.reports.service import AbsenteeHoursService, aggregate_absentee_hours, summarize_absentee_hours
from rollcall.students.model import Student


def absent(attendance_id, student_id, matricule, *, slot="08:00 - 10:00", day=5, course="Data Structures"):
    return AbsenteeRecord(
        attendance_id=attendance_id,
        student_id=student_id,
        student_name=f"Student {student_id}",
        matricule=matricule,
        field_name="Computer Science",
        level="Level 200",
        session_id=attendance_id,
        course_title=course,
        course_code="CSC201",
        time_slot=slot,
        date=datetime(2026, 1, day, 8, 0),
    )


STUDENTS = [
    Student(student_id=1, name="Amina", matricule="CS001", field="Computer Science", level="Level 200"),
    Student(student_id=2, name="Jean", matricule="SE002", field="Software Engineering", level="Level 300"),
    Student(student_id=3, name="Grace", matricule="IT003", field="Information Technology", level="Level 100"),
]


class FakeAttendanceRepo:
    def __init__(self, rows=None, error=None):
        self._rows = rows or []
        self._error = error

    def list_absentees(self, *, date_from=None, date_to=None, field=None, level=None):
        if self._error:
            raise self._error
        return list(self._rows)


class FakeStudentRepo:
    def __init__(self, students):
        self._students = students

    def list_all(self, *, field=None, level=None):
        return list(self._students)

    def get_by_matricule(self, matricule):
        return next((s for s in self._students if s.matricule == matricule), None)


class InMemoryCache:
    def __init__(self):
        self.data = {}

    def cache_data(self, key, value):
        self.data[key] = value
        return True

    def get_cached_data(self, key):
        return self.data.get(key)


def test_total_hours_sum_sessions_matched_by_id_or_matricule():
    rows = [
        absent(1, 1, "CS001", slot="08:00 - 10:00"),
        # Id differs (e.g. re-imported student) but matricule matches
        absent(2, 99, "CS001", slot="13:00 - 16:00"),
        absent(3, 1, "OLD-ID", slot=None),
        absent(4, 2, "SE002", slot="10:00 - 10:30"),
    ]

    hours = aggregate_absentee_hours(STUDENTS, rows, TimeSlotDurationCalculator())
    by_matricule = {h.matricule: h for h in hours}

    assert by_matricule["CS001"].total_absent_hours == pytest.approx(2 + 3 + 2)
    assert len(by_matricule["CS001"].absent_sessions) == 3
    assert by_matricule["SE002"].total_absent_hours == 1.0
    assert by_matricule["IT003"].total_absent_hours == 0
    assert by_matricule["IT003"].absent_sessions == ()


def test_summary_counts_high_risk_and_rounds_average():
    rows = [absent(i, 1, "CS001", slot="08:00 - 13:00") for i in range(1, 4)]  # 15h
    rows += [absent(10 + i, 2, "SE002", slot="08:00 - 10:30") for i in range(2)]  # 5h

    hours = aggregate_absentee_hours(STUDENTS, rows, TimeSlotDurationCalculator())
    report = summarize_absentee_hours(hours)

    assert report.total_students == 3
    assert report.high_risk_count == 1
    # (15 + 5 + 0) / 3 = 6.67
    assert report.average_hours == 7
    assert report.fields == ["Computer Science", "Software Engineering", "Information Technology"]
    assert hours[0].risk_level == RiskLevel.CRITICAL
    assert hours[1].risk_level == RiskLevel.MEDIUM


def test_summary_average_rounds_half_up_and_handles_no_students():
    hours = aggregate_absentee_hours(STUDENTS[:2], [absent(1, 1, "CS001", slot="08:00 - 09:00")], TimeSlotDurationCalculator())

    assert summarize_absentee_hours(hours).average_hours == 1
    assert summarize_absentee_hours([]).average_hours == 0


def test_field_filter_narrows_listing_only():
    svc = AbsenteeHoursService(FakeAttendanceRepo([absent(1, 1, "CS001")]), FakeStudentRepo(STUDENTS), InMemoryCache())

    report = svc.build_report(field="Software Engineering")

    assert [s.matricule for s in report.students] == ["SE002"]
    assert report.total_students == 3


def test_successful_build_refreshes_cache():
    cache = InMemoryCache()
    svc = AbsenteeHoursService(FakeAttendanceRepo([absent(1, 1, "CS001")]), FakeStudentRepo(STUDENTS), cache)

    report = svc.build_report()

    assert report.stale is False
    assert len(cache.data[CACHE_KEY_ABSENTEE_HOURS]) == 3
    assert cache.data[CACHE_KEY_ABSENTEE_RECORDS][0]["matricule"] == "CS001"


def test_database_failure_serves_cached_hours():
    cache = InMemoryCache()
    AbsenteeHoursService(FakeAttendanceRepo([absent(1, 1, "CS001")]), FakeStudentRepo(STUDENTS), cache).build_report()

    broken = AbsenteeHoursService(FakeAttendanceRepo(error=RuntimeError("db down")), FakeStudentRepo(STUDENTS), cache)
    report = broken.build_report()

    assert report.stale is True
    assert report.error == "Failed to load absentee hours data. Please try again."
    assert report.students[0].total_absent_hours == 2.0
    assert report.students[0].absent_sessions[0].date == datetime(2026, 1, 5, 8, 0)


def test_database_failure_without_cache_raises():
    svc = AbsenteeHoursService(FakeAttendanceRepo(error=RuntimeError("db down")), FakeStudentRepo(STUDENTS), InMemoryCache())

    with pytest.raises(ReportUnavailableError):
        svc.build_report()


def test_for_student_unknown_matricule():
    svc = AbsenteeHoursService(FakeAttendanceRepo([]), FakeStudentRepo(STUDENTS), InMemoryCache())

    with pytest.raises(NotFoundError):
        svc.for_student("NOPE")

    assert svc.for_student("IT003").total_absent_hours == 0
