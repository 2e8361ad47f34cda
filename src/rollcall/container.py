from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .cache.file_cache import JsonFileCache
from .cache.repository import LocalCache
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import AbsenteeHoursService, AbsenteeReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    cache: LocalCache

    absentee_hours_service: AbsenteeHoursService
    absentee_report_service: AbsenteeReportService


def wire(*, students_repo: StudentRepository, attendance_repo: AttendanceRepository, cache: LocalCache) -> Container:
    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        cache=cache,
        absentee_hours_service=AbsenteeHoursService(attendance_repo, students_repo, cache),
        absentee_report_service=AbsenteeReportService(attendance_repo, cache),
    )


def build_container(*, db_config: dict, cache_dir: str | Path) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        cache=JsonFileCache(cache_dir),
    )
