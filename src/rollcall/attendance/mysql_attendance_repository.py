from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import query_all
from .model import AbsenteeRecord
from .repository import AttendanceRepository

_ABSENTEE_SELECT = """
    SELECT
        a.id,
        s.id AS student_id,
        s.name AS student_name,
        s.matricule,
        s.field AS field_name,
        s.level,
        s.parent_name,
        s.parent_phone,
        sess.id AS session_id,
        c.title AS course_title,
        c.code AS course_code,
        t.time_slot,
        a.timestamp AS date
    FROM attendance a
    INNER JOIN students s ON a.student_id = s.id
    INNER JOIN sessions sess ON a.session_id = sess.id
    INNER JOIN courses c ON sess.course_id = c.id
    LEFT JOIN timetable t ON c.id = t.course_id AND t.day = DAYNAME(sess.date)
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_absentees(
        self,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        field: Optional[str] = None,
        level: Optional[str] = None,
    ) -> Sequence[AbsenteeRecord]:
        clauses = ["a.is_present = 0"]
        params: list[object] = []

        if date_from is not None:
            clauses.append("DATE(a.timestamp) >= %s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("DATE(a.timestamp) <= %s")
            params.append(date_to)
        if field:
            clauses.append("s.field = %s")
            params.append(field)
        if level:
            clauses.append("s.level = %s")
            params.append(level)

        where = " AND ".join(clauses)
        rows = query_all(
            self._conn_factory,
            f"{_ABSENTEE_SELECT} WHERE {where} ORDER BY a.timestamp DESC, s.name ASC",
            params,
        )

        return [
            AbsenteeRecord(
                attendance_id=int(r["id"]),
                student_id=int(r["student_id"]),
                student_name=r["student_name"],
                matricule=r["matricule"],
                field_name=r["field_name"],
                level=r["level"],
                session_id=int(r["session_id"]),
                course_title=r["course_title"],
                course_code=r["course_code"],
                time_slot=r.get("time_slot"),
                date=r["date"],
                parent_name=r.get("parent_name"),
                parent_phone=r.get("parent_phone"),
            )
            for r in rows
        ]
