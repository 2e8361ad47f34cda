from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_timestamp

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class AbsenteeRecord:
    """Read-model: one student marked absent for one session.

    Built from the attendance/students/sessions/courses join; ``time_slot`` is
    missing when the course has no timetable entry for the session's weekday.
    """

    attendance_id: int
    student_id: int
    student_name: str
    matricule: str
    field_name: str
    level: str
    session_id: int
    course_title: str
    course_code: str
    time_slot: Optional[str]
    date: datetime
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None

    def to_api_dict(self) -> dict:
        """Row shape served by the absentee endpoints and kept in the cache."""
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "matricule": self.matricule,
            "fieldName": self.field_name,
            "level": self.level,
            "sessionId": self.session_id,
            "courseTitle": self.course_title,
            "courseCode": self.course_code,
            "timeSlot": self.time_slot,
            "date": self.date.strftime(TIMESTAMP_FORMAT),
            "parentName": self.parent_name,
            "parentPhone": self.parent_phone,
        }

    @classmethod
    def from_api_dict(cls, data: Mapping[str, Any]) -> "AbsenteeRecord":
        return cls(
            attendance_id=int(data["id"]),
            student_id=int(data["studentId"]),
            student_name=data["studentName"],
            matricule=data["matricule"],
            field_name=data["fieldName"],
            level=data["level"],
            session_id=int(data["sessionId"]),
            course_title=data["courseTitle"],
            course_code=data["courseCode"],
            time_slot=data.get("timeSlot"),
            date=parse_timestamp(data["date"]),
            parent_name=data.get("parentName"),
            parent_phone=data.get("parentPhone"),
        )
