from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..attendance.model import TIMESTAMP_FORMAT, AbsenteeRecord
from ..common.datetime_utils import parse_timestamp, report_window
from ..common.validators import optional_text, require_iso_date, require_report_type
from ..core.enums import ReportType, RiskLevel
from ..core.exceptions import ValidationError
from .contact import contact_links
from .risk import classify_risk


@dataclass(frozen=True)
class AbsentSession:
    date: datetime
    course: str
    course_code: str
    duration: float
    time_slot: Optional[str]

    def to_dict(self) -> dict:
        return {
            "date": self.date.strftime(TIMESTAMP_FORMAT),
            "course": self.course,
            "courseCode": self.course_code,
            "duration": self.duration,
            "timeSlot": self.time_slot,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AbsentSession":
        return cls(
            date=parse_timestamp(data["date"]),
            course=data["course"],
            course_code=data["courseCode"],
            duration=float(data["duration"]),
            time_slot=data.get("timeSlot"),
        )


@dataclass(frozen=True)
class StudentAbsenteeHours:
    """Per-student total of absent hours with the sessions behind it."""

    student_id: int
    student_name: str
    matricule: str
    field: str
    level: str
    total_absent_hours: float
    absent_sessions: tuple[AbsentSession, ...] = ()

    @property
    def risk_level(self) -> RiskLevel:
        return classify_risk(self.total_absent_hours)

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "matricule": self.matricule,
            "field": self.field,
            "level": self.level,
            "totalAbsentHours": self.total_absent_hours,
            "riskLevel": self.risk_level.value,
            "absentSessions": [s.to_dict() for s in self.absent_sessions],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StudentAbsenteeHours":
        return cls(
            student_id=int(data["studentId"]),
            student_name=data["studentName"],
            matricule=data["matricule"],
            field=data["field"],
            level=data["level"],
            total_absent_hours=float(data["totalAbsentHours"]),
            absent_sessions=tuple(AbsentSession.from_dict(s) for s in data.get("absentSessions") or []),
        )


@dataclass(frozen=True)
class AbsenteeHoursReport:
    students: list[StudentAbsenteeHours]
    total_students: int
    high_risk_count: int
    average_hours: int
    fields: list[str]
    stale: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "students": [s.to_dict() for s in self.students],
            "summary": {
                "totalStudents": self.total_students,
                "highRiskCount": self.high_risk_count,
                "averageHours": self.average_hours,
                "fields": list(self.fields),
            },
            "stale": self.stale,
            "error": self.error,
        }


@dataclass(frozen=True)
class ReportFilters:
    date_from: date
    date_to: date
    report_type: ReportType = ReportType.DAILY
    field: Optional[str] = None
    level: Optional[str] = None

    @classmethod
    def from_query(cls, args: Mapping[str, Any], *, today: date) -> "ReportFilters":
        """Build filters from request args; missing dates follow the report type."""
        report_type = require_report_type(args.get("report_type"))
        default_from, default_to = report_window(report_type, today)

        date_from = require_iso_date(args["date_from"], "date_from") if args.get("date_from") else default_from
        date_to = require_iso_date(args["date_to"], "date_to") if args.get("date_to") else default_to
        if date_from > date_to:
            raise ValidationError("date_from must not be after date_to")

        return cls(
            date_from=date_from,
            date_to=date_to,
            report_type=report_type,
            field=optional_text(args.get("field")),
            level=optional_text(args.get("level")),
        )

    def matches(self, record: AbsenteeRecord) -> bool:
        if self.field and record.field_name != self.field:
            return False
        if self.level and record.level != self.level:
            return False
        return self.date_from <= record.date.date() <= self.date_to

    def to_dict(self) -> dict:
        return {
            "date_from": self.date_from.isoformat(),
            "date_to": self.date_to.isoformat(),
            "report_type": self.report_type.value,
            "field": self.field,
            "level": self.level,
        }


@dataclass(frozen=True)
class FieldGroup:
    field_name: str
    records: list[AbsenteeRecord]

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class AbsenteeReport:
    filters: ReportFilters
    records: list[AbsenteeRecord]
    groups: list[FieldGroup]
    title: str
    description: str
    stale: bool = False
    error: Optional[str] = None

    @property
    def summary(self) -> dict:
        return {
            "totalAbsentees": len(self.records),
            "fieldsAffected": len({r.field_name for r in self.records}),
            "coursesAffected": len({r.course_title for r in self.records}),
            "parentsToContact": len({r.parent_phone.strip() for r in self.records if r.parent_phone and r.parent_phone.strip()}),
        }

    def to_dict(self) -> dict:
        def row(r: AbsenteeRecord) -> dict:
            out = r.to_api_dict()
            out["contact"] = contact_links(r.parent_phone, r.student_name)
            return out

        return {
            "title": self.title,
            "description": self.description,
            "filters": self.filters.to_dict(),
            "summary": self.summary,
            "groups": [
                {"fieldName": g.field_name, "count": g.count, "records": [row(r) for r in g.records]}
                for g in self.groups
            ],
            "records": [row(r) for r in self.records],
            "stale": self.stale,
            "error": self.error,
        }
