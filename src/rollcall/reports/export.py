"""Report downloads: absentee CSV and absentee-hours workbook."""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, Sequence

import pandas as pd

from ..attendance.model import AbsenteeRecord
from ..core.enums import ReportType
from .model import StudentAbsenteeHours

CSV_HEADER = ["Student Name", "Matricule", "Field", "Level", "Course", "Parent Name", "Parent Phone", "Date"]

XLSX_COLUMNS = [
    "Student",
    "Matricule",
    "Field",
    "Level",
    "Total Absent Hours",
    "Risk Level",
    "Absent Sessions",
]


def absentee_csv_row(record: AbsenteeRecord) -> list[str]:
    return [
        record.student_name,
        record.matricule,
        record.field_name,
        record.level,
        f"{record.course_title} ({record.course_code})",
        record.parent_name or "",
        record.parent_phone or "",
        record.date.strftime("%Y-%m-%d"),
    ]


def write_absentee_csv(records: Iterable[AbsenteeRecord]) -> bytes:
    """CSV bytes (UTF-8 with BOM so spreadsheet apps detect the encoding)."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in records:
        writer.writerow(absentee_csv_row(r))
    return out.getvalue().encode("utf-8-sig")


def absentee_csv_filename(report_type: ReportType, today: date) -> str:
    return f"absentee-report-{report_type.value}-{today.isoformat()}.csv"


def write_absentee_hours_xlsx(hours: Sequence[StudentAbsenteeHours]) -> bytes:
    df = pd.DataFrame(
        [
            [
                h.student_name,
                h.matricule,
                h.field,
                h.level,
                h.total_absent_hours,
                h.risk_level.value,
                len(h.absent_sessions),
            ]
            for h in hours
        ],
        columns=XLSX_COLUMNS,
    )

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Absentee Hours")
    return out.getvalue()


def absentee_hours_xlsx_filename(today: date) -> str:
    return f"absentee-hours-{today.isoformat()}.xlsx"
