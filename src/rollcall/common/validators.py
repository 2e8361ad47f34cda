from __future__ import annotations

from typing import Optional

from ..core.enums import ReportType
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def require_iso_date(value: str, field_name: str):
    try:
        return parse_iso_date(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None


def require_report_type(value: Optional[str]) -> ReportType:
    if not value:
        return ReportType.DAILY
    try:
        return ReportType(value.strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in ReportType)
        raise ValidationError(f"report_type must be one of: {allowed}") from None
