from __future__ import annotations

from datetime import date, datetime, timedelta

from ..core.enums import ReportType


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_timestamp(value) -> datetime:
    """Accept a datetime, a date or an ISO string (``T`` or space separated)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value).strip())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def report_window(report_type: ReportType, today: date) -> tuple[date, date]:
    """Default (start, end) for a report type when no dates are given."""
    if report_type == ReportType.WEEKLY:
        return today - timedelta(days=today.weekday()), today
    if report_type == ReportType.MONTHLY:
        return today.replace(day=1), today
    return today, today
