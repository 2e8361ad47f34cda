from __future__ import annotations

from enum import Enum


class RiskLevel(str, Enum):
    """Risk band derived from a student's total absent hours."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ReportType(str, Enum):
    """Reporting window selected on the absentee report."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
