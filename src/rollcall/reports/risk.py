from __future__ import annotations

from ..core.constants import RISK_CRITICAL_HOURS, RISK_HIGH_HOURS, RISK_MEDIUM_HOURS
from ..core.enums import RiskLevel


def classify_risk(total_hours: float) -> RiskLevel:
    if total_hours >= RISK_CRITICAL_HOURS:
        return RiskLevel.CRITICAL
    if total_hours >= RISK_HIGH_HOURS:
        return RiskLevel.HIGH
    if total_hours >= RISK_MEDIUM_HOURS:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def is_high_risk(total_hours: float) -> bool:
    """High and critical students both need immediate follow-up."""
    return total_hours >= RISK_HIGH_HOURS
