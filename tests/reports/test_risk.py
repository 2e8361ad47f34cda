import pytest

from rollcall.core.enums import RiskLevel
from rollcall.reports.risk import classify_risk, is_high_risk


@pytest.mark.parametrize(
    "hours, level",
    [
        (0, RiskLevel.LOW),
        (4.5, RiskLevel.LOW),
        (5, RiskLevel.MEDIUM),
        (9.5, RiskLevel.MEDIUM),
        (10, RiskLevel.HIGH),
        (14.9, RiskLevel.HIGH),
        (15, RiskLevel.CRITICAL),
        (40, RiskLevel.CRITICAL),
    ],
)
def test_risk_bands_have_inclusive_lower_bounds(hours, level):
    assert classify_risk(hours) == level


def test_high_risk_includes_critical():
    assert not is_high_risk(9.99)
    assert is_high_risk(10)
    assert is_high_risk(15)
