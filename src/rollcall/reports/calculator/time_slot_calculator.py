from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.constants import DEFAULT_SESSION_HOURS, MIN_SESSION_HOURS
from .base import SessionDurationCalculator

_CLOCK_FORMATS = ("%H:%M", "%H:%M:%S")


def _parse_clock(value: str) -> datetime:
    value = value.strip()
    for fmt in _CLOCK_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid clock time: {value!r}")


class TimeSlotDurationCalculator(SessionDurationCalculator):
    """Standard rule: end - start of a "HH:MM - HH:MM" slot, at least 1 hour.

    A missing or unparseable slot counts as a 2 hour session.
    """

    def __init__(self, *, default_hours: float = DEFAULT_SESSION_HOURS, min_hours: float = MIN_SESSION_HOURS):
        self._default_hours = float(default_hours)
        self._min_hours = float(min_hours)

    def duration_hours(self, time_slot: Optional[str]) -> float:
        if not isinstance(time_slot, str) or not time_slot.strip():
            return self._default_hours

        parts = time_slot.split("-")
        if len(parts) != 2:
            return self._default_hours

        try:
            start = _parse_clock(parts[0])
            end = _parse_clock(parts[1])
        except ValueError:
            return self._default_hours

        hours = (end - start).total_seconds() / 3600
        return max(hours, self._min_hours)
