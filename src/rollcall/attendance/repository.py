from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AbsenteeRecord


class AttendanceRepository(Protocol):
    def list_absentees(
        self,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        field: Optional[str] = None,
        level: Optional[str] = None,
    ) -> Sequence[AbsenteeRecord]:
        """Absent rows, newest first, then by student name."""

        raise NotImplementedError
