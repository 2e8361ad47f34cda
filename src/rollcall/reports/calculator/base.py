from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class SessionDurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for session length)."""

    @abstractmethod
    def duration_hours(self, time_slot: Optional[str]) -> float:
        raise NotImplementedError
