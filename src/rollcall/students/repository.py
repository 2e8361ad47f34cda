from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_all(self, *, field: Optional[str] = None, level: Optional[str] = None) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_matricule(self, matricule: str) -> Optional[Student]:
        raise NotImplementedError
