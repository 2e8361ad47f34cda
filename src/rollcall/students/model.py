from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student."""

    student_id: int
    name: str
    matricule: str
    field: str
    level: str
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "matricule": self.matricule,
            "field": self.field,
            "level": self.level,
            "parentName": self.parent_name,
            "parentPhone": self.parent_phone,
        }
