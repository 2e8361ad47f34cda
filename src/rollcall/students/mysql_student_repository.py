from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import query_all, query_one
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, name, matricule, field, level, parent_name, parent_phone"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        name=r["name"],
        matricule=r["matricule"],
        field=r["field"],
        level=r["level"],
        parent_name=r.get("parent_name"),
        parent_phone=r.get("parent_phone"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, field: Optional[str] = None, level: Optional[str] = None) -> Sequence[Student]:
        clauses = []
        params: list[object] = []
        if field:
            clauses.append("field=%s")
            params.append(field)
        if level:
            clauses.append("level=%s")
            params.append(level)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = query_all(
            self._conn_factory,
            f"SELECT {_COLUMNS} FROM students {where} ORDER BY name ASC",
            params,
        )
        return [_to_student(r) for r in rows]

    def get_by_matricule(self, matricule: str) -> Optional[Student]:
        r = query_one(self._conn_factory, f"SELECT {_COLUMNS} FROM students WHERE matricule=%s", (matricule,))
        return _to_student(r) if r else None
