from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.constants import STUDENT_PAGE_SIZE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import Student
from .repository import StudentRepository

_SELECT = """
    SELECT student_id, name, matricula, email, course, entry_year, created_at
    FROM students
"""


def _to_student(row: dict) -> Student:
    return Student(
        student_id=str(row["student_id"]),
        name=row["name"],
        matricula=row["matricula"],
        email=row.get("email"),
        course=row.get("course"),
        entry_year=int(row["entry_year"]) if row.get("entry_year") is not None else None,
        created_at=row.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, page_size: int = STUDENT_PAGE_SIZE):
        self._conn_factory = conn_factory
        self._page_size = int(page_size)

    def create(
        self,
        *,
        name: str,
        matricula: str,
        email: Optional[str],
        course: Optional[str],
        entry_year: Optional[int],
    ) -> Student:
        student_id = str(uuid.uuid4())
        with unique_violation_as(f"Já existe um aluno com a matrícula {matricula}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(student_id, name, matricula, email, course, entry_year)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (student_id, name, matricula, email, course, entry_year),
                )
                cur.execute(_SELECT + " WHERE student_id=%s", (student_id,))
                return _to_student(fetchone(cur))

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE student_id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_by_matricula(self, matricula: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE matricula=%s", (matricula,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def list_all(self) -> Sequence[Student]:
        # Rosters can be large; read them page by page.
        out: list[Student] = []
        offset = 0
        while True:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    _SELECT + " ORDER BY name, student_id LIMIT %s OFFSET %s",
                    (self._page_size, offset),
                )
                rows = fetchall(cur)
            out.extend(_to_student(r) for r in rows)
            if len(rows) < self._page_size:
                return out
            offset += self._page_size

    def delete(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return cur.rowcount > 0
