from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def create(
        self,
        *,
        name: str,
        matricula: str,
        email: Optional[str],
        course: Optional[str],
        entry_year: Optional[int],
    ) -> Student:
        """Raises ConflictError when the matricula is taken."""

        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_matricula(self, matricula: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        """Ordered by name."""

        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        """Hard delete; participations and their attendance records cascade."""

        raise NotImplementedError
