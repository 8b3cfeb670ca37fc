from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import optional_text, optional_year, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..identity.model import SessionContext
from .model import Student
from .repository import StudentRepository


class StudentService:
    """Use case: coordinators manage the (global) student roster."""

    def __init__(self, students: StudentRepository):
        self._students = students

    @staticmethod
    def _require_coordinator(ctx: SessionContext) -> None:
        if ctx.role != Role.COORDINATOR:
            raise AuthorizationError("Apenas coordenadores podem gerenciar alunos")

    def create_student(
        self,
        ctx: SessionContext,
        *,
        name: str,
        matricula: str,
        email: Optional[str] = None,
        course: Optional[str] = None,
        entry_year: Any = None,
    ) -> Student:
        self._require_coordinator(ctx)
        name = require_non_empty(name, "Nome")
        matricula = require_non_empty(matricula, "Matrícula")
        email = optional_text(email)
        if email and "@" not in email:
            raise ValidationError("Email inválido")

        if self._students.get_by_matricula(matricula):
            raise ConflictError(f"Já existe um aluno com a matrícula {matricula}")

        return self._students.create(
            name=name,
            matricula=matricula,
            email=email,
            course=optional_text(course),
            entry_year=optional_year(entry_year, "Ano de ingresso"),
        )

    def get_student(self, ctx: SessionContext, student_id: str) -> Student:
        self._require_coordinator(ctx)
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Aluno não encontrado")
        return student

    def list_students(self, ctx: SessionContext, *, search: str = "") -> Sequence[Student]:
        self._require_coordinator(ctx)
        items = list(self._students.list_all())
        term = (search or "").strip().lower()
        if not term:
            return items
        return [
            s for s in items
            if any(term in (v or "").lower() for v in (s.name, s.matricula, s.email, s.course))
        ]

    def delete_student(self, ctx: SessionContext, *, student_id: str, confirm: bool = False) -> Student:
        """Delete a student together with their participations and hours."""
        student = self.get_student(ctx, student_id)
        if not confirm:
            raise ValidationError(
                f'Confirme a exclusão do aluno "{student.name}". Esta ação não pode ser desfeita.'
            )
        if not self._students.delete(student_id):
            raise NotFoundError("Aluno não encontrado")
        return student
