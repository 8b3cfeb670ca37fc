from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..identity.model import SessionContext
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import StudentReport
from .renderer import render_report, report_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportFile:
    filename: str
    content: str


class ReportService:
    """Assembles per-student report data and renders the downloadable text."""

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._students = students
        self._attendance = attendance
        self._clock = clock

    def _assemble(self, student: Student) -> StudentReport:
        # Every query below is filtered by this student's id, nothing else.
        participations = self._attendance.list_participations(student_id=student.student_id, active_only=False)
        records = self._attendance.list_records_for_student(student.student_id)
        return StudentReport(
            student=student,
            participations=list(participations),
            attendance_records=list(records),
        )

    def lookup_student_report(self, matricula: Optional[str]) -> StudentReport:
        """Public lookup by registration number; no session required."""
        matricula = str(matricula or "").strip()
        if not matricula:
            raise ValidationError("matricula is required")

        logger.info("[get-student-report] fetching student: %s", matricula)
        student = self._students.get_by_matricula(matricula)
        if not student:
            raise NotFoundError("not_found")
        return self._assemble(student)

    def student_report(self, ctx: SessionContext, student_id: str) -> StudentReport:
        if ctx.role != Role.COORDINATOR:
            raise AuthorizationError("Apenas coordenadores podem gerar relatórios de alunos")
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Aluno não encontrado")
        return self._assemble(student)

    def render(self, report: StudentReport) -> ReportFile:
        generated_at = self._clock()
        return ReportFile(
            filename=report_filename(report.student.matricula, generated_at=generated_at),
            content=render_report(report, generated_at=generated_at),
        )
