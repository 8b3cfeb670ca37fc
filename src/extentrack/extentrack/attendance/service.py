from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_text, require_positive_int
from ..core.constants import DEFAULT_ACTIVITY_DESCRIPTION
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..identity.model import SessionContext
from ..projects.repository import ProjectRepository
from ..students.repository import StudentRepository
from .model import AttendanceResult, ParticipationView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: coordinators register student hours on their projects."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        projects: ProjectRepository,
        students: StudentRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._projects = projects
        self._students = students
        self._clock = clock

    @staticmethod
    def _parse_dates(values: Iterable[str | date]) -> list[date]:
        out: list[date] = []
        for v in values:
            if isinstance(v, date):
                out.append(v)
                continue
            try:
                out.append(parse_iso_date(str(v).strip()))
            except ValueError:
                raise ValidationError(f"Data inválida: {v} (use AAAA-MM-DD)")
        # Same day picked twice in one submission counts once.
        return list(dict.fromkeys(out))

    def record_attendance(
        self,
        ctx: SessionContext,
        *,
        project_id: Optional[str],
        student_id: Optional[str],
        hours,
        dates: Sequence[str | date] = (),
        activity: Optional[str] = None,
        multiple: bool = False,
    ) -> AttendanceResult:
        if ctx.role != Role.COORDINATOR:
            raise AuthorizationError("Apenas coordenadores podem registrar frequência")
        if not project_id or not student_id:
            raise ValidationError("Selecione um projeto e um aluno.")

        hours_per_day = require_positive_int(hours, "Horas")

        if not isinstance(dates, (list, tuple)):
            raise ValidationError("Selecione pelo menos uma data.")
        if multiple:
            selected = self._parse_dates(dates)
            if not selected:
                raise ValidationError("Selecione pelo menos uma data.")
        else:
            if len(dates) > 1:
                raise ValidationError("Use o modo de múltiplas datas para registrar mais de um dia.")
            selected = self._parse_dates(dates) or [self._clock().date()]

        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Projeto não encontrado")
        if project.coordinator_id != ctx.user_id:
            raise AuthorizationError("Este projeto pertence a outro coordenador")
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Aluno não encontrado")

        participation_id, created = self._attendance.record_attendance(
            student_id=student_id,
            project_id=project_id,
            dates=selected,
            hours=hours_per_day,
            activity_description=optional_text(activity) or DEFAULT_ACTIVITY_DESCRIPTION,
            created_by=ctx.user_id,
        )
        if created:
            logger.info("Participation %s created for student %s in project %s", participation_id, student_id, project_id)

        return AttendanceResult(
            participation_id=participation_id,
            created_participation=created,
            days=len(selected),
            hours_per_day=hours_per_day,
        )

    def list_participations(
        self,
        ctx: SessionContext,
        *,
        project_id: Optional[str] = None,
    ) -> Sequence[ParticipationView]:
        if ctx.role != Role.COORDINATOR:
            raise AuthorizationError("Apenas coordenadores podem consultar participações")
        if project_id is not None:
            project = self._projects.get_by_id(project_id)
            if not project:
                raise NotFoundError("Projeto não encontrado")
            if project.coordinator_id != ctx.user_id:
                raise AuthorizationError("Este projeto pertence a outro coordenador")
        return self._attendance.list_participations(coordinator_id=ctx.user_id, project_id=project_id)
