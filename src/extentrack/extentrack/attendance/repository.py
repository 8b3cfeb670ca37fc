from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, Participation, ParticipationView


class AttendanceRepository(Protocol):
    def record_attendance(
        self,
        *,
        student_id: str,
        project_id: str,
        dates: Sequence[date],
        hours: int,
        activity_description: str,
        created_by: Optional[str],
    ) -> tuple[str, bool]:
        """Find-or-create the (student, project) participation and append one
        record per date, all in one transaction.

        Returns ``(participation_id, created)``.
        """

        raise NotImplementedError

    def get_participation(self, *, student_id: str, project_id: str) -> Optional[Participation]:
        raise NotImplementedError

    def list_participations(
        self,
        *,
        coordinator_id: Optional[str] = None,
        project_id: Optional[str] = None,
        student_id: Optional[str] = None,
        active_only: bool = True,
    ) -> Sequence[ParticipationView]:
        raise NotImplementedError

    def list_records_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
