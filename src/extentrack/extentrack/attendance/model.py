from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ParticipationStatus


@dataclass(frozen=True)
class Participation:
    """Links one student to one project. ``total_hours`` is derived from its records."""

    participation_id: str
    student_id: str
    project_id: str
    status: ParticipationStatus = ParticipationStatus.ACTIVE
    total_hours: int = 0
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ParticipationView:
    """Read-model: participation joined with its project and student."""

    participation: Participation
    project_name: Optional[str]
    project_description: Optional[str]
    student_name: Optional[str]
    student_matricula: Optional[str]

    @property
    def participation_id(self) -> str:
        return self.participation.participation_id

    @property
    def student_id(self) -> str:
        return self.participation.student_id

    @property
    def project_id(self) -> str:
        return self.participation.project_id

    @property
    def total_hours(self) -> int:
        return self.participation.total_hours

    def to_dict(self) -> dict:
        p = self.participation
        return {
            "id": p.participation_id,
            "student_id": p.student_id,
            "project_id": p.project_id,
            "status": p.status.value,
            "total_hours": p.total_hours,
            "created_at": p.created_at.isoformat() if p.created_at else None,
            "project": {"id": p.project_id, "name": self.project_name, "description": self.project_description},
            "student": {"id": p.student_id, "name": self.student_name, "matricula": self.student_matricula},
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """One dated, hour-valued activity entry. Append-only."""

    record_id: str
    participation_id: str
    date: date
    hours: int
    activity_description: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "participation_id": self.participation_id,
            "date": self.date.isoformat(),
            "hours": self.hours,
            "activity_description": self.activity_description,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class AttendanceResult:
    participation_id: str
    created_participation: bool
    days: int
    hours_per_day: int

    @property
    def total_hours(self) -> int:
        return self.hours_per_day * self.days

    @property
    def message(self) -> str:
        return f"{self.total_hours}h registradas em {self.days} dia(s)."
