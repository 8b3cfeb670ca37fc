"""Hour totals over already-loaded participations and attendance records."""
from __future__ import annotations

from typing import Iterable

from ..attendance.model import AttendanceRecord, ParticipationView


def participation_total_hours(records: Iterable[AttendanceRecord]) -> int:
    return sum(int(r.hours) for r in records)


def student_total_hours(participations: Iterable[ParticipationView], student_id: str | None = None) -> int:
    return sum(
        int(p.total_hours or 0)
        for p in participations
        if student_id is None or p.student_id == student_id
    )


def project_total_hours(participations: Iterable[ParticipationView], project_id: str) -> int:
    return sum(int(p.total_hours or 0) for p in participations if p.project_id == project_id)
