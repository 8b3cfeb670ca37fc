from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.model import AttendanceRecord, ParticipationView
from ..students.model import Student


@dataclass(frozen=True)
class StudentReport:
    """Everything the hours report needs about one student."""

    student: Student
    participations: list[ParticipationView] = field(default_factory=list)
    attendance_records: list[AttendanceRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        participations = []
        for p in self.participations:
            item = p.to_dict()
            item["projetos"] = {"name": p.project_name, "description": p.project_description}
            participations.append(item)
        return {
            "student": self.student.to_dict(),
            "participations": participations,
            "attendanceRecords": [r.to_dict() for r in self.attendance_records],
        }
