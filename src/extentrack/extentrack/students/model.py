from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """A student on the roster. ``matricula`` is unique and is the public lookup key."""

    student_id: str
    name: str
    matricula: str
    email: Optional[str] = None
    course: Optional[str] = None
    entry_year: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "matricula": self.matricula,
            "email": self.email,
            "course": self.course,
            "ano_ingresso": self.entry_year,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
