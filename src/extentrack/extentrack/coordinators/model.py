from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class CoordinatorProfile:
    """Profile row of a coordinator. ``email`` is write-once."""

    profile_id: str
    user_id: str
    name: str
    email: str
    department: Optional[str]
    role: Role = Role.COORDINATOR
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.profile_id,
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "role": self.role.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
