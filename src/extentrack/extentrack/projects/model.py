from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class Project:
    project_id: str
    name: str
    description: Optional[str]
    coordinator_id: Optional[str]
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "name": self.name,
            "description": self.description,
            "coordinator_id": self.coordinator_id,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
