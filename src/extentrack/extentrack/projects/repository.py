from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        coordinator_id: str,
        status: ProjectStatus,
    ) -> Project:
        raise NotImplementedError

    def get_by_id(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def list_for_coordinator(self, coordinator_id: str) -> Sequence[Project]:
        """Newest first."""

        raise NotImplementedError

    def update(self, *, project_id: str, name: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, project_id: str) -> bool:
        """Hard delete; participations and their attendance records cascade."""

        raise NotImplementedError
