from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.enums import ProjectStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..identity.model import SessionContext
from .model import Project
from .repository import ProjectRepository


class ProjectService:
    """Use case: coordinators manage their own projects."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    @staticmethod
    def _require_coordinator(ctx: SessionContext) -> None:
        if ctx.role != Role.COORDINATOR:
            raise AuthorizationError("Apenas coordenadores podem gerenciar projetos")

    def _owned(self, ctx: SessionContext, project_id: str) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Projeto não encontrado")
        if project.coordinator_id != ctx.user_id:
            raise AuthorizationError("Este projeto pertence a outro coordenador")
        return project

    def create_project(self, ctx: SessionContext, *, name: str, description: Optional[str] = None) -> Project:
        self._require_coordinator(ctx)
        return self._projects.create(
            name=require_non_empty(name, "Nome do projeto"),
            description=optional_text(description),
            coordinator_id=ctx.user_id,
            status=ProjectStatus.ACTIVE,
        )

    def list_projects(self, ctx: SessionContext) -> Sequence[Project]:
        self._require_coordinator(ctx)
        return self._projects.list_for_coordinator(ctx.user_id)

    def get_project(self, ctx: SessionContext, project_id: str) -> Project:
        self._require_coordinator(ctx)
        return self._owned(ctx, project_id)

    def update_project(
        self,
        ctx: SessionContext,
        *,
        project_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> Project:
        self._require_coordinator(ctx)
        self._owned(ctx, project_id)
        name = require_non_empty(name, "Nome do projeto")
        self._projects.update(project_id=project_id, name=name, description=optional_text(description))
        return self._owned(ctx, project_id)

    def delete_project(self, ctx: SessionContext, *, project_id: str, confirm: bool = False) -> Project:
        """Delete a project together with its participations and hours."""
        self._require_coordinator(ctx)
        project = self._owned(ctx, project_id)
        if not confirm:
            raise ValidationError(
                f'Confirme a exclusão do projeto "{project.name}". Esta ação não pode ser desfeita.'
            )
        if not self._projects.delete(project_id):
            raise NotFoundError("Projeto não encontrado")
        return project
