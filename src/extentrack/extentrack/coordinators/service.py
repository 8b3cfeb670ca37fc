from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..identity.credentials import CreatedCredential, PendingCredentials
from ..identity.model import SessionContext
from ..identity.repository import IdentityRepository
from .model import CoordinatorProfile
from .repository import CoordinatorRepository

logger = logging.getLogger(__name__)


class CoordinatorService:
    """Use case: admins manage coordinator accounts."""

    def __init__(
        self,
        coordinators: CoordinatorRepository,
        identities: IdentityRepository,
        credentials: PendingCredentials,
    ):
        self._coordinators = coordinators
        self._identities = identities
        self._credentials = credentials

    @staticmethod
    def _require_admin(ctx: Optional[SessionContext]) -> None:
        if ctx is None or ctx.role != Role.ADMIN:
            raise AuthorizationError("Not authorized - admin required")

    def create_coordinator(
        self,
        ctx: Optional[SessionContext],
        *,
        email: str,
        password: str,
        name: str,
        department: str,
    ) -> CoordinatorProfile:
        self._require_admin(ctx)

        if not all(str(v or "").strip() for v in (email, password, name, department)):
            raise ValidationError("Missing required fields: email, password, name, department")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email inválido")
        require_min_length(password, "Senha", 6)
        name = require_non_empty(name, "Nome")
        department = require_non_empty(department, "Departamento")

        if self._identities.get_by_email(email):
            raise ConflictError("Já existe um usuário com este email")

        logger.info("Creating coordinator: email=%s name=%s department=%s", email, name, department)
        profile = self._coordinators.create_with_identity(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            department=department,
        )
        self._credentials.remember(
            ctx.token,
            CreatedCredential(email=email, name=name, password=password),
            expires_at=ctx.expires_at,
        )
        logger.info("User created successfully: %s", profile.user_id)
        return profile

    def list_coordinators(self, ctx: SessionContext, *, search: str = "") -> Sequence[CoordinatorProfile]:
        self._require_admin(ctx)
        items = list(self._coordinators.list_coordinators())
        term = (search or "").strip().lower()
        if not term:
            return items
        return [
            c for c in items
            if term in c.name.lower() or (c.department and term in c.department.lower())
        ]

    def update_coordinator(
        self,
        ctx: SessionContext,
        *,
        profile_id: str,
        name: str,
        department: str,
    ) -> CoordinatorProfile:
        self._require_admin(ctx)
        name = require_non_empty(name, "Nome")
        department = require_non_empty(department, "Departamento")

        current = self._coordinators.get_by_id(profile_id)
        if not current or current.role != Role.COORDINATOR:
            raise NotFoundError("Coordenador não encontrado")

        self._coordinators.update_profile(profile_id=profile_id, name=name, department=department)
        return self._coordinators.get_by_id(profile_id) or current

    def delete_coordinator(self, ctx: Optional[SessionContext], *, user_id: str) -> None:
        if ctx is None:
            raise AuthorizationError("No authorization header")
        self._require_admin(ctx)
        user_id = require_non_empty(user_id, "userId")

        identity = self._identities.get_by_id(user_id)
        if not identity:
            raise NotFoundError("User not found")
        if identity.role != Role.COORDINATOR:
            raise ValidationError("Apenas coordenadores podem ser excluídos")

        if not self._coordinators.delete_identity(user_id):
            raise NotFoundError("User not found")
        logger.info("Coordinator deleted: %s", user_id)

    def created_credentials(self, ctx: SessionContext) -> list[CreatedCredential]:
        self._require_admin(ctx)
        return self._credentials.list_for(ctx.token)
