from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_SESSION_HOURS
from ..core.enums import Role
from ..core.exceptions import AccessDeniedError, AuthenticationError
from .credentials import PendingCredentials
from .model import Principal, SessionContext
from .repository import IdentityRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign in to a dashboard, resolve bearer sessions, sign out."""

    def __init__(
        self,
        identities: IdentityRepository,
        *,
        credentials: Optional[PendingCredentials] = None,
        session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_HOURS),
        clock: Callable[[], datetime] = now_local,
    ):
        self._identities = identities
        self._credentials = credentials if credentials is not None else PendingCredentials()
        self._session_ttl = session_ttl
        self._clock = clock

    def sign_in(self, email: str, password: str, *, expected_role: Role) -> SessionContext:
        email = require_non_empty(email, "Email").lower()
        require_non_empty(password, "Senha")

        identity = self._identities.get_by_email(email)
        try:
            ok = bool(identity) and check_password_hash(identity.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Email ou senha incorretos.")

        expires_at = self._clock() + self._session_ttl
        token = secrets.token_hex(32)
        self._identities.create_session(user_id=identity.user_id, token=token, expires_at=expires_at)

        stored_role = self._identities.get_profile_role(identity.user_id)
        principal = Principal(
            user_id=identity.user_id,
            email=identity.email,
            role=stored_role or identity.role,
            name=self._identities.get_profile_name(identity.user_id),
        )
        context = SessionContext(principal=principal, token=token, expires_at=expires_at)

        if stored_role != expected_role:
            self.sign_out(context)
            logger.info("Role mismatch for %s: expected %s", identity.user_id, expected_role.value)
            raise AccessDeniedError(
                f"Esta conta não tem permissão para acessar como {expected_role.label}."
            )

        return context

    def resolve(self, token: Optional[str]) -> SessionContext:
        if not token:
            raise AuthenticationError("Sessão expirada. Faça login novamente.")

        session = self._identities.get_session(token)
        if not session:
            raise AuthenticationError("Sessão expirada. Faça login novamente.")
        if session.expires_at <= self._clock():
            self._identities.delete_session(token)
            self._credentials.discard(token)
            raise AuthenticationError("Sessão expirada. Faça login novamente.")

        identity = self._identities.get_by_id(session.user_id)
        if not identity:
            raise AuthenticationError("Authentication failed")

        role = self._identities.get_profile_role(identity.user_id) or identity.role
        principal = Principal(
            user_id=identity.user_id,
            email=identity.email,
            role=role,
            name=self._identities.get_profile_name(identity.user_id),
        )
        return SessionContext(principal=principal, token=token, expires_at=session.expires_at)

    @staticmethod
    def require_role(context: SessionContext, role: Role) -> None:
        if context.role != role:
            raise AccessDeniedError(f"Esta conta não tem permissão para acessar como {role.label}.")

    def sign_out(self, context: SessionContext) -> None:
        self._identities.delete_session(context.token)
        self._credentials.discard(context.token)
