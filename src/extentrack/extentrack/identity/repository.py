from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import Role
from .model import AuthSession, Identity


class IdentityRepository(Protocol):
    """Identities, their stored profile role and their bearer sessions."""

    def get_by_email(self, email: str) -> Optional[Identity]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[Identity]:
        raise NotImplementedError

    def get_profile_role(self, user_id: str) -> Optional[Role]:
        """Role stored on the profile row (what dashboards are checked against)."""

        raise NotImplementedError

    def get_profile_name(self, user_id: str) -> Optional[str]:
        raise NotImplementedError

    def create_session(self, *, user_id: str, token: str, expires_at: datetime) -> None:
        raise NotImplementedError

    def get_session(self, token: str) -> Optional[AuthSession]:
        raise NotImplementedError

    def delete_session(self, token: str) -> bool:
        raise NotImplementedError
