from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Authentication record: who can sign in, and with which role claim."""

    user_id: str
    email: str
    password_hash: str
    role: Role


@dataclass(frozen=True)
class AuthSession:
    token: str
    user_id: str
    expires_at: datetime


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str
    role: Role
    name: Optional[str] = None


@dataclass(frozen=True)
class SessionContext:
    """The signed-in principal plus the bearer token of its session.

    Passed explicitly to every service operation that acts on behalf of a user.
    """

    principal: Principal
    token: str
    expires_at: datetime

    @property
    def user_id(self) -> str:
        return self.principal.user_id

    @property
    def role(self) -> Role:
        return self.principal.role
