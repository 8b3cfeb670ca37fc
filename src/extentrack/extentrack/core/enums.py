from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role claim carried by an identity."""

    ADMIN = "admin"
    COORDINATOR = "coordinator"

    @property
    def label(self) -> str:
        return {Role.ADMIN: "administrador", Role.COORDINATOR: "coordenador"}[self]


class ProjectStatus(str, Enum):
    ACTIVE = "ativo"
    INACTIVE = "inativo"


class ParticipationStatus(str, Enum):
    """Status of a student's membership in a project."""

    ACTIVE = "ativo"
    INACTIVE = "inativo"
