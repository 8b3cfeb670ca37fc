from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import CoordinatorProfile
from .repository import CoordinatorRepository

_SELECT = """
    SELECT profile_id, user_id, name, email, department, role, created_at
    FROM profiles
"""


def _to_profile(row: dict) -> CoordinatorProfile:
    return CoordinatorProfile(
        profile_id=str(row["profile_id"]),
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        department=row.get("department"),
        role=Role(row["role"]),
        created_at=row.get("created_at"),
    )


class MySQLCoordinatorRepository(CoordinatorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_with_identity(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        department: str,
    ) -> CoordinatorProfile:
        user_id = str(uuid.uuid4())
        profile_id = str(uuid.uuid4())
        with unique_violation_as("Já existe um usuário com este email"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO identities(user_id, email, password_hash, role) VALUES(%s,%s,%s,%s)",
                    (user_id, email, password_hash, Role.COORDINATOR.value),
                )
                cur.execute(
                    """
                    INSERT INTO profiles(profile_id, user_id, name, email, department, role)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (profile_id, user_id, name, email, department, Role.COORDINATOR.value),
                )
                cur.execute(_SELECT + " WHERE profile_id=%s", (profile_id,))
                return _to_profile(fetchone(cur))

    def list_coordinators(self) -> Sequence[CoordinatorProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE role=%s ORDER BY name", (Role.COORDINATOR.value,))
            return [_to_profile(r) for r in fetchall(cur)]

    def get_by_id(self, profile_id: str) -> Optional[CoordinatorProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE profile_id=%s", (profile_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def update_profile(self, *, profile_id: str, name: str, department: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET name=%s, department=%s WHERE profile_id=%s",
                (name, department, profile_id),
            )
            return cur.rowcount > 0

    def delete_identity(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM identities WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
