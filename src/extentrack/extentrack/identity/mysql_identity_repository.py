from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AuthSession, Identity
from .repository import IdentityRepository


def _to_identity(row: dict) -> Identity:
    return Identity(
        user_id=str(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
    )


class MySQLIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, email, password_hash, role FROM identities WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _to_identity(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, email, password_hash, role FROM identities WHERE user_id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            return _to_identity(row) if row else None

    def get_profile_role(self, user_id: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM profiles WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return Role(row["role"]) if row else None

    def get_profile_name(self, user_id: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM profiles WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return row["name"] if row else None

    def create_session(self, *, user_id: str, token: str, expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO auth_sessions(token, user_id, expires_at) VALUES(%s,%s,%s)",
                (token, user_id, expires_at),
            )

    def get_session(self, token: str) -> Optional[AuthSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT token, user_id, expires_at FROM auth_sessions WHERE token=%s",
                (token,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AuthSession(token=row["token"], user_id=str(row["user_id"]), expires_at=row["expires_at"])

    def delete_session(self, token: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM auth_sessions WHERE token=%s", (token,))
            return cur.rowcount > 0
