from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository

_SELECT = """
    SELECT project_id, name, description, coordinator_id, status, created_at
    FROM projects
"""


def _to_project(row: dict) -> Project:
    return Project(
        project_id=str(row["project_id"]),
        name=row["name"],
        description=row.get("description"),
        coordinator_id=str(row["coordinator_id"]) if row.get("coordinator_id") else None,
        status=ProjectStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        coordinator_id: str,
        status: ProjectStatus,
    ) -> Project:
        project_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(project_id, name, description, coordinator_id, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (project_id, name, description, coordinator_id, status.value),
            )
            cur.execute(_SELECT + " WHERE project_id=%s", (project_id,))
            return _to_project(fetchone(cur))

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE project_id=%s", (project_id,))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def list_for_coordinator(self, coordinator_id: str) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE coordinator_id=%s ORDER BY created_at DESC",
                (coordinator_id,),
            )
            return [_to_project(r) for r in fetchall(cur)]

    def update(self, *, project_id: str, name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE projects SET name=%s, description=%s WHERE project_id=%s",
                (name, description, project_id),
            )
            return cur.rowcount > 0

    def delete(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0
