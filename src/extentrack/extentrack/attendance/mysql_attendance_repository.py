from __future__ import annotations

import uuid
from datetime import date
from typing import Optional, Sequence

from ..core.enums import ParticipationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceRecord, Participation, ParticipationView
from .repository import AttendanceRepository

_TOTAL_HOURS = """
    (SELECT COALESCE(SUM(ar.hours), 0)
     FROM attendance_records ar
     WHERE ar.participation_id = p.participation_id)
"""


def _to_participation(row: dict) -> Participation:
    return Participation(
        participation_id=str(row["participation_id"]),
        student_id=str(row["student_id"]),
        project_id=str(row["project_id"]),
        status=ParticipationStatus(row["status"]),
        total_hours=int(row.get("total_hours") or 0),
        created_at=row.get("created_at"),
    )


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(row["record_id"]),
        participation_id=str(row["participation_id"]),
        date=normalize_mysql_date(row["date"]),
        hours=int(row["hours"]),
        activity_description=row["activity_description"],
        created_by=str(row["created_by"]) if row.get("created_by") else None,
        created_at=row.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record_attendance(
        self,
        *,
        student_id: str,
        project_id: str,
        dates: Sequence[date],
        hours: int,
        activity_description: str,
        created_by: Optional[str],
    ) -> tuple[str, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Conditional insert under UNIQUE(student_id, project_id). The update is a
            # no-op, so an existing row keeps its status and rowcount is 0.
            cur.execute(
                """
                INSERT INTO participations(participation_id, student_id, project_id, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE participation_id=participation_id
                """,
                (str(uuid.uuid4()), student_id, project_id, ParticipationStatus.ACTIVE.value),
            )
            created = cur.rowcount == 1

            cur.execute(
                """
                SELECT participation_id FROM participations
                WHERE student_id=%s AND project_id=%s
                FOR UPDATE
                """,
                (student_id, project_id),
            )
            participation_id = str(fetchone(cur)["participation_id"])

            cur.executemany(
                """
                INSERT INTO attendance_records(record_id, participation_id, date, hours, activity_description, created_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                [
                    (str(uuid.uuid4()), participation_id, d, int(hours), activity_description, created_by)
                    for d in dates
                ],
            )
            return participation_id, created

    def get_participation(self, *, student_id: str, project_id: str) -> Optional[Participation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.participation_id, p.student_id, p.project_id, p.status, p.created_at,
                       {_TOTAL_HOURS} AS total_hours
                FROM participations p
                WHERE p.student_id=%s AND p.project_id=%s
                """,
                (student_id, project_id),
            )
            row = fetchone(cur)
            return _to_participation(row) if row else None

    def list_participations(
        self,
        *,
        coordinator_id: Optional[str] = None,
        project_id: Optional[str] = None,
        student_id: Optional[str] = None,
        active_only: bool = True,
    ) -> Sequence[ParticipationView]:
        clauses: list[str] = []
        params: list[object] = []

        if active_only:
            clauses.append("p.status=%s")
            params.append(ParticipationStatus.ACTIVE.value)
        if coordinator_id is not None:
            clauses.append("pr.coordinator_id=%s")
            params.append(coordinator_id)
        if project_id is not None:
            clauses.append("p.project_id=%s")
            params.append(project_id)
        if student_id is not None:
            clauses.append("p.student_id=%s")
            params.append(student_id)

        where = ("WHERE " + " AND ".join(clauses)) if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT p.participation_id, p.student_id, p.project_id, p.status, p.created_at,
                       {_TOTAL_HOURS} AS total_hours,
                       pr.name AS project_name, pr.description AS project_description,
                       s.name AS student_name, s.matricula AS student_matricula
                FROM participations p
                JOIN projects pr ON pr.project_id = p.project_id
                JOIN students s ON s.student_id = p.student_id
                {where}
                ORDER BY p.created_at ASC
                """,
                tuple(params),
            )
            return [
                ParticipationView(
                    participation=_to_participation(r),
                    project_name=r.get("project_name"),
                    project_description=r.get("project_description"),
                    student_name=r.get("student_name"),
                    student_matricula=r.get("student_matricula"),
                )
                for r in fetchall(cur)
            ]

    def list_records_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ar.record_id, ar.participation_id, ar.date, ar.hours,
                       ar.activity_description, ar.created_by, ar.created_at
                FROM attendance_records ar
                JOIN participations p ON p.participation_id = ar.participation_id
                WHERE p.student_id=%s
                ORDER BY ar.created_at ASC, ar.date ASC
                """,
                (student_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]
