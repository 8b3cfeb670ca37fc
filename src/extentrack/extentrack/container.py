from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .coordinators.mysql_coordinator_repository import MySQLCoordinatorRepository
from .coordinators.repository import CoordinatorRepository
from .coordinators.service import CoordinatorService
from .core.constants import DEFAULT_SESSION_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .identity.credentials import PendingCredentials
from .identity.mysql_identity_repository import MySQLIdentityRepository
from .identity.repository import IdentityRepository
from .identity.service import AuthService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    identities_repo: IdentityRepository
    coordinators_repo: CoordinatorRepository
    projects_repo: ProjectRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    credentials: PendingCredentials

    auth_service: AuthService
    coordinator_service: CoordinatorService
    project_service: ProjectService
    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    identities: IdentityRepository,
    coordinators: CoordinatorRepository,
    projects: ProjectRepository,
    students: StudentRepository,
    attendance: AttendanceRepository,
    session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_HOURS),
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories."""
    credentials = PendingCredentials()

    return Container(
        identities_repo=identities,
        coordinators_repo=coordinators,
        projects_repo=projects,
        students_repo=students,
        attendance_repo=attendance,
        credentials=credentials,
        auth_service=AuthService(identities, credentials=credentials, session_ttl=session_ttl),
        coordinator_service=CoordinatorService(coordinators, identities, credentials),
        project_service=ProjectService(projects),
        student_service=StudentService(students),
        attendance_service=AttendanceService(attendance, projects, students),
        report_service=ReportService(students, attendance),
        conn=conn,
    )


def build_container(*, db_config: dict, session_ttl_hours: int = DEFAULT_SESSION_HOURS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        identities=MySQLIdentityRepository(conn),
        coordinators=MySQLCoordinatorRepository(conn),
        projects=MySQLProjectRepository(conn),
        students=MySQLStudentRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        session_ttl=timedelta(hours=int(session_ttl_hours)),
        conn=conn,
    )
