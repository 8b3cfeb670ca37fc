from __future__ import annotations

import itertools
import os
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

os.environ.setdefault("APP_ENV", "testing")

from src.extentrack.extentrack.attendance.model import AttendanceRecord, Participation, ParticipationView
from src.extentrack.extentrack.container import wire
from src.extentrack.extentrack.coordinators.model import CoordinatorProfile
from src.extentrack.extentrack.core.enums import ParticipationStatus, ProjectStatus, Role
from src.extentrack.extentrack.core.exceptions import ConflictError
from src.extentrack.extentrack.identity.model import AuthSession, Identity
from src.extentrack.extentrack.projects.model import Project
from src.extentrack.extentrack.students.model import Student

BASE_TIME = datetime(2025, 3, 1, 9, 0, 0)


class InMemoryDB:
    """Tables of the schema, with the same unique keys and cascades."""

    def __init__(self):
        self.identities: dict[str, Identity] = {}
        self.profiles: dict[str, CoordinatorProfile] = {}
        self.sessions: dict[str, AuthSession] = {}
        self.projects: dict[str, Project] = {}
        self.students: dict[str, Student] = {}
        self.participations: dict[str, Participation] = {}
        self.records: list[AttendanceRecord] = []
        self._seq = itertools.count(1)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._seq)}"

    def tick(self) -> datetime:
        return BASE_TIME + timedelta(seconds=next(self._seq))

    def total_hours(self, participation_id: str) -> int:
        return sum(r.hours for r in self.records if r.participation_id == participation_id)

    def drop_participations(self, predicate) -> None:
        doomed = {pid for pid, p in self.participations.items() if predicate(p)}
        for pid in doomed:
            del self.participations[pid]
        self.records = [r for r in self.records if r.participation_id not in doomed]


class InMemoryIdentities:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_by_email(self, email: str) -> Optional[Identity]:
        return next((i for i in self._db.identities.values() if i.email == email), None)

    def get_by_id(self, user_id: str) -> Optional[Identity]:
        return self._db.identities.get(user_id)

    def _profile(self, user_id: str) -> Optional[CoordinatorProfile]:
        return next((p for p in self._db.profiles.values() if p.user_id == user_id), None)

    def get_profile_role(self, user_id: str) -> Optional[Role]:
        profile = self._profile(user_id)
        return profile.role if profile else None

    def get_profile_name(self, user_id: str) -> Optional[str]:
        profile = self._profile(user_id)
        return profile.name if profile else None

    def create_session(self, *, user_id: str, token: str, expires_at: datetime) -> None:
        self._db.sessions[token] = AuthSession(token=token, user_id=user_id, expires_at=expires_at)

    def get_session(self, token: str) -> Optional[AuthSession]:
        return self._db.sessions.get(token)

    def delete_session(self, token: str) -> bool:
        return self._db.sessions.pop(token, None) is not None


class InMemoryCoordinators:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def create_with_identity(self, *, email, password_hash, name, department, role=Role.COORDINATOR):
        if any(i.email == email for i in self._db.identities.values()):
            raise ConflictError("Já existe um usuário com este email")
        user_id = self._db.next_id("user")
        self._db.identities[user_id] = Identity(user_id=user_id, email=email, password_hash=password_hash, role=role)
        profile = CoordinatorProfile(
            profile_id=self._db.next_id("profile"),
            user_id=user_id,
            name=name,
            email=email,
            department=department,
            role=role,
            created_at=self._db.tick(),
        )
        self._db.profiles[profile.profile_id] = profile
        return profile

    def list_coordinators(self):
        items = [p for p in self._db.profiles.values() if p.role == Role.COORDINATOR]
        return sorted(items, key=lambda p: p.name)

    def get_by_id(self, profile_id: str):
        return self._db.profiles.get(profile_id)

    def update_profile(self, *, profile_id, name, department) -> bool:
        current = self._db.profiles.get(profile_id)
        if not current:
            return False
        self._db.profiles[profile_id] = replace(current, name=name, department=department)
        return True

    def delete_identity(self, user_id: str) -> bool:
        if self._db.identities.pop(user_id, None) is None:
            return False
        self._db.profiles = {k: p for k, p in self._db.profiles.items() if p.user_id != user_id}
        self._db.sessions = {k: s for k, s in self._db.sessions.items() if s.user_id != user_id}
        for pid, project in list(self._db.projects.items()):
            if project.coordinator_id == user_id:
                self._db.projects[pid] = replace(project, coordinator_id=None)
        return True


class InMemoryProjects:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def create(self, *, name, description, coordinator_id, status=ProjectStatus.ACTIVE):
        project = Project(
            project_id=self._db.next_id("project"),
            name=name,
            description=description,
            coordinator_id=coordinator_id,
            status=status,
            created_at=self._db.tick(),
        )
        self._db.projects[project.project_id] = project
        return project

    def get_by_id(self, project_id):
        return self._db.projects.get(project_id)

    def list_for_coordinator(self, coordinator_id):
        items = [p for p in self._db.projects.values() if p.coordinator_id == coordinator_id]
        return sorted(items, key=lambda p: p.created_at, reverse=True)

    def update(self, *, project_id, name, description) -> bool:
        current = self._db.projects.get(project_id)
        if not current:
            return False
        self._db.projects[project_id] = replace(current, name=name, description=description)
        return True

    def delete(self, project_id) -> bool:
        if self._db.projects.pop(project_id, None) is None:
            return False
        self._db.drop_participations(lambda p: p.project_id == project_id)
        return True


class InMemoryStudents:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def create(self, *, name, matricula, email=None, course=None, entry_year=None):
        if any(s.matricula == matricula for s in self._db.students.values()):
            raise ConflictError(f"Já existe um aluno com a matrícula {matricula}")
        student = Student(
            student_id=self._db.next_id("student"),
            name=name,
            matricula=matricula,
            email=email,
            course=course,
            entry_year=entry_year,
            created_at=self._db.tick(),
        )
        self._db.students[student.student_id] = student
        return student

    def get_by_id(self, student_id):
        return self._db.students.get(student_id)

    def get_by_matricula(self, matricula):
        return next((s for s in self._db.students.values() if s.matricula == matricula), None)

    def list_all(self):
        return sorted(self._db.students.values(), key=lambda s: s.name)

    def delete(self, student_id) -> bool:
        if self._db.students.pop(student_id, None) is None:
            return False
        self._db.drop_participations(lambda p: p.student_id == student_id)
        return True


class InMemoryAttendance:
    def __init__(self, db: InMemoryDB):
        self._db = db
        self.calls = 0

    def record_attendance(self, *, student_id, project_id, dates, hours, activity_description, created_by):
        self.calls += 1
        existing = self.get_participation(student_id=student_id, project_id=project_id)
        created = existing is None
        if created:
            existing = Participation(
                participation_id=self._db.next_id("participation"),
                student_id=student_id,
                project_id=project_id,
                status=ParticipationStatus.ACTIVE,
                created_at=self._db.tick(),
            )
            self._db.participations[existing.participation_id] = existing

        for d in dates:
            self._db.records.append(
                AttendanceRecord(
                    record_id=self._db.next_id("record"),
                    participation_id=existing.participation_id,
                    date=d,
                    hours=int(hours),
                    activity_description=activity_description,
                    created_by=created_by,
                    created_at=self._db.tick(),
                )
            )
        return existing.participation_id, created

    def get_participation(self, *, student_id, project_id):
        for p in self._db.participations.values():
            if p.student_id == student_id and p.project_id == project_id:
                return replace(p, total_hours=self._db.total_hours(p.participation_id))
        return None

    def list_participations(self, *, coordinator_id=None, project_id=None, student_id=None, active_only=True):
        out = []
        for p in sorted(self._db.participations.values(), key=lambda x: x.created_at):
            project = self._db.projects[p.project_id]
            student = self._db.students[p.student_id]
            if active_only and p.status != ParticipationStatus.ACTIVE:
                continue
            if coordinator_id is not None and project.coordinator_id != coordinator_id:
                continue
            if project_id is not None and p.project_id != project_id:
                continue
            if student_id is not None and p.student_id != student_id:
                continue
            out.append(
                ParticipationView(
                    participation=replace(p, total_hours=self._db.total_hours(p.participation_id)),
                    project_name=project.name,
                    project_description=project.description,
                    student_name=student.name,
                    student_matricula=student.matricula,
                )
            )
        return out

    def list_records_for_student(self, student_id):
        ids = {p.participation_id for p in self._db.participations.values() if p.student_id == student_id}
        return [r for r in self._db.records if r.participation_id in ids]


@pytest.fixture
def db() -> InMemoryDB:
    return InMemoryDB()


@pytest.fixture
def container(db):
    return wire(
        identities=InMemoryIdentities(db),
        coordinators=InMemoryCoordinators(db),
        projects=InMemoryProjects(db),
        students=InMemoryStudents(db),
        attendance=InMemoryAttendance(db),
    )


def add_account(container, *, email: str, password: str, role: Role, name: str, department: Optional[str] = None):
    return container.coordinators_repo.create_with_identity(
        email=email,
        password_hash=generate_password_hash(password),
        name=name,
        department=department,
        role=role,
    )


@pytest.fixture
def admin_account(container):
    return add_account(container, email="admin@extentrack.com", password="admin123", role=Role.ADMIN, name="Administrador")


@pytest.fixture
def coordinator_account(container):
    return add_account(
        container,
        email="ana@uni.br",
        password="coord123",
        role=Role.COORDINATOR,
        name="Ana Souza",
        department="Computação",
    )


@pytest.fixture
def admin_ctx(container, admin_account):
    return container.auth_service.sign_in("admin@extentrack.com", "admin123", expected_role=Role.ADMIN)


@pytest.fixture
def coordinator_ctx(container, coordinator_account):
    return container.auth_service.sign_in("ana@uni.br", "coord123", expected_role=Role.COORDINATOR)


@pytest.fixture
def project(container, coordinator_ctx):
    return container.project_service.create_project(coordinator_ctx, name="Horta Comunitária", description="Extensão rural")


@pytest.fixture
def student(container, coordinator_ctx):
    return container.student_service.create_student(
        coordinator_ctx,
        name="Bruno Lima",
        matricula="2023001",
        email="bruno@uni.br",
        course="Agronomia",
        entry_year="2023",
    )


@pytest.fixture
def app(container):
    from src.extentrack.extentrack import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 7, 14, 5, 9)


@pytest.fixture
def march_dates() -> list[date]:
    return [date(2025, 3, 3), date(2025, 3, 5), date(2025, 3, 7)]


@pytest.fixture
def make_account(container):
    def _make(**kwargs):
        return add_account(container, **kwargs)

    return _make
