from __future__ import annotations

from datetime import date

import pytest

from src.extentrack.extentrack.attendance.service import AttendanceService
from src.extentrack.extentrack.core.enums import Role
from src.extentrack.extentrack.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _record(container, ctx, project, student, **kwargs):
    kwargs.setdefault("hours", 3)
    return container.attendance_service.record_attendance(
        ctx, project_id=project.project_id, student_id=student.student_id, **kwargs
    )


def _participation(container, project, student):
    return container.attendance_repo.get_participation(student_id=student.student_id, project_id=project.project_id)


def test_multi_date_submission_adds_hours_times_days(container, db, coordinator_ctx, project, student, march_dates):
    result = _record(container, coordinator_ctx, project, student, dates=march_dates, multiple=True, activity="Plantio")

    assert result.created_participation is True
    assert result.days == 3
    assert result.total_hours == 9
    assert result.message == "9h registradas em 3 dia(s)."
    assert len(db.participations) == 1
    assert _participation(container, project, student).total_hours == 9
    assert [r.date for r in db.records] == march_dates
    assert {r.activity_description for r in db.records} == {"Plantio"}
    assert {r.created_by for r in db.records} == {coordinator_ctx.user_id}


def test_second_submission_reuses_participation(container, db, coordinator_ctx, project, student):
    first = _record(container, coordinator_ctx, project, student, dates=["2025-03-03"])
    second = _record(container, coordinator_ctx, project, student, hours=2, dates=["2025-03-04"])

    assert second.participation_id == first.participation_id
    assert second.created_participation is False
    assert len(db.participations) == 1
    assert _participation(container, project, student).total_hours == 5


def test_one_repository_call_per_submission(container, coordinator_ctx, project, student, march_dates):
    _record(container, coordinator_ctx, project, student, dates=march_dates, multiple=True)
    assert container.attendance_repo.calls == 1


def test_iso_strings_are_accepted(container, db, coordinator_ctx, project, student):
    _record(container, coordinator_ctx, project, student, dates=["2025-03-03", "2025-03-05"], multiple=True)
    assert [r.date for r in db.records] == [date(2025, 3, 3), date(2025, 3, 5)]


def test_duplicate_dates_are_collapsed(container, db, coordinator_ctx, project, student):
    result = _record(
        container, coordinator_ctx, project, student, dates=["2025-03-03", "2025-03-03"], multiple=True
    )
    assert result.days == 1
    assert len(db.records) == 1


def test_blank_activity_gets_default_description(container, db, coordinator_ctx, project, student):
    _record(container, coordinator_ctx, project, student, dates=["2025-03-03"], activity="   ")
    assert db.records[0].activity_description == "Atividade registrada"


def test_single_mode_without_date_uses_today(container, db, coordinator_ctx, project, student, fixed_now):
    service = AttendanceService(
        container.attendance_repo, container.projects_repo, container.students_repo, clock=lambda: fixed_now
    )
    service.record_attendance(coordinator_ctx, project_id=project.project_id, student_id=student.student_id, hours=1)
    assert db.records[0].date == date(2025, 3, 7)


def test_single_mode_rejects_several_dates(container, coordinator_ctx, project, student, march_dates):
    with pytest.raises(ValidationError):
        _record(container, coordinator_ctx, project, student, dates=march_dates)


def test_multi_mode_requires_a_date(container, db, coordinator_ctx, project, student):
    with pytest.raises(ValidationError, match="pelo menos uma data"):
        _record(container, coordinator_ctx, project, student, dates=[], multiple=True)
    assert db.participations == {}


def test_missing_project_or_student(container, coordinator_ctx, student):
    with pytest.raises(ValidationError, match="Selecione um projeto e um aluno"):
        container.attendance_service.record_attendance(
            coordinator_ctx, project_id="", student_id=student.student_id, hours=2
        )


@pytest.mark.parametrize("hours", [0, -1, "abc", None])
def test_hours_must_be_positive_integer(container, db, coordinator_ctx, project, student, hours):
    with pytest.raises(ValidationError):
        _record(container, coordinator_ctx, project, student, hours=hours, dates=["2025-03-03"])
    assert db.records == []


def test_malformed_date_is_rejected(container, db, coordinator_ctx, project, student):
    with pytest.raises(ValidationError):
        _record(container, coordinator_ctx, project, student, dates=["03/03/2025"], multiple=True)
    assert db.participations == {}


def test_unknown_student_is_not_found(container, coordinator_ctx, project):
    with pytest.raises(NotFoundError):
        container.attendance_service.record_attendance(
            coordinator_ctx, project_id=project.project_id, student_id="ghost", hours=2
        )


def test_project_of_another_coordinator_is_refused(container, db, make_account, project, student):
    make_account(email="rui@uni.br", password="coord456", role=Role.COORDINATOR, name="Rui Alves")
    other = container.auth_service.sign_in("rui@uni.br", "coord456", expected_role=Role.COORDINATOR)

    with pytest.raises(AuthorizationError):
        _record(container, other, project, student, dates=["2025-03-03"])
    assert db.records == []


def test_list_participations_reports_derived_totals(container, coordinator_ctx, project, student, march_dates):
    _record(container, coordinator_ctx, project, student, hours=2, dates=march_dates, multiple=True)

    views = container.attendance_service.list_participations(coordinator_ctx, project_id=project.project_id)

    assert len(views) == 1
    assert views[0].total_hours == 6
    assert views[0].to_dict()["student"]["matricula"] == "2023001"


@pytest.mark.parametrize("dates", [5, {}, "2025-03-03"])
def test_dates_must_be_a_list(container, db, coordinator_ctx, project, student, dates):
    with pytest.raises(ValidationError, match="pelo menos uma data"):
        _record(container, coordinator_ctx, project, student, dates=dates, multiple=True)
    assert container.attendance_repo.calls == 0
