from __future__ import annotations

from datetime import date, datetime

from src.extentrack.extentrack.attendance.model import AttendanceRecord, Participation, ParticipationView
from src.extentrack.extentrack.common.datetime_utils import epoch_millis, format_iso_date
from src.extentrack.extentrack.reports.aggregator import (
    participation_total_hours,
    project_total_hours,
    student_total_hours,
)
from src.extentrack.extentrack.reports.model import StudentReport
from src.extentrack.extentrack.reports.renderer import render_report, report_filename
from src.extentrack.extentrack.students.model import Student

STUDENT = Student(
    student_id="s1",
    name="Bruno Lima",
    matricula="2023001",
    email="bruno@uni.br",
    course="Agronomia",
    entry_year=2023,
)


def _view(pid: str, project_name, hours: int, project_id: str = "p1", student_id: str = "s1"):
    return ParticipationView(
        participation=Participation(
            participation_id=pid, student_id=student_id, project_id=project_id, total_hours=hours
        ),
        project_name=project_name,
        project_description=None,
        student_name="Bruno Lima",
        student_matricula="2023001",
    )


def _record(pid: str, day: date, hours: int, activity: str):
    return AttendanceRecord(record_id=f"r-{day}", participation_id=pid, date=day, hours=hours, activity_description=activity)


def test_format_iso_date_splits_without_timezone():
    assert format_iso_date("2025-03-07") == "07/03/2025"
    assert format_iso_date("2025-01-01T00:00:00") == "01/01/2025"
    assert format_iso_date(date(2024, 12, 31)) == "31/12/2024"


def test_aggregates_are_plain_sums():
    views = [_view("a", "A", 10, "p1"), _view("b", "B", 5, "p2"), _view("c", "A", 4, "p1", student_id="s2")]
    records = [_record("a", date(2025, 3, 3), 4, "x"), _record("a", date(2025, 3, 4), 6, "y"), _record("b", date(2025, 3, 5), 5, "z")]

    assert student_total_hours(views, "s1") == 15
    assert student_total_hours(views) == 19
    assert project_total_hours(views, "p1") == 14
    assert participation_total_hours(records[:2]) == 10


def test_render_full_report(fixed_now):
    report = StudentReport(
        student=STUDENT,
        participations=[_view("a", "Horta Comunitária", 10), _view("b", "Biblioteca Viva", 5, "p2")],
        attendance_records=[
            _record("a", date(2025, 3, 3), 4, "Plantio"),
            _record("a", date(2025, 3, 5), 6, "Colheita"),
            _record("b", date(2025, 3, 7), 5, "Contação de histórias"),
        ],
    )

    text = render_report(report, generated_at=fixed_now)

    assert text == (
        "RELATÓRIO DE HORAS COMPLEMENTARES\n"
        "=====================================\n"
        "\n"
        "Nome: Bruno Lima\n"
        "Matrícula: 2023001\n"
        "Curso: Agronomia\n"
        "Email: bruno@uni.br\n"
        "Data de Geração: 07/03/2025\n"
        "\n"
        "PROJETOS PARTICIPADOS:\n"
        "- Horta Comunitária: 10h\n"
        "- Biblioteca Viva: 5h\n"
        "\n"
        "TOTAL GERAL DE HORAS: 15h\n"
        "\n"
        "DETALHAMENTO DE ATIVIDADES:\n"
        "03/03/2025 - 4h - Plantio\n"
        "05/03/2025 - 6h - Colheita\n"
        "07/03/2025 - 5h - Contação de histórias\n"
        "\n"
        "Este documento certifica a participação do aluno nos projetos de extensão universitária.\n"
        "\n"
        "---\n"
        "ExtenTrack - Sistema de Gestão de Extensão Universitária\n"
        "Documento gerado automaticamente em 07/03/2025, 14:05:09"
    )


def test_render_empty_report_uses_placeholders(fixed_now):
    student = Student(student_id="s2", name="Clara Dias", matricula="2024010")

    text = render_report(StudentReport(student=student), generated_at=fixed_now)

    assert "Curso: Não informado\n" in text
    assert "Email: Não informado\n" in text
    assert "PROJETOS PARTICIPADOS:\nNenhum projeto registrado\n" in text
    assert "TOTAL GERAL DE HORAS: 0h\n" in text
    assert "DETALHAMENTO DE ATIVIDADES:\nNenhuma atividade detalhada registrada\n" in text


def test_participation_without_project_name(fixed_now):
    report = StudentReport(student=STUDENT, participations=[_view("a", None, 3)])
    assert "- Projeto não identificado: 3h\n" in render_report(report, generated_at=fixed_now)


def test_report_filename_uses_epoch_millis(fixed_now):
    assert report_filename("2023001", generated_at=fixed_now) == f"relatorio_2023001_{epoch_millis(fixed_now)}.txt"
    assert epoch_millis(fixed_now) % 1000 == 0
