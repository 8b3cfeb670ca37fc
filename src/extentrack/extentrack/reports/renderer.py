"""Plain-text hours report (``relatorio_<matricula>_<millis>.txt``).

The layout is consumed as-is by the extension office, keep it byte-for-byte.
"""
from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import epoch_millis, format_br_date, format_br_datetime, format_iso_date
from ..core.constants import MISSING_PROJECT_NAME, NOT_INFORMED
from .aggregator import student_total_hours
from .model import StudentReport

_TEMPLATE = """RELATÓRIO DE HORAS COMPLEMENTARES
=====================================

Nome: {name}
Matrícula: {matricula}
Curso: {course}
Email: {email}
Data de Geração: {generated_date}

PROJETOS PARTICIPADOS:
{projects}

TOTAL GERAL DE HORAS: {total}h

DETALHAMENTO DE ATIVIDADES:
{activities}

Este documento certifica a participação do aluno nos projetos de extensão universitária.

---
ExtenTrack - Sistema de Gestão de Extensão Universitária
Documento gerado automaticamente em {generated_at}"""


def render_report(report: StudentReport, *, generated_at: datetime) -> str:
    student = report.student

    if report.participations:
        projects = "\n".join(
            f"- {p.project_name or MISSING_PROJECT_NAME}: {p.total_hours or 0}h"
            for p in report.participations
        )
    else:
        projects = "Nenhum projeto registrado"

    if report.attendance_records:
        activities = "\n".join(
            f"{format_iso_date(r.date)} - {r.hours}h - {r.activity_description}"
            for r in report.attendance_records
        )
    else:
        activities = "Nenhuma atividade detalhada registrada"

    return _TEMPLATE.format(
        name=student.name,
        matricula=student.matricula,
        course=student.course or NOT_INFORMED,
        email=student.email or NOT_INFORMED,
        generated_date=format_br_date(generated_at),
        projects=projects,
        total=student_total_hours(report.participations),
        activities=activities,
        generated_at=format_br_datetime(generated_at),
    )


def report_filename(matricula: str, *, generated_at: datetime) -> str:
    return f"relatorio_{matricula}_{epoch_millis(generated_at)}.txt"
