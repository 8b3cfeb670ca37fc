from __future__ import annotations

from flask import Flask, request

from ..common.http import flag, json_endpoint, make_auth_required, ok, request_data
from ..container import Container
from ..core.enums import Role
from ..identity.model import SessionContext
from ..reports.aggregator import student_total_hours


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.auth_service)
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def list_students(ctx: SessionContext):
        students = service.list_students(ctx, search=request.args.get("search", ""))
        participations = container.attendance_service.list_participations(ctx)

        out = []
        for s in students:
            item = s.to_dict()
            item["projects"] = sum(1 for p in participations if p.student_id == s.student_id)
            item["total_hours"] = student_total_hours(participations, s.student_id)
            out.append(item)
        return ok(students=out)

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def add_student(ctx: SessionContext):
        data = request_data()
        student = service.create_student(
            ctx,
            name=data.get("name", ""),
            matricula=data.get("matricula", ""),
            email=data.get("email"),
            course=data.get("course"),
            entry_year=data.get("ano_ingresso"),
        )
        return ok(201, message=f'Aluno "{student.name}" cadastrado com sucesso.', student=student.to_dict())

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def delete_student(student_id: str, ctx: SessionContext):
        confirm = flag(request.args.get("confirm")) or flag(request_data().get("confirm"))
        student = service.delete_student(ctx, student_id=student_id, confirm=confirm)
        return ok(message=f'Aluno "{student.name}" excluído com sucesso.')
