from __future__ import annotations

from flask import Flask, request

from ..common.http import flag, json_endpoint, make_auth_required, ok, request_data
from ..container import Container
from ..core.enums import Role
from ..identity.model import SessionContext
from ..reports.aggregator import project_total_hours


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.auth_service)
    service = container.project_service

    @app.route("/api/projects", methods=["GET"], endpoint="list_projects")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def list_projects(ctx: SessionContext):
        projects = service.list_projects(ctx)
        participations = container.attendance_service.list_participations(ctx)

        out = []
        for p in projects:
            item = p.to_dict()
            item["students"] = sum(1 for x in participations if x.project_id == p.project_id)
            item["total_hours"] = project_total_hours(participations, p.project_id)
            out.append(item)
        return ok(projects=out)

    @app.route("/api/projects", methods=["POST"], endpoint="add_project")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def add_project(ctx: SessionContext):
        data = request_data()
        project = service.create_project(ctx, name=data.get("name", ""), description=data.get("description"))
        return ok(201, message=f'Projeto "{project.name}" criado com sucesso.', project=project.to_dict())

    @app.route("/api/projects/<project_id>", methods=["PUT", "PATCH"], endpoint="edit_project")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def edit_project(project_id: str, ctx: SessionContext):
        data = request_data()
        project = service.update_project(
            ctx,
            project_id=project_id,
            name=data.get("name", ""),
            description=data.get("description"),
        )
        return ok(message=f'Projeto "{project.name}" atualizado com sucesso.', project=project.to_dict())

    @app.route("/api/projects/<project_id>", methods=["DELETE"], endpoint="delete_project")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def delete_project(project_id: str, ctx: SessionContext):
        confirm = flag(request.args.get("confirm")) or flag(request_data().get("confirm"))
        project = service.delete_project(ctx, project_id=project_id, confirm=confirm)
        return ok(message=f'Projeto "{project.name}" excluído com sucesso.')

    @app.route("/api/participations", methods=["GET"], endpoint="list_participations")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def list_participations(ctx: SessionContext):
        items = container.attendance_service.list_participations(ctx, project_id=request.args.get("project_id") or None)
        return ok(participations=[p.to_dict() for p in items])
