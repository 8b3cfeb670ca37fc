from __future__ import annotations

from flask import Flask, request

from ..common.http import authorization_token, json_endpoint, make_auth_required, ok, request_data, with_cors
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..identity.model import SessionContext
from .model import CoordinatorProfile


def _user_payload(profile: CoordinatorProfile) -> dict:
    return {
        "id": profile.user_id,
        "email": profile.email,
        "user_metadata": {
            "name": profile.name,
            "role": profile.role.value,
            "department": profile.department,
        },
    }


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.auth_service)
    service = container.coordinator_service

    def _privileged_context() -> SessionContext:
        # Header only: the session cookie must not authorize these cross-origin calls.
        token = authorization_token()
        if not token:
            raise AuthenticationError("No authorization header")
        return container.auth_service.resolve(token)

    @app.route("/api/coordinators", methods=["GET"], endpoint="list_coordinators")
    @json_endpoint
    @auth_required(Role.ADMIN)
    def list_coordinators(ctx: SessionContext):
        items = service.list_coordinators(ctx, search=request.args.get("search", ""))
        return ok(coordinators=[c.to_dict() for c in items])

    @app.route("/api/coordinators", methods=["POST"], endpoint="add_coordinator")
    @json_endpoint
    @auth_required(Role.ADMIN)
    def add_coordinator(ctx: SessionContext):
        data = request_data()
        profile = service.create_coordinator(
            ctx,
            email=data.get("email", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            department=data.get("department", ""),
        )
        return ok(
            201,
            message=f"{profile.name} foi cadastrado com sucesso.",
            coordinator=profile.to_dict(),
        )

    @app.route("/api/coordinators/<profile_id>", methods=["PUT", "PATCH"], endpoint="edit_coordinator")
    @json_endpoint
    @auth_required(Role.ADMIN)
    def edit_coordinator(profile_id: str, ctx: SessionContext):
        data = request_data()
        profile = service.update_coordinator(
            ctx,
            profile_id=profile_id,
            name=data.get("name", ""),
            department=data.get("department", ""),
        )
        return ok(message=f"{profile.name} foi atualizado com sucesso.", coordinator=profile.to_dict())

    @app.route("/api/coordinators/credentials", methods=["GET"], endpoint="created_credentials")
    @json_endpoint
    @auth_required(Role.ADMIN)
    def created_credentials(ctx: SessionContext):
        items = service.created_credentials(ctx)
        return ok(credentials=[{"email": c.email, "name": c.name, "password": c.password} for c in items])

    @app.route("/functions/create-coordinator", methods=["POST", "OPTIONS"], endpoint="fn_create_coordinator")
    @with_cors
    @json_endpoint
    def fn_create_coordinator():
        ctx = _privileged_context()
        data = request_data()
        profile = service.create_coordinator(
            ctx,
            email=data.get("email", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            department=data.get("department", ""),
        )
        return ok(user=_user_payload(profile), message="Coordinator created successfully")

    @app.route("/functions/delete-coordinator", methods=["POST", "OPTIONS"], endpoint="fn_delete_coordinator")
    @with_cors
    @json_endpoint
    def fn_delete_coordinator():
        ctx = _privileged_context()
        data = request_data()
        service.delete_coordinator(ctx, user_id=data.get("userId", ""))
        return ok(message="Coordinator deleted successfully")
