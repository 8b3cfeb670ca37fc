from __future__ import annotations

from flask import Flask, redirect, session, url_for

from ..common.http import bearer_token, json_endpoint, make_auth_required, ok, request_data
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AccessDeniedError, AuthenticationError, NotFoundError
from ..identity.model import SessionContext


PROFILES = {
    "admin": {
        "title": "Administrador",
        "description": "Acesse o painel administrativo",
        "login": "/auth/login/admin",
        "dashboard": "/admin",
    },
    "coordinator": {
        "title": "Coordenador",
        "description": "Gerencie seus projetos de extensão",
        "login": "/auth/login/coordinator",
        "dashboard": "/coordinator",
    },
    "student": {
        "title": "Consultar Relatório",
        "description": "Digite sua matrícula para baixar seu relatório",
        "login": "/student/report",
        "dashboard": "/student/report",
    },
}


def _principal_payload(ctx: SessionContext) -> dict:
    p = ctx.principal
    return {"id": p.user_id, "email": p.email, "name": p.name, "role": p.role.value}


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.auth_service)

    @app.route("/", methods=["GET"], endpoint="select_profile")
    def select_profile():
        return ok(profiles=PROFILES)

    @app.route("/auth/login/<profile>", methods=["POST"], endpoint="login")
    @json_endpoint
    def login(profile: str):
        if profile not in (Role.ADMIN.value, Role.COORDINATOR.value):
            raise NotFoundError("Perfil inválido")

        data = request_data()
        ctx = container.auth_service.sign_in(
            data.get("email", ""),
            data.get("password", ""),
            expected_role=Role(profile),
        )
        session["token"] = ctx.token
        return ok(
            message="Login realizado com sucesso! Bem-vindo ao sistema!",
            access_token=ctx.token,
            expires_at=ctx.expires_at.isoformat(),
            user=_principal_payload(ctx),
            dashboard=PROFILES[profile]["dashboard"],
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    @json_endpoint
    @auth_required()
    def logout(ctx: SessionContext):
        container.auth_service.sign_out(ctx)
        session.pop("token", None)
        return ok(message="Você foi deslogado com sucesso.")

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @json_endpoint
    @auth_required()
    def me(ctx: SessionContext):
        return ok(user=_principal_payload(ctx), expires_at=ctx.expires_at.isoformat())

    def _enter_dashboard(role: Role):
        token = bearer_token()
        if not token:
            return redirect(url_for("select_profile"))
        try:
            ctx = container.auth_service.resolve(token)
        except AuthenticationError:
            session.pop("token", None)
            return redirect(url_for("select_profile"))

        if ctx.role != role:
            container.auth_service.sign_out(ctx)
            session.pop("token", None)
            raise AccessDeniedError(f"Esta conta não tem permissão para acessar como {role.label}.")

        return ok(message="Bem-vindo ao sistema!", dashboard=role.value, user=_principal_payload(ctx))

    @app.route("/admin", methods=["GET"], endpoint="admin_dashboard")
    @json_endpoint
    def admin_dashboard():
        return _enter_dashboard(Role.ADMIN)

    @app.route("/coordinator", methods=["GET"], endpoint="coordinator_dashboard")
    @json_endpoint
    def coordinator_dashboard():
        return _enter_dashboard(Role.COORDINATOR)
