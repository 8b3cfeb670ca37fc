from __future__ import annotations

from flask import Flask

from ..common.http import flag, json_endpoint, make_auth_required, ok, request_data
from ..container import Container
from ..core.enums import Role
from ..identity.model import SessionContext


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.auth_service)

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def record_attendance(ctx: SessionContext):
        data = request_data()
        dates = data.get("dates")
        if dates is None:
            dates = [data["date"]] if data.get("date") else []
        elif isinstance(dates, str):
            dates = [d for d in dates.split(",") if d.strip()]

        result = container.attendance_service.record_attendance(
            ctx,
            project_id=data.get("project_id"),
            student_id=data.get("student_id"),
            hours=data.get("hours"),
            dates=dates,
            activity=data.get("activity"),
            multiple=flag(data.get("multiple")),
        )
        return ok(
            201,
            message=result.message,
            participation_id=result.participation_id,
            created_participation=result.created_participation,
            days=result.days,
            total_hours=result.total_hours,
        )
