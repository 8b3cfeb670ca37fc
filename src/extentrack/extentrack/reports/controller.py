from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import json_endpoint, make_auth_required, request_data, text_download, with_cors
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..identity.model import SessionContext

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.auth_service)
    service = container.report_service

    @app.route("/functions/get-student-report", methods=["POST", "OPTIONS"], endpoint="fn_get_student_report")
    @with_cors
    def fn_get_student_report():
        """Public lookup by matricula.

        Only the student matching the given matricula is ever read; a miss
        answers a bare ``not_found`` so partial matches are not confirmed.
        """
        try:
            report = service.lookup_student_report(request_data().get("matricula"))
            return jsonify(report.to_dict()), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError:
            return jsonify({"error": "not_found"}), 404
        except Exception:
            logger.exception("unhandled error in get-student-report")
            return jsonify({"error": "internal_error"}), 500

    @app.route("/student/report", methods=["POST"], endpoint="student_report_download")
    @json_endpoint
    def student_report_download():
        report = service.lookup_student_report(request_data().get("matricula"))
        file = service.render(report)
        return text_download(file.content, file.filename)

    @app.route("/api/students/<student_id>/report", methods=["GET"], endpoint="coordinator_report_download")
    @json_endpoint
    @auth_required(Role.COORDINATOR)
    def coordinator_report_download(student_id: str, ctx: SessionContext):
        report = service.student_report(ctx, student_id)
        file = service.render(report)
        return text_download(file.content, file.filename)
