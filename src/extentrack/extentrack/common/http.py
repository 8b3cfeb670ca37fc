"""Shared helpers for the JSON controllers.

Every route returns ``{"success": ..., ...}`` bodies. Domain errors become
their mapped status code; anything unexpected is logged and answered with a
generic ``internal_error`` so no internals leak to the caller.
"""
from __future__ import annotations

import io
import logging
from functools import wraps
from typing import Any, Optional

from flask import current_app, g, jsonify, make_response, request, send_file, session

from ..core.constants import CORS_ALLOW_HEADERS
from ..core.enums import Role
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def request_data() -> dict[str, Any]:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def authorization_token() -> Optional[str]:
    """Token from the ``Authorization: Bearer`` header only."""
    header = request.headers.get("Authorization", "")
    if header[:7].lower() == "bearer ":
        return header[7:].strip() or None
    return None


def bearer_token() -> Optional[str]:
    """Header token, falling back to the signed-in session cookie."""
    return authorization_token() or session.get("token")


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def error_response(exc: DomainError):
    return jsonify({"success": False, "error": exc.code, "message": str(exc)}), exc.status_code


def json_endpoint(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", request.endpoint)
            return jsonify({"success": False, "error": "internal_error"}), 500

    return wrapper


def make_auth_required(auth_service):
    """Build the ``auth_required`` decorator bound to an AuthService.

    The resolved SessionContext is handed to the view as ``ctx``.
    """

    def auth_required(role: Optional[Role] = None):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                ctx = auth_service.resolve(bearer_token())
                if role is not None:
                    auth_service.require_role(ctx, role)
                g.auth = ctx
                return view(*args, ctx=ctx, **kwargs)

            return wrapper

        return decorator

    return auth_required


def _apply_cors(response):
    response.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ALLOW_ORIGIN", "*")
    response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
    return response


def with_cors(view):
    """Answer preflight requests and tag every response with CORS headers."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if request.method == "OPTIONS":
            return _apply_cors(make_response("ok", 200))
        return _apply_cors(make_response(view(*args, **kwargs)))

    return wrapper


def flag(value: Any) -> bool:
    """Interpret checkbox/query-string style booleans."""
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on", "sim"}


def text_download(content: str, filename: str):
    return send_file(
        io.BytesIO(content.encode("utf-8")),
        mimetype="text/plain",
        as_attachment=True,
        download_name=filename,
    )
