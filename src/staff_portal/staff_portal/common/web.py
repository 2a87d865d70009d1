from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import PortalRole


def fail(message: str, status: int = 400, **extra: Any):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def ok(message: str = "", status: int = 200, **extra: Any):
    body = {"success": True, "message": message}
    body.update(extra)
    return jsonify(body), status


def request_data() -> dict:
    """JSON body or form fields as a plain dict (multi-value fields kept as lists)."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    out: dict[str, Any] = {}
    for key in request.form.keys():
        values = request.form.getlist(key)
        out[key] = values if len(values) > 1 or key.endswith("[]") else values[0]
    return {k.removesuffix("[]"): v for k, v in out.items()}


def current_role() -> PortalRole | None:
    try:
        return PortalRole(session.get("role"))
    except ValueError:
        return None


def role_required(*roles: PortalRole):
    """Gate a view on the session role; 401 when logged out, 403 for other roles."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            role = current_role()
            if role is None:
                return fail("Please log in to continue.", 401)
            if roles and role not in roles:
                return fail("You do not have permission to access this page.", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
