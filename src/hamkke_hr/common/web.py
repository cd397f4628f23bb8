from __future__ import annotations

from functools import wraps

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import ValidationError


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"error": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role") or Role.EMPLOYEE.value)
    except ValueError:
        return Role.EMPLOYEE


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def window_args() -> dict:
    """Report window from the query string: ``start``/``end`` or ``days``."""

    start = request.args.get("start") or None
    end = request.args.get("end") or None
    if start or end:
        return {"start": start, "end": end}

    days = request.args.get("days")
    if days is None or days == "":
        return {}
    try:
        return {"days": int(days)}
    except ValueError:
        raise ValidationError("days must be a whole number")
