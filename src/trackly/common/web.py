from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.exceptions import AuthenticationError, ValidationError


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Not authorized to access this route")
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data: Any = None, *, status: int = 200, message: Optional[str] = None, count: Optional[int] = None):
    """Standard success envelope used by every controller."""

    body: dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    return jsonify(body), status


def fail(error: str, *, status: int, errors: Optional[list] = None):
    body: dict[str, Any] = {"success": False, "error": error}
    if errors:
        body["errors"] = errors
    return jsonify(body), status
