"""Shared-password guard for content-editing routes."""

from functools import wraps

from flask import current_app, jsonify, request


def check_password(password: str | None) -> bool:
    return password is not None and password == current_app.config["ADMIN_PASSWORD"]


def require_admin(view):
    """Reject the request with 401 unless ``x-admin-password`` matches."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not check_password(request.headers.get("x-admin-password")):
            return jsonify({"error": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper
