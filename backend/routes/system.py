from flask import Blueprint, current_app, jsonify, request

from backend.core.auth import check_password
from backend.services.db import now_iso, ping
from backend.services.system import log_mem

bp = Blueprint("system", __name__)


@bp.route("/api/auth/login", methods=["POST"])
def login():
    """Exchange the admin password for a token (the password itself).

    Returns:
        flask.Response: ``{"success": true, "token": ...}`` or 401 with
        ``{"success": false, "error": "Invalid password"}``.
    """
    data = request.get_json(silent=True) or {}
    password = data.get("password")
    if check_password(password):
        return jsonify({"success": True, "token": password}), 200
    return jsonify({"success": False, "error": "Invalid password"}), 401


@bp.route("/api/health", methods=["GET"])
def health():
    connected = ping(current_app.config["DB_PATH"])
    return jsonify(
        {
            "status": "OK",
            "timestamp": now_iso(),
            "database": "connected" if connected else "disconnected",
            "memory_mb": round(log_mem("/api/health"), 2),
        }
    ), 200
