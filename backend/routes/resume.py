import logging

from flask import Blueprint, current_app, jsonify, request

from backend.core.auth import require_admin
from backend.services.db import get_document, now_iso, set_document

logger = logging.getLogger(__name__)

bp = Blueprint("resume", __name__)


@bp.route("/api/resume", methods=["GET"])
def get_resume():
    """Return the resume link record, creating the default one on first read.

    Returns:
        flask.Response: JSON ``{"url": ..., "createdAt"|"updatedAt": ...}``,
        or 500 with ``error`` if the store fails.
    """
    db_path = current_app.config["DB_PATH"]
    try:
        doc = get_document("settings", "resume", db_path)
        if doc is None:
            default = {
                "url": current_app.config["DEFAULT_RESUME_URL"],
                "createdAt": now_iso(),
            }
            set_document("settings", "resume", default, db_path=db_path)
            return jsonify(default), 200
        doc.pop("id", None)
        return jsonify(doc), 200
    except Exception as e:
        logger.exception("Error fetching resume URL: %s", e)
        return jsonify({"error": "Error fetching resume URL"}), 500


@bp.route("/api/resume", methods=["PUT"])
@require_admin
def update_resume():
    """Replace the resume link. Expects JSON ``{"url": str}``; 400 without it."""
    data = request.get_json(silent=True) or {}
    url = data.get("url")
    if not url:
        return jsonify({"error": "URL is required"}), 400
    resume = {"url": url, "updatedAt": now_iso()}
    try:
        set_document("settings", "resume", resume, merge=True, db_path=current_app.config["DB_PATH"])
    except Exception as e:
        logger.exception("Error updating resume URL: %s", e)
        return jsonify({"error": "Error updating resume URL"}), 500
    return jsonify(resume), 200
