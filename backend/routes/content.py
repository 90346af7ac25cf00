import logging

from flask import Blueprint, current_app, jsonify, request

from backend.core.auth import require_admin
from backend.services.db import (
    add_document,
    delete_document,
    list_documents,
    update_document,
)

logger = logging.getLogger(__name__)


def _db_path() -> str:
    return current_app.config["DB_PATH"]


def make_collection_blueprint(collection: str, label: str) -> Blueprint:
    """Build the list/create/update/delete routes for one collection.

    Args:
        collection: Collection name, also the URL segment under ``/api``.
        label: Singular, capitalized noun used in messages (``"Project"``).

    Returns:
        flask.Blueprint: ``GET`` is public; ``POST``, ``PUT`` and ``DELETE``
        require the admin password header.
    """
    bp = Blueprint(collection, __name__)
    noun = label.lower()

    @bp.route(f"/api/{collection}", methods=["GET"])
    def list_items():
        try:
            return jsonify(list_documents(collection, _db_path())), 200
        except Exception as e:
            logger.exception("Error fetching %s: %s", collection, e)
            return jsonify({"error": f"Error fetching {collection}"}), 500

    @bp.route(f"/api/{collection}", methods=["POST"])
    @require_admin
    def add_item():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "JSON object body is required"}), 400
        try:
            return jsonify(add_document(collection, data, _db_path())), 201
        except Exception as e:
            logger.exception("Error adding %s: %s", noun, e)
            return jsonify({"error": f"Error adding {noun}"}), 500

    @bp.route(f"/api/{collection}/<doc_id>", methods=["PUT"])
    @require_admin
    def update_item(doc_id: str):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "JSON object body is required"}), 400
        try:
            updated = update_document(collection, doc_id, data, _db_path())
        except Exception as e:
            logger.exception("Error updating %s: %s", noun, e)
            return jsonify({"error": f"Error updating {noun}"}), 500
        if updated is None:
            return jsonify({"error": f"{label} not found"}), 404
        return jsonify(updated), 200

    @bp.route(f"/api/{collection}/<doc_id>", methods=["DELETE"])
    @require_admin
    def delete_item(doc_id: str):
        try:
            delete_document(collection, doc_id, _db_path())
        except Exception as e:
            logger.exception("Error deleting %s: %s", noun, e)
            return jsonify({"error": f"Error deleting {noun}"}), 500
        return jsonify({"message": f"{label} deleted"}), 200

    return bp


achievements_bp = make_collection_blueprint("achievements", "Achievement")
projects_bp = make_collection_blueprint("projects", "Project")
