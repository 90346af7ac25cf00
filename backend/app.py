import logging
import os

from flask import Flask, redirect, request
from flask_cors import CORS

from backend.core import config
from backend.routes.content import achievements_bp, projects_bp
from backend.routes.images import bp as images_bp
from backend.routes.resume import bp as resume_bp
from backend.routes.system import bp as system_bp

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    gunicorn_error = logging.getLogger("gunicorn.error")
    root = logging.getLogger()
    if gunicorn_error.handlers:
        root.handlers = gunicorn_error.handlers
        root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def create_app(overrides: dict | None = None) -> Flask:
    """Build the content API.

    Args:
        overrides: Flask config values replacing the environment defaults,
            e.g. ``{"DB_PATH": ..., "ADMIN_PASSWORD": ...}``.
    """
    app = Flask(__name__)
    app.config.update(
        ADMIN_PASSWORD=config.ADMIN_PASSWORD,
        DB_PATH=config.DB_PATH,
        DEFAULT_RESUME_URL=config.DEFAULT_RESUME_URL,
        CANONICAL_URL=config.CANONICAL_URL,
        LEGACY_HOSTS=config.LEGACY_HOSTS,
    )
    if overrides:
        app.config.update(overrides)
    CORS(app)

    @app.before_request
    def redirect_legacy_host():
        if request.host in app.config["LEGACY_HOSTS"]:
            target = app.config["CANONICAL_URL"].rstrip("/") + request.full_path.rstrip("?")
            return redirect(target, code=301)
        return None

    # register routes
    app.register_blueprint(achievements_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(resume_bp)
    app.register_blueprint(images_bp)
    app.register_blueprint(system_bp)
    return app


_configure_logging()

app = create_app()

if __name__ == "__main__":
    logger.info("Server running on port %s (env=%s)", config.PORT, config.ENV)
    app.run(host="0.0.0.0", port=config.PORT)
