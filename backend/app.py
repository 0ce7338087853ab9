from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from xoso.service import configure_logging

from .config import load_settings
from .db import init_db
from .routes.health import bp as health_bp
from .routes.results import bp as results_bp


def create_app() -> Flask:
    settings = load_settings()
    configure_logging(settings.flask.debug)
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    init_db()

    app.register_blueprint(health_bp)
    app.register_blueprint(results_bp, url_prefix="/results")

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return jsonify({"error": exc.description}), exc.code
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app
