"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify

from transcheck.config import Settings
from transcheck.core.provider import TranslationProvider
from transcheck.core.publisher import DiagnosticsCollector
from transcheck.exceptions import PayloadError
from transcheck.logger import get_logger

from .routes.documents import documents_bp
from .routes.projects import projects_bp
from .routes.queries import queries_bp
from .state import EXTENSION_KEY, EngineState

logger = get_logger(__name__)


def build_app(settings: Optional[Settings] = None) -> Flask:
    """Create the Flask application around a fresh TranslationProvider."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.config["JSON_AS_ASCII"] = False
    app.json.ensure_ascii = False

    collector = DiagnosticsCollector()
    provider = TranslationProvider(publisher=collector, settings=settings)
    app.extensions[EXTENSION_KEY] = EngineState(provider=provider, collector=collector)

    register_blueprints(app)
    register_default_routes(app)

    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(projects_bp, url_prefix="/api")
    app.register_blueprint(documents_bp, url_prefix="/api")
    app.register_blueprint(queries_bp, url_prefix="/api")


def register_default_routes(app: Flask) -> None:
    """Register the health route and JSON error handlers."""

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        return jsonify({"status": "ok"})

    @app.errorhandler(PayloadError)
    def bad_payload(e: PayloadError):
        logger.warning("Rejected request: %s", e)
        return jsonify({"error": str(e), "code": e.code, "details": e.details}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return jsonify({"error": "Internal server error"}), 500
