import json
import logging

import psycopg
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from blogapi.db import Database
from blogapi.errors import StoreUnavailable, ValidationFailure
from blogapi.post.repository import PostRepository

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send log records from every module to stderr in one format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(database: Database) -> Flask:
    """
    Application factory.

    The app does not open or close the database; whoever owns the handle
    does. The handle and a repository bound to it hang off the app.
    """
    app = Flask(__name__)

    app.database = database
    app.post_repository = PostRepository(database)

    # Register blueprints
    from blogapi.api.posts import bp as posts_bp

    app.register_blueprint(posts_bp, url_prefix="/posts")

    @app.route("/health")
    def health():
        if app.database.ping():
            return {"status": "ok", "database": "ok"}
        return {"status": "degraded", "database": "unavailable"}, 503

    register_error_handlers(app)

    return app


def register_error_handlers(app: Flask) -> None:
    """Render every error the API can produce as a JSON body."""

    @app.errorhandler(ValidationFailure)
    def handle_validation_failure(e: ValidationFailure):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(StoreUnavailable)
    def handle_store_unavailable(e: StoreUnavailable):
        logger.error("Store unavailable during %s %s: %s", request.method, request.path, e)
        return jsonify({"error": "Database unavailable"}), 503

    @app.errorhandler(psycopg.Error)
    def handle_store_error(e: psycopg.Error):
        logger.exception("Store error during %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Start from werkzeug's response so headers such as Allow survive
        response = e.get_response()
        response.data = json.dumps({"error": e.name})
        response.content_type = "application/json"
        return response
