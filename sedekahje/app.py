"""HTTP API serving institution records."""

from __future__ import annotations

import argparse
import json
import logging
import math
import signal

from flask import Flask, Response, g, jsonify, request
from pymongo.errors import PyMongoError

from .config import load_config
from .db import connect_db, disconnect_db
from .models import Institution, InstitutionValidationError
from .ratelimit import GCRARateLimiter
from .services import InstitutionNotFoundError, InstitutionService
from .validation import format_validation_errors

DEFAULT_PORT = 8080

logger = logging.getLogger(__name__)


def _text_error(message: str, status: int) -> Response:
    response = Response(message + "\n", status=status, content_type="text/plain; charset=utf-8")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def create_app(service: InstitutionService, limiter: GCRARateLimiter | None = None) -> Flask:
    """Build the Flask application; requests are rate limited per path."""
    if limiter is None:
        limiter = GCRARateLimiter()

    app = Flask(__name__)
    app.json.sort_keys = False

    @app.before_request
    def _log_and_limit():
        if request.url_rule is None:
            return None
        logger.info("Request: %s %s", request.method, request.path)
        result = limiter.allow(request.path)
        g.rate_limit = result
        if result.limited:
            return _text_error("limit exceeded", 429)
        return None

    @app.after_request
    def _rate_limit_headers(response):
        result = g.get("rate_limit")
        if result is not None:
            response.headers["X-RateLimit-Limit"] = str(result.limit)
            response.headers["X-RateLimit-Remaining"] = str(result.remaining)
            response.headers["X-RateLimit-Reset"] = str(math.ceil(result.reset_after))
            if result.retry_after is not None:
                response.headers["Retry-After"] = str(math.ceil(result.retry_after))
        return response

    @app.get("/api/health")
    def health():
        return Response(status=200, content_type="application/json")

    @app.get("/api/institutions")
    def list_institutions():
        try:
            institutions = service.get_institutions()
        except (PyMongoError, ValueError) as exc:
            return _text_error(str(exc), 500)
        return jsonify([institution.to_dict() for institution in institutions])

    @app.post("/api/institutions")
    def create_institution():
        try:
            institution = Institution.from_dict(json.loads(request.get_data()))
        except ValueError:
            return _text_error("Invalid request body", 400)

        try:
            institution.validate()
        except InstitutionValidationError as exc:
            return jsonify(format_validation_errors(exc)), 400

        try:
            service.create_institution(institution)
        except PyMongoError as exc:
            return _text_error(str(exc), 500)
        return jsonify(institution.to_dict())

    @app.get("/api/institutions/<slug>")
    def institution_by_slug(slug):
        try:
            institution = service.get_institution_by_slug(slug)
        except (InstitutionNotFoundError, PyMongoError, ValueError) as exc:
            return _text_error(str(exc), 500)
        return jsonify(institution.to_dict())

    return app


def main(argv=None) -> int:
    """Run the API server until interrupted."""
    parser = argparse.ArgumentParser(prog="sedekahje", description="Serve the institution API.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    config = load_config()
    client = connect_db(config.mongo_uri)
    app = create_app(InstitutionService.from_client(client), GCRARateLimiter())

    # SIGTERM stops the server the same way Ctrl+C does.
    previous = signal.signal(signal.SIGTERM, signal.default_int_handler)
    logger.info("Sedekahje")
    logger.info("Server running on :%d", args.port)
    try:
        app.run(host=args.host, port=args.port)
    except KeyboardInterrupt:
        logger.info("shutting down gracefully")
    finally:
        signal.signal(signal.SIGTERM, previous)
        logger.info("Server has shut down gracefully")
        try:
            disconnect_db(client)
        except PyMongoError as exc:
            logger.error("Error disconnecting from MongoDB: %s", exc)
        else:
            logger.info("Disconnected from MongoDB")
    return 0