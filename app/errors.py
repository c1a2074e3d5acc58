# app/errors.py
from __future__ import annotations

from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Error with an HTTP status, rendered as {"error": message}."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFound(ApiError):
    status_code = 404


class StoreUnavailable(ApiError):
    """Raised when a route needs the document store but only the JSON fallback is active."""

    status_code = 400

    def __init__(self, message: str = "Document store unavailable"):
        super().__init__(message)


class PoolExhausted(ApiError):
    status_code = 409


def _flatten(messages, prefix: str = "") -> list[str]:
    out = []
    if isinstance(messages, dict):
        for key, val in messages.items():
            out.extend(_flatten(val, f"{prefix}{key}."))
    elif isinstance(messages, list):
        for val in messages:
            if isinstance(val, (dict, list)):
                out.extend(_flatten(val, prefix))
            else:
                out.append(f"{prefix.rstrip('.')}: {val}")
    else:
        out.append(f"{prefix.rstrip('.')}: {messages}")
    return out


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"error": "; ".join(_flatten(e.messages)), "errors": e.messages}), 400

    @app.errorhandler(404)
    def handle_404(e):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(405)
    def handle_405(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        app.logger.exception("Unhandled error: %s", e)
        return jsonify({"error": str(e)}), 500
