from __future__ import annotations

import traceback

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from ..app_logger import get_logger
from ..core.exceptions import DomainError

logger = get_logger("http")


def ok(message: str, status: int = 200, **payload):
    body = {"success": True, "message": message}
    body.update(payload)
    return jsonify(body), status


def fail(message: str, status: int = 400, *, error: Exception | None = None):
    body = {"success": False, "message": message}
    if error is not None and current_app.config.get("DEBUG"):
        body["error"] = str(error)
        body["trace"] = traceback.format_exception(type(error), error, error.__traceback__)
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), e.http_status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        messages = {404: "Resource not found", 405: "Method not allowed"}
        return fail(messages.get(e.code, e.description or e.name), e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return fail("Internal server error", 500, error=e)
